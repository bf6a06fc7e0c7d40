"""klaw-match: Option/Result types and runtime pattern matching for Python 3.13+.

Flat imports (preferred):
    from klaw_match import Option, Some, Nothing, Result, Ok, Err
    from klaw_match import match, Fn, _

Submodule imports (for organization):
    from klaw_match.option import Some, Nothing, Option
    from klaw_match.result import Ok, Err, Result
    from klaw_match.matching import match, Fn, _
    from klaw_match.decorators import safe, safe_option
"""

# Configuration
from klaw_match._config import MatchConfig, get_config, init

# Decorators
from klaw_match.decorators import safe, safe_async, safe_option, safe_option_async

# Errors
from klaw_match.errors import (
    Exhausted,
    ExhaustedError,
    InvalidPattern,
    InvalidPatternError,
    MatchError,
    UnwrapError,
)

# Matching
from klaw_match.matching import (
    Default,
    Fn,
    Match,
    Matcher,
    _,
    evaluate,
    is_monad,
    match,
)

# Option types
from klaw_match.option import (
    Nothing,
    NothingType,
    Option,
    Some,
    is_none,
    is_option,
    is_some,
    option_all,
    option_any,
    option_from,
    option_from_nullable,
    option_from_qty,
)

# Result types
from klaw_match.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
    is_result,
    result_all,
    result_any,
    result_from,
    result_from_nullable,
    result_from_qty,
)

type MonadValue = Option[object] | Result[object, object]

__all__ = [
    'Default',
    'Err',
    'Exhausted',
    'ExhaustedError',
    'Fn',
    'InvalidPattern',
    'InvalidPatternError',
    'Match',
    'MatchConfig',
    'MatchError',
    'Matcher',
    'MonadValue',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'Result',
    'Some',
    'UnwrapError',
    '_',
    'evaluate',
    'get_config',
    'init',
    'is_err',
    'is_monad',
    'is_none',
    'is_ok',
    'is_option',
    'is_result',
    'is_some',
    'match',
    'option_all',
    'option_any',
    'option_from',
    'option_from_nullable',
    'option_from_qty',
    'result_all',
    'result_any',
    'result_from',
    'result_from_nullable',
    'result_from_qty',
    'safe',
    'safe_async',
    'safe_option',
    'safe_option_async',
]
