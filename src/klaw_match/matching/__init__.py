"""Runtime pattern matching over arbitrary values, Option and Result.

    from klaw_match.matching import match, Fn, _
"""

from klaw_match.matching.api import Match, Matcher, match
from klaw_match.matching.conditions import compile_condition, evaluate, is_monad
from klaw_match.matching.markers import Default, Fn, _
from klaw_match.matching.resolver import compile_pattern

__all__ = [
    'Default',
    'Fn',
    'Match',
    'Matcher',
    '_',
    'compile_condition',
    'compile_pattern',
    'evaluate',
    'is_monad',
    'match',
]
