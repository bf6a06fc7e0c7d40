"""The `match` entry point.

Mapped matching works on Option and Result values:

    ```python
    match(Some(10), {'Some': lambda n: n + 1, 'None': lambda: 0})  # 11
    ```

Mapped patterns nest, and a level without a `_` default falls back to the
nearest enclosing one:

    ```python
    nested = match.compile({
        'Ok': {'Some': lambda n: f'found {n}'},
        '_': lambda: 'nothing',
    })
    nested(Ok(Some(10)))  # 'found 10'
    nested(Ok(Nothing))   # 'nothing'
    nested(Err('nan'))    # 'nothing'
    ```

Chained matching works on any value. Branches are `(condition, result)`
pairs tried in order; a trailing bare callable is the default:

    ```python
    match(7, [
        (5, 'five'),
        (lambda n: n < 10, '< 10'),
        lambda: 'other',
    ])  # '< 10'
    ```

A class used as a condition is an `isinstance` check, not a predicate call:
`(bool, 'flag')` matches booleans only. Wrap a predicate in a lambda to test
the value, e.g. `(lambda v: bool(v), 'truthy')`.

A result may be a coroutine function; its coroutine is returned untouched,
so every branch of such a pattern should return an awaitable.
"""

from __future__ import annotations

from typing import Any

from klaw_match._config import get_config
from klaw_match._logging import trace_logger
from klaw_match.errors import Exhausted, ExhaustedError
from klaw_match.matching.resolver import CompiledPattern, compile_pattern
from klaw_match.result import Err, Ok

__all__ = ['Match', 'Matcher', 'match']


class Matcher:
    """A compiled, reusable pattern. Call it with the value to match."""

    __slots__ = ('_pattern',)

    def __init__(self, pattern: CompiledPattern) -> None:
        self._pattern = pattern

    @property
    def pattern(self) -> CompiledPattern:
        """The compiled pattern."""
        return self._pattern

    @property
    def kind(self) -> str:
        """'chain' or 'mapped'."""
        return self._pattern.kind

    def __repr__(self) -> str:
        return f'Matcher(kind={self.kind!r})'

    def __call__(self, value: Any) -> Any:
        """Match value and return the selected branch's result.

        Raises:
            ExhaustedError: If no branch matches and no default is available.
            InvalidPatternError: If a mapped pattern meets a value that is not
                an Option or Result.
        """
        if not get_config().trace:
            return self._pattern.resolve(value)

        logger = trace_logger(self.kind, value_type=type(value).__name__)
        # Only selection is guarded; exhaustion from a nested match inside a
        # producer belongs to that match.
        try:
            selection = self._pattern.select(value)
        except ExhaustedError as exc:
            logger.debug('match.exhausted', variant=exc.variant)
            raise
        logger.debug('match.resolved')
        return selection.produce()

    def result(self, value: Any) -> Ok[Any] | Err[Exhausted]:
        """Match value, returning Err(Exhausted) instead of raising ExhaustedError."""
        try:
            return Ok(self(value))
        except ExhaustedError as exc:
            return Err(exc.to_struct())


class Match:
    """Callable namespace behind `match`.

    Example:
        ```python
        from klaw_match import match

        match(5, [(5, 'five'), lambda: 'other'])  # 'five'
        is_five = match.compile([(5, True), lambda: False])
        is_five(5)  # True
        ```
    """

    __slots__ = ()

    def __call__(self, value: Any, pattern: Any) -> Any:
        """Match value against a mapped or chained pattern.

        Args:
            value: The subject. Must be an Option or Result for mapped patterns.
            pattern: A mapping keyed by variant name, or a list of
                `(condition, result)` branches with an optional trailing default.
                Conditions are values (strict equality), predicates, classes
                (`isinstance`, so `bool` matches booleans rather than truthy
                values), templates, monad literals, `Fn` or `_`.

        Returns:
            The result of the first matching branch, or of the default.

        Raises:
            ExhaustedError: If no branch matches and no default is available.
            InvalidPatternError: If the pattern is malformed, or mapped and
                value is not an Option or Result.
        """
        return self.compile(pattern)(value)

    def compile(self, pattern: Any) -> Matcher:
        """Validate and compile a pattern once for repeated matching."""
        compiled = compile_pattern(pattern)
        if get_config().trace:
            trace_logger(compiled.kind).debug('pattern.compiled')
        return Matcher(compiled)

    def result(self, value: Any, pattern: Any) -> Ok[Any] | Err[Exhausted]:
        """Like calling `match`, but exhaustion is returned as Err(Exhausted).

        Malformed patterns still raise InvalidPatternError.
        """
        return self.compile(pattern).result(value)

    def __repr__(self) -> str:
        return 'match'


match: Match = Match()
