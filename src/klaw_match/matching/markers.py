"""Pattern markers: the `_` any-value placeholder and the `Fn` wrapper."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import msgspec

__all__ = ['Default', 'Fn', '_']


class _AnyValue:
    """Sentinel marker matching any value at its position."""

    __slots__ = ()

    def __repr__(self) -> str:
        return '_'

    def __reduce__(self) -> str:
        return '_'


_: Any = _AnyValue()
"""Matches any value. Inside a template the key or index must still exist."""

Default: Any = _
"""Alias of `_`."""


class Fn[F: Callable[..., Any]](msgspec.Struct, frozen=True):
    """Treat a function as a value inside a chained pattern.

    Bare functions in a chain are called: as filters in the condition
    position and as producers in the result position. Wrapping a function
    with `Fn` makes the engine compare it by identity as a condition and
    return it unchanged as a result.

    Calling the wrapper with no arguments returns the wrapped function.

    Example:
        ```python
        def one(): return 1
        def two(): return 2

        pick = match.compile([
            (Fn(one), 'one'),
            (Fn(two), Fn(two)),
            lambda: None,
        ])
        pick(one)  # 'one'
        pick(two)  # two (the function itself)
        ```
    """

    fn: F

    def __post_init__(self) -> None:
        if not callable(self.fn):
            msg = f'Fn expects a callable, got {type(self.fn).__name__}'
            raise TypeError(msg)

    def __call__(self) -> F:
        return self.fn
