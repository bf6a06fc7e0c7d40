"""@safe and @safe_option decorators for catching exceptions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar, overload

import wrapt

from klaw_match.option import Nothing, NothingType, Some
from klaw_match.result import Err, Ok

__all__ = ['safe', 'safe_async', 'safe_option', 'safe_option_async']

P = ParamSpec('P')
T = TypeVar('T')
E = TypeVar('E', bound=BaseException)


@overload
def safe[**P, T](
    func: Callable[P, T],
) -> Callable[P, Ok[T] | Err[Exception]]: ...


@overload
def safe[E: BaseException](
    func: None = None,
    *,
    exceptions: tuple[type[E], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Ok[T] | Err[E]]]: ...


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Decorator that catches exceptions and returns Err.

    Wraps a function so that it returns Ok(value) on success and
    Err(exception) if an exception is raised.

    Can be used with or without arguments:
        @safe
        def risky(): ...

        @safe(exceptions=(ValueError, TypeError))
        def specific(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to (Exception,).

    Returns:
        A wrapped function that returns Result[T, E] instead of T.

    Example:
        ```python
        @safe
        def divide(a: int, b: int) -> float:
            return a / b
        divide(10, 2)
        # Ok(value=5.0)
        divide(10, 0)
        # Err(error=ZeroDivisionError('division by zero'))
        ```
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[Any]:
        try:
            return Ok(wrapped(*args, **kwargs))
        except catch as e:
            return Err(e)

    if func is not None:
        return wrapper(func)
    return wrapper


def safe_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Async version of @safe.

    Example:
        ```python
        @safe_async
        async def fetch(key: str) -> bytes:
            return await store.get(key)

        await fetch('missing')  # Err(error=KeyError('missing'))
        ```
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[Any]:
        try:
            return Ok(await wrapped(*args, **kwargs))
        except catch as e:
            return Err(e)

    if func is not None:
        return wrapper(func)
    return wrapper


def safe_option[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Decorator returning Some(value) on success and Nothing if an exception is raised.

    Example:
        ```python
        @safe_option
        def first(items: list[int]) -> int:
            return items[0]
        first([1, 2])  # Some(value=1)
        first([])      # NothingType()
        ```
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Some[T] | NothingType:
        try:
            return Some(wrapped(*args, **kwargs))
        except catch:
            return Nothing

    if func is not None:
        return wrapper(func)
    return wrapper


def safe_option_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[Any], ...] | None = None,
) -> Any:
    """Async version of @safe_option."""
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Some[T] | NothingType:
        try:
            return Some(await wrapped(*args, **kwargs))
        except catch:
            return Nothing

    if func is not None:
        return wrapper(func)
    return wrapper
