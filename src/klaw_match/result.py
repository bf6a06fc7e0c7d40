"""Result type: Ok[T] | Err[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_match.errors import UnwrapError
from klaw_match.option import _is_nan, _is_qty

if TYPE_CHECKING:
    from klaw_match.option import NothingType, Some

__all__ = [
    'Err',
    'Ok',
    'Result',
    'is_err',
    'is_ok',
    'is_result',
    'result_all',
    'result_any',
    'result_from',
    'result_from_nullable',
    'result_from_qty',
]


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Ok represents the successful outcome of an operation. It wraps a value
    that can be extracted, transformed, or matched on with `match`.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    tag = True
    variant = 'Ok'

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the contained value."""
        return iter(self.value)  # type: ignore[call-overload]

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        """Return False since this is Ok."""
        return False

    def is_like(self, other: object) -> bool:
        """Return True if other is also Ok, regardless of its value."""
        return isinstance(other, Ok)

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Since this is Ok, this always succeeds.
        """
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise an exception since this is Ok.

        Raises:
            UnwrapError: Always, since Ok has no error to unwrap.
        """
        raise UnwrapError(f'Failed to unwrap_err Result (found Ok): {self.value!r}')

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message since this is Ok."""
        raise UnwrapError(f'{msg}: {self.value!r}')

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def unwrap_unchecked(self) -> T:
        """Return the contained value without checking the tag."""
        return self.value

    def into[U](self, err: U = None) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the replacement for Err."""
        return self.value

    def into_tuple(self) -> tuple[None, T]:
        """Return (None, value)."""
        return (None, self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Convert to Some if the predicate accepts the value, else Nothing."""
        from klaw_match.option import Nothing, Some

        if predicate(self.value):
            return Some(self.value)
        return Nothing

    def flatten[U, E](self: Ok[Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Flatten a nested Result.

        Converts Result[Result[T, E], E] into Result[T, E].
        """
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err[F](self, _f: Callable[[object], F]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Apply f to the contained value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[Any], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Apply f to the contained value, ignoring the default factory."""
        return f(self.value)

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        """Return other since self is Ok."""
        return other

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def or_[F](self, _other: Ok[T] | Err[F]) -> Ok[T]:
        """Return self since this is Ok."""
        return self

    def or_else[F](self, _f: Callable[[object], Ok[T] | Err[F]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def ok(self) -> Some[T]:
        """Convert to Option, returning Some(value)."""
        from klaw_match.option import Some

        return Some(self.value)

    def err(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Ok."""
        from klaw_match.option import Nothing

        return Nothing


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Err represents the failure outcome of an operation. It wraps an error
    value that can be transformed, recovered from, or matched on.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    tag = False
    variant = 'Err'

    def __iter__(self) -> Iterator[Any]:
        """Iterate over nothing."""
        return iter(())

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def is_like(self, other: object) -> bool:
        """Return True if other is also Err, regardless of its error."""
        return isinstance(other, Err)

    def _raise(self, msg: str) -> NoReturn:
        if isinstance(self.error, BaseException):
            raise UnwrapError(msg) from self.error
        raise UnwrapError(msg)

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Err.

        Raises:
            UnwrapError: Always, chained to the error when it is an exception.
        """
        self._raise(f'Failed to unwrap Result (found Err): {self.error!r}')

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        self._raise(f'{msg}: {self.error!r}')

    def expect_err(self, _msg: str) -> E:
        """Return the contained error, ignoring the message."""
        return self.error

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def unwrap_unchecked(self) -> E:
        """Return the contained error without checking the tag."""
        return self.error

    def into[U](self, err: U = None) -> U:
        """Return the replacement value since this is Err."""
        return err

    def into_tuple(self) -> tuple[E, None]:
        """Return (error, None)."""
        return (self.error, None)

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        from klaw_match.option import Nothing

        return Nothing

    def flatten(self) -> Err[E]:
        """Return self since this is Err (nothing to flatten)."""
        return self

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default since there's no value to map."""
        return default

    def map_or_else[T, U](self, default: Callable[[E], U], _f: Callable[[T], U]) -> U:
        """Compute the default from the error."""
        return default(self.error)

    def and_[U, F](self, _other: Ok[U] | Err[F]) -> Err[E]:
        """Return self since this is Err."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        """Return other since this is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def ok(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Err."""
        from klaw_match.option import Nothing

        return Nothing

    def err(self) -> Some[E]:
        """Convert to Option, returning Some(error)."""
        from klaw_match.option import Some

        return Some(self.error)


type Result[T, E = Exception] = Ok[T] | Err[E]


def is_ok(value: object) -> TypeIs[Ok[Any]]:
    """Return True if value is an Ok."""
    return isinstance(value, Ok)


def is_err(value: object) -> TypeIs[Err[Any]]:
    """Return True if value is an Err."""
    return isinstance(value, Err)


def is_result(value: object) -> TypeIs[Ok[Any] | Err[Any]]:
    """Return True if value is a Result (Ok or Err)."""
    return isinstance(value, Ok | Err)


def result_from[T](value: T) -> Ok[T] | Err[Any]:
    """Create a Result from a value.

    Truthy values become Ok, exceptions become Err(exception) and falsy
    values become Err(None).

    Examples:
        >>> result_from(1)
        Ok(value=1)
        >>> result_from(0)
        Err(error=None)
    """
    if isinstance(value, BaseException):
        return Err(value)
    if not value or _is_nan(value):
        return Err(None)
    return Ok(value)


def result_from_nullable[T](value: T | None) -> Ok[T] | Err[None]:
    """Create a Result which is Ok unless value is None or NaN."""
    if value is None or _is_nan(value):
        return Err(None)
    return Ok(value)


def result_from_qty(value: float) -> Ok[float] | Err[None]:
    """Create a Result which is Ok when value is a non-negative integral number."""
    if _is_qty(value):
        return Ok(value)
    return Err(None)


def result_all[T, E](*results: Ok[T] | Err[E]) -> Ok[list[T]] | Err[E]:
    """Collect Results into an Ok of all values.

    Short-circuits on the first Err encountered.

    Examples:
        >>> result_all(Ok(1), Ok(2), Ok(3))
        Ok(value=[1, 2, 3])
        >>> result_all(Ok(1), Err('fail'), Ok(3))
        Err(error='fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def result_any[T, E](*results: Ok[T] | Err[E]) -> Ok[T] | Err[list[E]]:
    """Return the first Ok, or an Err of all errors if there is none.

    Examples:
        >>> result_any(Err('a'), Ok(2))
        Ok(value=2)
        >>> result_any(Err('a'), Err('b'))
        Err(error=['a', 'b'])
    """
    errors: list[E] = []
    for result in results:
        if isinstance(result, Ok):
            return result
        errors.append(result.error)
    return Err(errors)
