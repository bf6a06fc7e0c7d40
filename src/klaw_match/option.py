"""Option type: Some[T] | Nothing for optional values."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_match.errors import UnwrapError

if TYPE_CHECKING:
    from klaw_match.result import Err, Ok

__all__ = [
    'Nothing',
    'NothingType',
    'Option',
    'Some',
    'is_none',
    'is_option',
    'is_some',
    'option_all',
    'option_any',
    'option_from',
    'option_from_nullable',
    'option_from_qty',
]


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. It wraps a value that can be
    extracted, transformed, or matched on with `match`.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
    """

    value: T

    tag = True
    variant = 'Some'

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the contained value."""
        return iter(self.value)  # type: ignore[call-overload]

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def is_like(self, other: object) -> bool:
        """Return True if other is also Some, regardless of its value."""
        return isinstance(other, Some)

    def unwrap(self) -> T:
        """Return the contained Some value.

        Since this is Some, this always succeeds.
        """
        return self.value

    def expect(self, _msg: str) -> T:
        """Return the contained Some value, ignoring the message."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def unwrap_unchecked(self) -> T:
        """Return the contained value without checking the tag."""
        return self.value

    def into[U](self, none: U = None) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the replacement for Nothing."""
        return self.value

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return Some if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def flatten[U](self: Some[Some[U] | NothingType]) -> Some[U] | NothingType:
        """Flatten a nested Option.

        Converts Option[Option[T]] into Option[T].
        """
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Apply f to the contained value, ignoring the default."""
        return f(self.value)

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Apply f to the contained value, ignoring the default factory."""
        return f(self.value)

    def and_[U](self, other: Some[U] | NothingType) -> Some[U] | NothingType:
        """Return other since self is Some."""
        return other

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def or_(self, _other: Some[T] | NothingType) -> Some[T]:
        """Return self since this is Some."""
        return self

    def or_else(self, _f: Callable[[], Some[T] | NothingType]) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def ok_or[E](self, _err: E) -> Ok[T]:
        """Convert to Result, returning Ok(value).

        Args:
            _err: Ignored error value.

        Returns:
            Ok containing the value.
        """
        from klaw_match.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, _f: Callable[[], E]) -> Ok[T]:
        """Convert to Result, returning Ok(value) without calling the error factory."""
        from klaw_match.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    This is a singleton - use the `Nothing` constant instead of
    instantiating directly. Other instances compare equal to it.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    tag = False
    variant = 'None'

    def __iter__(self) -> Iterator[Any]:
        """Iterate over nothing."""
        return iter(())

    def is_some(self) -> TypeIs[Some[object]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing.

        This method provides type narrowing - after checking is_none(),
        the type checker knows the option is Nothing.
        """
        return True

    def is_like(self, other: object) -> bool:
        """Return True if other is also Nothing."""
        return isinstance(other, NothingType)

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Nothing.

        Raises:
            UnwrapError: Always, since Nothing has no value to unwrap.
        """
        raise UnwrapError('Failed to unwrap Option (found Nothing)')

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Raises:
            UnwrapError: Always, with the custom message.
        """
        raise UnwrapError(msg)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def unwrap_unchecked(self) -> None:
        """Return None, the empty payload of Nothing."""
        return None

    def into[U](self, none: U = None) -> U:
        """Return the replacement value since this is Nothing."""
        return none

    def filter[T](self, _predicate: Callable[[T], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        return self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self

    def map[T, U](self, _f: Callable[[T], U]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def map_or[T, U](self, default: U, _f: Callable[[T], U]) -> U:
        """Return the default since there's no value to map."""
        return default

    def map_or_else[T, U](self, default: Callable[[], U], _f: Callable[[T], U]) -> U:
        """Compute the default since there's no value to map."""
        return default()

    def and_[U](self, _other: Some[U] | NothingType) -> NothingType:
        """Return Nothing since self is Nothing."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Some[U] | NothingType]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def or_[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err).

        Args:
            err: The error value to wrap.

        Returns:
            Err containing the error.
        """
        from klaw_match.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        from klaw_match.result import Err

        return Err(f())


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def is_some(value: object) -> TypeIs[Some[Any]]:
    """Return True if value is a Some."""
    return isinstance(value, Some)


def is_none(value: object) -> TypeIs[NothingType]:
    """Return True if value is Nothing."""
    return isinstance(value, NothingType)


def is_option(value: object) -> TypeIs[Some[Any] | NothingType]:
    """Return True if value is an Option (Some or Nothing)."""
    return isinstance(value, Some | NothingType)


def _is_nan(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def option_from[T](value: T) -> Some[T] | NothingType:
    """Create an Option which is Some unless value is falsy, NaN or an exception.

    Examples:
        >>> option_from(1)
        Some(value=1)
        >>> option_from(0)
        NothingType()
        >>> option_from(ValueError('msg'))
        NothingType()
    """
    if not value or _is_nan(value) or isinstance(value, BaseException):
        return Nothing
    return Some(value)


def option_from_nullable[T](value: T | None) -> Some[T] | NothingType:
    """Create an Option which is Some unless value is None or NaN.

    Examples:
        >>> option_from_nullable(0)
        Some(value=0)
        >>> option_from_nullable(None)
        NothingType()
    """
    if value is None or _is_nan(value):
        return Nothing
    return Some(value)


def _is_qty(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return isinstance(value, float) and value.is_integer() and value >= 0


def option_from_qty(value: float) -> Some[float] | NothingType:
    """Create an Option which is Some when value is a non-negative integral number.

    Examples:
        >>> option_from_qty('test'.find('s'))
        Some(value=2)
        >>> option_from_qty('test'.find('z'))
        NothingType()
    """
    if _is_qty(value):
        return Some(value)
    return Nothing


def option_all[T](*options: Some[T] | NothingType) -> Some[list[T]] | NothingType:
    """Collect Options into a Some of all values, or Nothing if any is Nothing.

    Examples:
        >>> option_all(Some(1), Some(2))
        Some(value=[1, 2])
        >>> option_all(Some(1), Nothing)
        NothingType()
    """
    values: list[T] = []
    for option in options:
        if isinstance(option, NothingType):
            return Nothing
        values.append(option.value)
    return Some(values)


def option_any[T](*options: Some[T] | NothingType) -> Some[T] | NothingType:
    """Return the first Some, or Nothing if there is none."""
    for option in options:
        if isinstance(option, Some):
            return option
    return Nothing
