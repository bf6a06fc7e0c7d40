"""Error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'Exhausted',
    'ExhaustedError',
    'InvalidPattern',
    'InvalidPatternError',
    'MatchError',
    'UnwrapError',
]


class MatchError(Exception):
    """Base exception class for pattern matching errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from klaw_match import MatchError, match

        try:
            match(42, [(1, 'one')])
        except MatchError as e:
            print(e)  # [exhausted] No branch matched 42 ...
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


# --- Exhaustion ---


class Exhausted(msgspec.Struct, frozen=True, gc=False):
    """No branch matched and no default was available - struct variant for Result[T, Exhausted]."""

    kind: str
    value_repr: str
    variant: str | None = None

    def to_exception(self) -> ExhaustedError:
        """Convert to exception for raise-based code."""
        return ExhaustedError(self.kind, self.value_repr, self.variant)


class ExhaustedError(MatchError):
    """No branch matched and no default was available - exception variant.

    Raised when a pattern is incomplete for the given input. This says nothing
    about the input itself: an `Err` or `Nothing` that is matched completely
    never raises.
    """

    def __init__(self, kind: str, value_repr: str, variant: str | None = None) -> None:
        self.kind = kind
        self.value_repr = value_repr
        self.variant = variant
        msg = f'No branch matched {value_repr} and no default is available ({kind} pattern)'
        if variant is not None:
            msg = f'{msg}, variant {variant!r}'
        super().__init__(msg, code='exhausted')

    def to_struct(self) -> Exhausted:
        """Convert to struct for Result-based code."""
        return Exhausted(self.kind, self.value_repr, self.variant)


# --- Pattern shape ---


class InvalidPattern(msgspec.Struct, frozen=True, gc=False):
    """Pattern has an unsupported shape - struct variant for Result[T, InvalidPattern]."""

    reason: str

    def to_exception(self) -> InvalidPatternError:
        """Convert to exception for raise-based code."""
        return InvalidPatternError(self.reason)


class InvalidPatternError(MatchError, TypeError):
    """Pattern has an unsupported shape - exception variant.

    Also raised when a mapped pattern is applied to a value that is not an
    Option or Result, since keyed dispatch needs a variant tag.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason, code='invalid_pattern')

    def to_struct(self) -> InvalidPattern:
        """Convert to struct for Result-based code."""
        return InvalidPattern(self.reason)


# --- Unwrapping ---


class UnwrapError(RuntimeError):
    """A payload was extracted under the wrong tag assumption.

    This signals a programming error rather than a domain failure. Use
    `is_some()`/`is_ok()`, the `unwrap_or*` accessors or `match` to handle
    both variants without raising.
    """
