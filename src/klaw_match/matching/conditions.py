"""Branch conditions, compiled once into a closed set of variants.

A declared condition is classified by `compile_condition` in this order:

1. `_` / `Default`          -> AnyCondition
2. `Fn(f)`                  -> IdentityCondition(f)
3. `Some`/`Ok`/`Err`/`Nothing` literal -> MonadCondition
4. a class                  -> TypeCondition (isinstance)
5. any other callable       -> PredicateCondition
6. a mapping                -> MappingTemplate
7. a list or tuple          -> SequenceTemplate
8. anything else            -> EqualityCondition

Inside a monad literal every callable compiles to an IdentityCondition, so
`Some(is_even)` matches `Some(is_even)` and never calls `is_even`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import msgspec

from klaw_match.matching.markers import Fn, _AnyValue
from klaw_match.option import NothingType, Some
from klaw_match.result import Err, Ok

__all__ = [
    'AnyCondition',
    'Condition',
    'EqualityCondition',
    'IdentityCondition',
    'MappingTemplate',
    'MonadCondition',
    'PredicateCondition',
    'SequenceTemplate',
    'TypeCondition',
    'compile_condition',
    'evaluate',
    'is_monad',
]

_MONAD_TYPES = (Some, NothingType, Ok, Err)
_MISSING = object()


def is_monad(value: object) -> bool:
    """Return True if value is an Option or Result variant."""
    return isinstance(value, _MONAD_TYPES)


class Condition(msgspec.Struct, frozen=True):
    """Base class of compiled conditions."""

    def test(self, value: Any) -> bool:
        raise NotImplementedError


class AnyCondition(Condition, frozen=True):
    """Matches every value."""

    def test(self, value: Any) -> bool:  # noqa: ARG002
        return True


class IdentityCondition(Condition, frozen=True):
    """Matches only the very same object (functions treated as values)."""

    target: Any

    def test(self, value: Any) -> bool:
        return value is self.target


class MonadCondition(Condition, frozen=True):
    """Matches a monad of the same variant whose payload matches `inner`."""

    variant: type
    inner: Condition

    def test(self, value: Any) -> bool:
        if type(value) is not self.variant:
            return False
        return self.inner.test(value.unwrap_unchecked())


class TypeCondition(Condition, frozen=True):
    """Matches instances of a class."""

    cls: type

    def test(self, value: Any) -> bool:
        return isinstance(value, self.cls)


class PredicateCondition(Condition, frozen=True):
    """Matches when the predicate returns a truthy value."""

    predicate: Callable[[Any], Any]

    def test(self, value: Any) -> bool:
        return bool(self.predicate(value))


class MappingTemplate(Condition, frozen=True):
    """Partial match over keys.

    Mapping values are looked up by item, any other object by attribute.
    Keys of the value that the template does not name are ignored.
    """

    entries: tuple[tuple[Any, Condition], ...]

    def test(self, value: Any) -> bool:
        if isinstance(value, Mapping):
            lookup = _item_lookup
        else:
            lookup = _attr_lookup
        for key, condition in self.entries:
            found = lookup(value, key)
            if found is _MISSING or not condition.test(found):
                return False
        return True


class SequenceTemplate(Condition, frozen=True):
    """Partial match over indexes; every template index must exist in the value."""

    items: tuple[Condition, ...]

    def test(self, value: Any) -> bool:
        if not _is_sequence(value) or len(value) < len(self.items):
            return False
        return all(condition.test(item) for condition, item in zip(self.items, value, strict=False))


class EqualityCondition(Condition, frozen=True):
    """Strict equality: booleans only ever equal booleans."""

    expected: Any

    def test(self, value: Any) -> bool:
        expected = self.expected
        if isinstance(expected, bool) or isinstance(value, bool):
            return type(expected) is type(value) and expected == value
        return bool(expected == value)


_ANY = AnyCondition()


def _item_lookup(value: Mapping[Any, Any], key: Any) -> Any:
    # Membership first: indexing a defaultdict or Counter invents missing keys.
    try:
        if key not in value:
            return _MISSING
        return value[key]
    except (KeyError, TypeError):
        return _MISSING


def _attr_lookup(value: Any, key: Any) -> Any:
    if not isinstance(key, str):
        return _MISSING
    return getattr(value, key, _MISSING)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray)


def compile_condition(raw: Any, *, opaque: bool = False) -> Condition:
    """Classify a declared condition into its compiled variant.

    Args:
        raw: The condition as written in the pattern.
        opaque: Compare callables by identity instead of calling them. Set
            for everything nested inside a monad literal.

    Returns:
        The compiled Condition.
    """
    if isinstance(raw, _AnyValue):
        return _ANY
    if isinstance(raw, Fn):
        return IdentityCondition(raw.fn)
    if is_monad(raw):
        return MonadCondition(type(raw), compile_condition(raw.unwrap_unchecked(), opaque=True))
    if callable(raw):
        if opaque:
            return IdentityCondition(raw)
        if isinstance(raw, type):
            return TypeCondition(raw)
        return PredicateCondition(raw)
    if isinstance(raw, Mapping):
        return MappingTemplate(tuple((key, compile_condition(item, opaque=opaque)) for key, item in raw.items()))
    if isinstance(raw, list | tuple):
        return SequenceTemplate(tuple(compile_condition(item, opaque=opaque) for item in raw))
    return EqualityCondition(raw)


def evaluate(condition: Any, value: Any) -> bool:
    """Return True if value satisfies a declared condition.

    Examples:
        >>> evaluate(Some(5), Some(5))
        True
        >>> evaluate(Ok(1), Err(1))
        False
        >>> evaluate({'a': _}, {'a': None, 'b': 2})
        True
    """
    return compile_condition(condition).test(value)
