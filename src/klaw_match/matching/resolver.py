"""Compiled patterns: chained and mapped branch resolution.

Patterns are validated and compiled once into immutable structs. Resolving a
compiled pattern never re-inspects the declared conditions.
"""

from __future__ import annotations

import inspect
import reprlib
from collections.abc import Callable, Mapping
from typing import Any

import msgspec

from klaw_match.errors import ExhaustedError, InvalidPatternError
from klaw_match.matching.conditions import Condition, compile_condition, is_monad
from klaw_match.matching.markers import Fn

__all__ = [
    'Branch',
    'CompiledChain',
    'CompiledMapped',
    'CompiledPattern',
    'Literal',
    'Outcome',
    'Producer',
    'Selection',
    'compile_chain',
    'compile_mapped',
    'compile_outcome',
    'compile_pattern',
]

_VARIANT_KEYS = {
    'Some': 'Some',
    'None': 'None',
    'Nothing': 'None',
    'Ok': 'Ok',
    'Err': 'Err',
}
_DEFAULT_KEY = '_'
_PROBE = object()

_repr = reprlib.Repr()
_repr.maxstring = 60
_repr.maxother = 60


def _describe(value: Any) -> str:
    return _repr.repr(value)


# =============================================================================
# Outcomes
# =============================================================================


class Outcome(msgspec.Struct, frozen=True):
    """What a selected branch evaluates to."""

    def produce(self, value: Any) -> Any:
        """Compute the result for the matched subject."""
        raise NotImplementedError

    def produce_bare(self) -> Any:
        """Compute the result when there is no subject (Nothing arm, `_` default)."""
        raise NotImplementedError


class Literal(Outcome, frozen=True):
    """A value returned as is."""

    value: Any

    def produce(self, value: Any) -> Any:  # noqa: ARG002
        return self.value

    def produce_bare(self) -> Any:
        return self.value


class Producer(Outcome, frozen=True):
    """A callable invoked to compute the result.

    Arity is probed once at compile time: the subject is passed when the
    callable accepts one positional argument.
    """

    func: Callable[..., Any]
    takes_value: bool
    takes_nothing: bool

    def produce(self, value: Any) -> Any:
        if self.takes_value:
            return self.func(value)
        return self.func()

    def produce_bare(self) -> Any:
        return self.func()


def _binds(signature: inspect.Signature, *args: Any) -> bool:
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


def _arity(func: Callable[..., Any]) -> tuple[bool, bool]:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins): assume both forms work.
        return True, True
    return _binds(signature, _PROBE), _binds(signature)


def compile_outcome(raw: Any) -> Outcome:
    """Classify a declared branch result.

    `Fn(f)` returns `f` itself, any other callable is a producer and
    everything else is a literal.
    """
    if isinstance(raw, Fn):
        return Literal(raw.fn)
    if callable(raw):
        takes_value, takes_nothing = _arity(raw)
        if not (takes_value or takes_nothing):
            msg = f'Result callable {raw!r} must accept zero or one positional argument'
            raise InvalidPatternError(msg)
        return Producer(raw, takes_value, takes_nothing)
    return Literal(raw)


def _compile_bare(raw: Any, key: str) -> Outcome:
    if isinstance(raw, Mapping | list | tuple):
        msg = f'{key!r} arm cannot hold a nested pattern'
        raise InvalidPatternError(msg)
    outcome = compile_outcome(raw)
    if isinstance(outcome, Producer) and not outcome.takes_nothing:
        msg = f'{key!r} arm must be callable without arguments'
        raise InvalidPatternError(msg)
    return outcome


# =============================================================================
# Patterns
# =============================================================================


class Selection(msgspec.Struct, frozen=True):
    """The outcome chosen for a subject, not yet produced."""

    outcome: Outcome
    subject: Any
    bare: bool = False

    def produce(self) -> Any:
        """Run the chosen outcome."""
        if self.bare:
            return self.outcome.produce_bare()
        return self.outcome.produce(self.subject)


class CompiledPattern(msgspec.Struct, frozen=True):
    """Base class of compiled patterns."""

    kind = 'pattern'

    def select(self, value: Any, fallback: Outcome | None = None) -> Selection:
        """Choose the outcome for value without running it.

        Args:
            value: The subject being matched.
            fallback: Default inherited from an enclosing mapped level.

        Raises:
            ExhaustedError: If no branch matches and no default is available.
        """
        raise NotImplementedError

    def resolve(self, value: Any, fallback: Outcome | None = None) -> Any:
        """Select a branch for value and produce its result."""
        return self.select(value, fallback).produce()


class Branch(msgspec.Struct, frozen=True):
    """A (condition, outcome) pair of a chain."""

    condition: Condition
    outcome: Outcome


class CompiledChain(CompiledPattern, frozen=True):
    """Ordered branches; the first matching condition wins."""

    branches: tuple[Branch, ...]
    default: Outcome | None = None

    kind = 'chain'

    def select(self, value: Any, fallback: Outcome | None = None) -> Selection:
        for branch in self.branches:
            if branch.condition.test(value):
                return Selection(branch.outcome, value)
        if self.default is not None:
            return Selection(self.default, value)
        if fallback is not None:
            return Selection(fallback, value, bare=True)
        raise ExhaustedError(self.kind, _describe(value))


class CompiledMapped(CompiledPattern, frozen=True):
    """Arms keyed by variant name, for Option and Result values only.

    A level without its own `_` default inherits the nearest enclosing one.
    """

    arms: dict[str, Outcome | CompiledPattern]
    default: Outcome | None = None

    kind = 'mapped'

    def select(self, value: Any, fallback: Outcome | None = None) -> Selection:
        if not is_monad(value):
            msg = f'Mapped patterns only match Option or Result values, got {type(value).__name__}'
            raise InvalidPatternError(msg)
        default = self.default if self.default is not None else fallback
        arm = self.arms.get(value.variant)
        if arm is None:
            if default is None:
                raise ExhaustedError(self.kind, _describe(value), value.variant)
            return Selection(default, value, bare=True)
        if isinstance(arm, CompiledPattern):
            return arm.select(value.unwrap_unchecked(), default)
        return Selection(arm, value.unwrap_unchecked(), bare=value.variant == 'None')


def compile_chain(pattern: list[Any] | tuple[Any, ...]) -> CompiledChain:
    """Compile `[(condition, result), ..., default?]` into a CompiledChain."""
    items = list(pattern)
    default = None
    if items and callable(items[-1]):
        default = compile_outcome(items.pop())
    branches = []
    for index, item in enumerate(items):
        if not isinstance(item, list | tuple) or len(item) != 2:
            msg = f'Branch {index} must be a (condition, result) pair, got {_describe(item)}'
            raise InvalidPatternError(msg)
        condition, result = item
        branches.append(Branch(compile_condition(condition), compile_outcome(result)))
    return CompiledChain(tuple(branches), default)


def compile_mapped(pattern: Mapping[str, Any]) -> CompiledMapped:
    """Compile `{'Some': ..., 'None': ..., 'Ok': ..., 'Err': ..., '_': ...}`."""
    arms: dict[str, Outcome | CompiledPattern] = {}
    default = None
    for key, raw in pattern.items():
        if key == _DEFAULT_KEY:
            default = _compile_bare(raw, key)
            continue
        variant = _VARIANT_KEYS.get(key) if isinstance(key, str) else None
        if variant is None:
            msg = f'Unknown mapped pattern key {key!r}, expected Some, None, Ok, Err or _'
            raise InvalidPatternError(msg)
        if variant in arms:
            msg = f'Duplicate arm for variant {variant!r}'
            raise InvalidPatternError(msg)
        if variant == 'None':
            arms[variant] = _compile_bare(raw, key)
        elif isinstance(raw, Mapping):
            arms[variant] = compile_mapped(raw)
        elif isinstance(raw, list | tuple):
            arms[variant] = compile_chain(raw)
        else:
            arms[variant] = compile_outcome(raw)
    return CompiledMapped(arms, default)


def compile_pattern(pattern: Any) -> CompiledPattern:
    """Compile a mapped or chained pattern.

    Raises:
        InvalidPatternError: If the pattern is neither a mapping nor a
            list/tuple of branches, or one of its parts is malformed.
    """
    if isinstance(pattern, Mapping):
        return compile_mapped(pattern)
    if isinstance(pattern, list | tuple):
        return compile_chain(pattern)
    msg = f'Pattern must be a mapping or a list of branches, got {type(pattern).__name__}'
    raise InvalidPatternError(msg)
