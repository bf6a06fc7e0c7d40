"""Tests for condition compilation and evaluation."""

from collections import Counter, defaultdict
from dataclasses import dataclass

import pytest

from klaw_match import Err, Fn, Nothing, NothingType, Ok, Some, _, evaluate
from klaw_match.matching.conditions import (
    AnyCondition,
    EqualityCondition,
    IdentityCondition,
    MappingTemplate,
    MonadCondition,
    PredicateCondition,
    SequenceTemplate,
    TypeCondition,
    compile_condition,
)


def is_even(n: int) -> bool:
    return n % 2 == 0


@dataclass
class Point:
    x: int
    y: int


class TestCompileCondition:
    """Tests for the classification order of declared conditions."""

    def test_any_marker(self):
        """The `_` marker compiles to AnyCondition."""
        assert isinstance(compile_condition(_), AnyCondition)

    def test_fn_wrapper(self):
        """Fn compiles to an identity check on the wrapped function."""
        condition = compile_condition(Fn(is_even))
        assert condition == IdentityCondition(is_even)

    def test_monad_literal(self):
        """Monad literals keep their variant type."""
        condition = compile_condition(Some(5))
        assert isinstance(condition, MonadCondition)
        assert condition.variant is Some
        assert condition.inner == EqualityCondition(5)
        assert compile_condition(Nothing).variant is NothingType

    def test_monad_literal_makes_callables_opaque(self):
        """Callables inside a monad literal are compared by identity."""
        condition = compile_condition(Ok({'check': is_even}))
        assert condition.inner == MappingTemplate((('check', IdentityCondition(is_even)),))

    def test_class(self):
        """Classes compile to isinstance checks."""
        assert compile_condition(int) == TypeCondition(int)

    def test_predicate(self):
        """Other callables compile to predicates."""
        assert compile_condition(is_even) == PredicateCondition(is_even)

    def test_templates(self):
        """Mappings and lists compile to templates."""
        assert isinstance(compile_condition({'a': 1}), MappingTemplate)
        assert isinstance(compile_condition([1, _]), SequenceTemplate)
        assert isinstance(compile_condition((1,)), SequenceTemplate)

    def test_primitive(self):
        """Everything else compiles to equality."""
        assert compile_condition('x') == EqualityCondition('x')
        assert compile_condition(None) == EqualityCondition(None)


class TestEquality:
    """Tests for strict equality of primitives."""

    def test_equal_values(self):
        """Equal primitives match."""
        assert evaluate(5, 5)
        assert evaluate('a', 'a')
        assert evaluate(None, None)
        assert not evaluate(5, 6)
        assert not evaluate('5', 5)

    def test_numeric_types(self):
        """Numbers compare by value across int and float."""
        assert evaluate(1, 1.0)

    def test_booleans_are_strict(self):
        """Booleans never equal integers."""
        assert evaluate(True, True)
        assert not evaluate(True, 1)
        assert not evaluate(1, True)
        assert not evaluate(0, False)


class TestPredicates:
    """Tests for predicate and type conditions."""

    def test_predicate_called(self):
        """A predicate matches when it returns a truthy value."""
        assert evaluate(is_even, 4)
        assert not evaluate(is_even, 3)
        assert evaluate(lambda s: s, 'non-empty')
        assert not evaluate(lambda s: s, '')

    def test_predicate_errors_propagate(self):
        """Exceptions raised by predicates are not swallowed."""
        with pytest.raises(ZeroDivisionError):
            evaluate(lambda n: 1 / n, 0)

    def test_type(self):
        """Classes match by isinstance."""
        assert evaluate(int, 5)
        assert evaluate(int, True)
        assert not evaluate(str, 5)
        assert evaluate(Point, Point(1, 2))


class TestFnIdentity:
    """Tests for functions treated as values."""

    def test_identity(self):
        """Fn matches only the very same function."""
        assert evaluate(Fn(is_even), is_even)
        assert not evaluate(Fn(is_even), lambda n: n % 2 == 0)
        assert not evaluate(Fn(is_even), 4)

    def test_not_invoked(self):
        """The wrapped function is never called."""
        calls = []

        def spy(value):
            calls.append(value)
            return True

        assert not evaluate(Fn(spy), 1)
        assert calls == []

    def test_fn_requires_callable(self):
        """Fn rejects non-callables."""
        with pytest.raises(TypeError, match='callable'):
            Fn(5)

    def test_fn_call_returns_function(self):
        """Calling the wrapper returns the wrapped function."""
        assert Fn(is_even)() is is_even


class TestMonadConditions:
    """Tests for monad literal conditions."""

    def test_exact_variant_and_payload(self):
        """Tag, variant and payload must all match."""
        assert evaluate(Some(5), Some(5))
        assert not evaluate(Some(5), Some(6))
        assert not evaluate(Ok(1), Err(1))
        assert not evaluate(Some(1), Ok(1))
        assert evaluate(Nothing, Nothing)
        assert not evaluate(Nothing, Some(None))

    def test_non_monad_value(self):
        """Plain values never match monad literals."""
        assert not evaluate(Some(5), 5)
        assert not evaluate(Nothing, None)

    def test_any_payload(self):
        """`_` inside a monad literal matches any payload of that variant."""
        assert evaluate(Ok(_), Ok('anything'))
        assert not evaluate(Ok(_), Err('anything'))

    def test_nested_template(self):
        """Templates inside monad literals are still structural."""
        assert evaluate(Ok({'a': 1}), Ok({'a': 1, 'b': 2}))
        assert not evaluate(Ok({'a': 1}), Ok({'a': 2}))
        assert evaluate(Some(Ok(_)), Some(Ok(3)))

    def test_predicate_inside_is_opaque(self):
        """A predicate inside a monad literal is compared, not called."""
        assert not evaluate(Some(is_even), Some(4))
        assert evaluate(Some(is_even), Some(is_even))


class TestMappingTemplates:
    """Tests for partial mapping templates."""

    def test_partial_match(self):
        """Only the keys named by the template are checked."""
        assert evaluate({'a': 5}, {'a': 5})
        assert evaluate({'a': 5}, {'a': 5, 'b': 1})
        assert not evaluate({'a': 5}, {'a': 50})
        assert not evaluate({'a': 5}, {'b': 5})

    def test_nested(self):
        """Template values are conditions themselves."""
        template = {'b': {'c': 5}, 'a': lambda n: n > 10}
        assert evaluate(template, {'a': 50, 'b': {'c': 5}})
        assert not evaluate(template, {'a': 5, 'b': {'c': 5}})

    def test_any_requires_key(self):
        """`_` matches any value, including None, but the key must exist."""
        assert evaluate({'a': _}, {'a': None})
        assert not evaluate({'a': _}, {'b': 1})

    def test_empty_template(self):
        """An empty template matches any mapping."""
        assert evaluate({}, {'a': 1})

    def test_attributes(self):
        """Non-mapping values are matched by attribute."""
        assert evaluate({'x': 1}, Point(1, 2))
        assert evaluate({'x': 1, 'y': _}, Point(1, 2))
        assert not evaluate({'x': 2}, Point(1, 2))
        assert not evaluate({'z': _}, Point(1, 2))

    def test_non_string_keys_on_objects(self):
        """Non-string keys never match attributes."""
        assert not evaluate({1: _}, Point(1, 2))

    def test_primitive_value(self):
        """Primitives have no keys to match."""
        assert not evaluate({'a': 5}, 5)
        assert not evaluate({'a': 5}, None)

    def test_default_factory_keys_are_missing(self):
        """A defaultdict key that was never set is absent, and stays unset."""
        counts = defaultdict(int)
        assert not evaluate({'a': _}, counts)
        assert not evaluate({'a': 0}, counts)
        assert dict(counts) == {}
        counts['a'] += 1
        assert evaluate({'a': 1}, counts)

    def test_counter_keys_are_missing(self):
        """A Counter reports 0 for absent keys, but they still do not match."""
        assert not evaluate({'a': 0}, Counter())
        assert evaluate({'a': 2}, Counter('aab'))


class TestSequenceTemplates:
    """Tests for partial sequence templates."""

    def test_prefix_match(self):
        """The template checks the leading indexes only."""
        assert evaluate([1, 2], [1, 2, 3])
        assert not evaluate([1, 2], [1, 3, 3])

    def test_length_required(self):
        """Every template index must exist in the value."""
        assert not evaluate([1, 2, 3], [1, 2])
        assert not evaluate([_], [])

    def test_holes(self):
        """`_` skips an index without constraining it."""
        template = [_, 6, 9, _]
        assert evaluate(template, [1, 6, 9, 0])
        assert evaluate(template, [None, 6, 9, None, 5])
        assert not evaluate(template, [1, 6, 9])
        assert not evaluate(template, [1, 6, 8, 0])

    def test_tuples(self):
        """Tuples and lists are interchangeable."""
        assert evaluate((1, _), [1, 2])
        assert evaluate([1, _], (1, 2))

    def test_strings_are_not_sequences(self):
        """Strings and bytes are primitives, not sequences."""
        assert not evaluate(['a', 'b'], 'ab')
        assert not evaluate([97], b'a')

    def test_non_sequence(self):
        """Mappings and primitives never match a sequence template."""
        assert not evaluate([1], {0: 1})
        assert not evaluate([1], 1)
