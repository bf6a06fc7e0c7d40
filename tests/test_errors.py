"""Tests for error types and their struct/exception conversions."""

import msgspec
import pytest

from klaw_match import (
    Exhausted,
    ExhaustedError,
    InvalidPattern,
    InvalidPatternError,
    MatchError,
    UnwrapError,
)


class TestMatchError:
    """Tests for the MatchError base."""

    def test_str_with_code(self):
        """The code is rendered as a prefix."""
        assert str(MatchError('boom', code='x')) == '[x] boom'

    def test_str_without_code(self):
        """Without a code only the message is rendered."""
        err = MatchError('boom')
        assert str(err) == 'boom'
        assert err.code is None
        assert err.message == 'boom'


class TestExhausted:
    """Tests for Exhausted / ExhaustedError."""

    def test_exception_fields(self):
        """ExhaustedError carries kind, value and code."""
        err = ExhaustedError('chain', '42')
        assert err.kind == 'chain'
        assert err.value_repr == '42'
        assert err.variant is None
        assert err.code == 'exhausted'
        assert 'No branch matched 42' in str(err)
        assert str(err).startswith('[exhausted]')

    def test_variant_in_message(self):
        """A variant is mentioned when present."""
        err = ExhaustedError('mapped', 'Err(error=1)', 'Err')
        assert "variant 'Err'" in str(err)

    def test_is_match_error(self):
        """ExhaustedError is catchable as MatchError."""
        with pytest.raises(MatchError):
            raise ExhaustedError('chain', '1')

    def test_struct_round_trip(self):
        """to_struct/to_exception preserve fields."""
        struct = ExhaustedError('mapped', 'x', 'Ok').to_struct()
        assert struct == Exhausted('mapped', 'x', 'Ok')
        exc = struct.to_exception()
        assert isinstance(exc, ExhaustedError)
        assert (exc.kind, exc.value_repr, exc.variant) == ('mapped', 'x', 'Ok')

    def test_struct_encodes(self):
        """The struct variant is serializable."""
        data = msgspec.json.encode(Exhausted('chain', '5'))
        assert msgspec.json.decode(data, type=Exhausted) == Exhausted('chain', '5')


class TestInvalidPattern:
    """Tests for InvalidPattern / InvalidPatternError."""

    def test_exception_fields(self):
        """InvalidPatternError carries reason and code."""
        err = InvalidPatternError('bad shape')
        assert err.reason == 'bad shape'
        assert str(err) == '[invalid_pattern] bad shape'

    def test_is_type_error(self):
        """InvalidPatternError is also a TypeError."""
        with pytest.raises(TypeError):
            raise InvalidPatternError('bad')

    def test_struct_round_trip(self):
        """to_struct/to_exception preserve the reason."""
        assert InvalidPatternError('bad').to_struct() == InvalidPattern('bad')
        assert InvalidPattern('bad').to_exception().reason == 'bad'


class TestUnwrapError:
    """Tests for UnwrapError."""

    def test_is_runtime_error(self):
        """UnwrapError is a RuntimeError, not a MatchError."""
        assert issubclass(UnwrapError, RuntimeError)
        assert not issubclass(UnwrapError, MatchError)
