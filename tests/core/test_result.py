"""
Tests for the Result type.
"""
import pytest

from core.errors import NoSuchVerseError
from core.types import Result


class TestResult:
    """Tests for Result."""

    def test_success(self):
        result = Result.success(3)

        assert result.is_success
        assert result.value == 3
        assert result.unwrap() == 3
        assert repr(result) == "Result.success(3)"

    def test_error_message(self):
        result = Result(error="nope")

        assert result.is_failure
        assert repr(result) == "Result(error='nope')"
        with pytest.raises(ValueError):
            result.value
        with pytest.raises(ValueError, match="nope"):
            result.unwrap()

    def test_from_exception_reraises(self):
        result = Result.from_exception(KeyError("Gen"))

        assert result.is_failure
        with pytest.raises(KeyError):
            result.unwrap()

    def test_map(self):
        assert Result.success(2).map(lambda v: v * 2).value == 4

    def test_map_keeps_failure(self):
        error = NoSuchVerseError("Unknown book 'Foo' in KJV")
        failed = Result.from_exception(error).map(lambda v: v * 2)

        assert failed.is_failure
        assert failed.exception is error
        assert "Unknown book" in failed.error
