"""Unit tests for Result type."""

import pytest

from stepbridge.shared.result import Err, Ok


class TestOk:
    """Tests for Ok result type."""

    def test_ok_holds_value(self) -> None:
        """Test Ok exposes its value and reports success."""
        result = Ok("OK")
        assert result.value == "OK"
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_ok_unwrap(self) -> None:
        """Test unwrap and unwrap_or return the value for Ok."""
        result = Ok(42)
        assert result.unwrap() == 42
        assert result.unwrap_or(100) == 42

    def test_ok_map(self) -> None:
        """Test map transforms value for Ok."""
        mapped = Ok((42, 3.14)).map(len)
        assert mapped == Ok(2)

    def test_ok_and_then(self) -> None:
        """Test and_then feeds the value into the next step."""
        result = Ok("42").and_then(lambda text: Ok(int(text)))
        assert result == Ok(42)

    def test_ok_and_then_can_fail(self) -> None:
        """Test and_then returns the next step's error."""
        error = ValueError("bad")
        result = Ok("x").and_then(lambda _: Err(error))
        assert result.is_err()
        assert result.error is error

    def test_ok_repr(self) -> None:
        """Test string representation of Ok."""
        assert repr(Ok("OK")) == "Ok('OK')"

    def test_ok_frozen(self) -> None:
        """Test Ok is immutable (frozen dataclass)."""
        result = Ok(42)
        with pytest.raises((AttributeError, TypeError)):  # FrozenInstanceError
            result.value = 100  # type: ignore


class TestErr:
    """Tests for Err result type."""

    def test_err_holds_error(self) -> None:
        """Test Err exposes its error and reports failure."""
        error = KeyError("missing")
        result = Err(error)
        assert result.error is error
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_err_unwrap_raises(self) -> None:
        """Test unwrap raises the error for Err."""
        result = Err(ValueError("test error"))
        with pytest.raises(ValueError, match="test error"):
            result.unwrap()

    def test_err_unwrap_or(self) -> None:
        """Test unwrap_or returns default for Err."""
        result: Err[ValueError] = Err(ValueError("test"))
        assert result.unwrap_or(42) == 42

    def test_err_map_and_then_skip(self) -> None:
        """Test map and and_then leave an Err untouched."""
        result = Err(ValueError("first"))
        chained = result.map(lambda x: x * 2).and_then(lambda x: Ok(x))  # type: ignore
        assert chained is result

    def test_err_repr(self) -> None:
        """Test string representation of Err."""
        assert repr(Err(ValueError("test"))) == "Err(ValueError('test'))"

    def test_err_frozen(self) -> None:
        """Test Err is immutable (frozen dataclass)."""
        result = Err(ValueError("test"))
        with pytest.raises((AttributeError, TypeError)):  # FrozenInstanceError
            result.error = RuntimeError("new")  # type: ignore


class TestResultPatternMatching:
    """Tests for structural pattern matching on Result values."""

    @staticmethod
    def describe(result: Ok[int] | Err[ValueError]) -> str:
        match result:
            case Err(error):
                return f"failed: {error}"
            case Ok(value):
                return f"got {value}"
        return "unreachable"

    def test_match_ok(self) -> None:
        """Test Ok binds its value in a case pattern."""
        assert self.describe(Ok(7)) == "got 7"

    def test_match_err(self) -> None:
        """Test Err binds its error in a case pattern."""
        assert self.describe(Err(ValueError("nope"))) == "failed: nope"
