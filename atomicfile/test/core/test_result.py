"""Tests for atomicfile.core.result module."""

import pytest

from atomicfile.core.result import Err, Ok, Result


class TestOk:
    def test_value_and_repr(self) -> None:
        result = Ok(42)
        assert result.value == 42
        assert repr(result) == "Ok(42)"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Ok(1).value = 2  # type: ignore[misc]


class TestErr:
    def test_error_and_repr(self) -> None:
        result = Err("nope")
        assert result.error == "nope"
        assert repr(result) == "Err('nope')"


@pytest.mark.parametrize(
    ("result", "expected"),
    [(Ok(3), "ok 3"), (Err("bad"), "err bad")],
)
def test_pattern_matching(result: Result[int, str], expected: str) -> None:
    match result:
        case Ok(value):
            assert expected == f"ok {value}"
        case Err(error):
            assert expected == f"err {error}"
