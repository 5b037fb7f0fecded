"""Tests for wren.strategy.states — States reconciliation helper."""

import pytest

from wren.errors import BothStatesDefined
from wren.strategy.states import States


class TestBothDefined:
    def test_neither(self) -> None:
        assert States().both_defined() is False

    def test_one(self) -> None:
        assert States(build_state="a").both_defined() is False
        assert States(request_state="b").both_defined() is False

    def test_both(self) -> None:
        assert States("a", "b").both_defined() is True

    def test_empty_string_counts_as_defined(self) -> None:
        assert States("", "").both_defined() is True


class TestGetDefined:
    def test_none_defined(self) -> None:
        assert States(None, None).get_defined() is None

    def test_build_only(self) -> None:
        assert States("x", None).get_defined() == "x"

    def test_request_only(self) -> None:
        assert States(None, "y").get_defined() == "y"

    def test_both_defined_fails(self) -> None:
        with pytest.raises(BothStatesDefined):
            States("x", "y").get_defined()

    def test_both_defined_reports_path(self) -> None:
        with pytest.raises(BothStatesDefined) as exc_info:
            States("x", "y").get_defined("blog/a")
        assert exc_info.value.path == "blog/a"


class TestImmutability:
    def test_frozen(self) -> None:
        states = States("x")
        with pytest.raises(AttributeError):
            states.build_state = "z"  # type: ignore[misc]
