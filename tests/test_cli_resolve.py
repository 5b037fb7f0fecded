"""Tests for wren.cli._resolve — import string resolution."""

import sys
import types

import pytest

from wren.cli._resolve import resolve_registry
from wren.registry import RouteRegistry
from wren.strategy.template import RouteStrategy


def _factory() -> RouteRegistry:
    return RouteRegistry([RouteStrategy("from-factory")])


def _failing_factory() -> RouteRegistry:
    raise RuntimeError("boom")


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with several registry shapes on sys.modules."""
    mod = types.ModuleType("_fake_wren_resolve")
    mod.registry = RouteRegistry([RouteStrategy("about")])  # type: ignore[attr-defined]
    mod.as_list = [RouteStrategy("a"), RouteStrategy("b")]  # type: ignore[attr-defined]
    mod.as_map = {"c": RouteStrategy("c")}  # type: ignore[attr-defined]
    mod.factory = _factory  # type: ignore[attr-defined]
    mod.failing = _failing_factory  # type: ignore[attr-defined]
    mod.not_a_registry = "just a string"  # type: ignore[attr-defined]
    mod.wrong_items = [1, 2]  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_wren_resolve", mod)


@pytest.mark.usefixtures("_fake_routes_module")
class TestResolveRegistry:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_registry("_fake_wren_resolve:registry"), RouteRegistry)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'registry'."""
        registry = resolve_registry("_fake_wren_resolve")
        assert "about" in registry

    def test_list_of_strategies(self) -> None:
        registry = resolve_registry("_fake_wren_resolve:as_list")
        assert {s.path for s in registry} == {"a", "b"}

    def test_mapping_of_strategies(self) -> None:
        registry = resolve_registry("_fake_wren_resolve:as_map")
        assert "c" in registry

    def test_factory(self) -> None:
        registry = resolve_registry("_fake_wren_resolve:factory")
        assert "from-factory" in registry

    def test_factory_error(self) -> None:
        with pytest.raises(TypeError, match="raised an error"):
            resolve_registry("_fake_wren_resolve:failing")

    def test_not_a_registry(self) -> None:
        with pytest.raises(TypeError, match="not a wren RouteRegistry"):
            resolve_registry("_fake_wren_resolve:not_a_registry")

    def test_wrong_items(self) -> None:
        with pytest.raises(TypeError):
            resolve_registry("_fake_wren_resolve:wrong_items")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_registry("nonexistent_module_xyz:registry")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_registry("_fake_wren_resolve:nope")
