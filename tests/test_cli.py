"""Tests for wren.cli — CLI entrypoint, ``wren routes`` and ``wren build``."""

import sys
import types

import pytest

from wren.cli import main
from wren.errors import GenerationError
from wren.registry import RouteRegistry
from wren.strategy.template import RouteStrategy


def _broken_paths() -> list[str]:
    raise GenerationError("index unavailable")


@pytest.fixture
def _fake_routes_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with route registries on sys.modules."""
    mod = types.ModuleType("_fake_wren_routes")
    mod.registry = RouteRegistry(  # type: ignore[attr-defined]
        [
            RouteStrategy("about"),
            RouteStrategy("blog")
            .with_build_paths(lambda: ["a", "b"])
            .with_build_state(lambda path: path)
            .with_revalidate_after("1d"),
        ]
    )
    mod.empty = RouteRegistry()  # type: ignore[attr-defined]
    mod.broken = RouteRegistry(  # type: ignore[attr-defined]
        [RouteStrategy("blog").with_build_paths(_broken_paths)]
    )
    monkeypatch.setitem(sys.modules, "_fake_wren_routes", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_build_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_registry(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_build_missing_registry(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "wren" in captured.out


@pytest.mark.usefixtures("_fake_routes_module")
class TestRoutesCommand:
    def test_lists_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wren_routes:registry"])
        out = capsys.readouterr().out

        assert "ROUTE" in out
        assert "STRATEGIES" in out
        assert "/about  static" in out
        assert "build_paths, build_state, revalidate_after=1d" in out

    def test_empty_registry(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wren_routes:empty"])
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz:registry"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_routes_module")
class TestBuildCommand:
    def test_reports_pages(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["build", "_fake_wren_routes:registry"])
        out = capsys.readouterr().out

        assert "/about  1 page" in out
        assert "/blog  2 pages" in out
        assert "3 pages built" in out

    def test_concurrency_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["build", "_fake_wren_routes:registry", "--concurrency", "1"])
        assert "3 pages built" in capsys.readouterr().out

    def test_invalid_concurrency(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "_fake_wren_routes:registry", "--concurrency", "0"])
        assert exc_info.value.code == 1
        assert "build_concurrency" in capsys.readouterr().err

    def test_failure_exits_non_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "_fake_wren_routes:broken"])
        assert exc_info.value.code == 1
        assert "index unavailable" in capsys.readouterr().err
