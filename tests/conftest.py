"""Shared pytest fixtures for workon tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

ModuleFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's GOPATH and config out of every test."""
    for name in ("WORKON_ROOTS", "WORKON_CONFIG", "GOPATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handler changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    workon = logging.getLogger("workon")
    workon_level = workon.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    workon.setLevel(workon_level)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """An empty module root, laid out like ``$GOPATH/src``."""
    path = tmp_path / "gopath" / "src"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_module(root: Path) -> ModuleFactory:
    """Create ``<root>/<location>/go.mod`` and return the module directory.

    The manifest declares *location* as the module path unless *body* is
    given.
    """

    def _make(location: str, body: str | None = None, *, under: Path | None = None) -> Path:
        directory = (under or root).joinpath(*location.split("/"))
        directory.mkdir(parents=True, exist_ok=True)
        if body is None:
            body = f"module {location}\n\ngo 1.21\n"
        (directory / "go.mod").write_text(body, encoding="utf-8")
        return directory

    return _make
