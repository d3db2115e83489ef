"""Tests for LaunchService: the resolve, workspace, terminal, editor sequence."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from workon.config.models import LaunchConfig
from workon.domain.models import Workspace
from workon.plugins import PluginManager, hookimpl
from workon.services import launch
from workon.services.launch import LaunchService
from workon.services.resolve import ResolveService
from workon.services.result import ErrorCode
from workon.services.workspace import WorkspaceService


class _FakeIPC:
    def __init__(self, names: list[str]) -> None:
        self.names = names
        self.commands: list[str] = []

    def workspaces(self) -> list[Workspace]:
        return [Workspace(name=n) for n in self.names]

    def command(self, msg: str) -> None:
        self.commands.append(msg)


class _LaunchRecorder:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    @hookimpl
    def post_launch(self, identity: str, directory: str, workspace: str | None) -> None:
        self.calls.append({"identity": identity, "directory": directory, "workspace": workspace})


class Processes:
    """Records spawn and listing calls made by the launch module."""

    def __init__(self) -> None:
        self.spawned: list[tuple[str, list[str], Any]] = []
        self.files = ["main.go", "cmd/tool/main.go"]
        self.spawn_error: dict[str, Exception] = {}
        self.list_error: Exception | None = None

    def spawn(self, executable: str, args: Any = (), *, cwd: Any = None, env: Any = None) -> None:
        if executable in self.spawn_error:
            raise self.spawn_error[executable]
        self.spawned.append((executable, list(args), cwd))

    def list_files(self, directory: Path, *, go_command: str = "go") -> list[str]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.files)


@pytest.fixture
def procs(monkeypatch: pytest.MonkeyPatch) -> Processes:
    p = Processes()
    monkeypatch.setattr(launch, "spawn_detached", p.spawn)
    monkeypatch.setattr(launch, "list_go_files", p.list_files)
    return p


@pytest.fixture
def module_dir(make_module) -> Path:
    return make_module("github.com/perillo/i3workon")


def _service(
    root: Path, *, ipc: _FakeIPC | None = None, plugins: PluginManager | None = None
) -> LaunchService:
    workspaces = WorkspaceService(ipc) if ipc is not None else None
    return LaunchService(
        ResolveService([root]),
        LaunchConfig(terminal="xterm", editor="vim"),
        workspaces=workspaces,
        plugins=plugins,
    )


class TestWorkon:
    def test_starts_terminal_then_editor(
        self, root: Path, module_dir: Path, procs: Processes
    ) -> None:
        result = _service(root).workon("...i3workon")

        assert result.ok
        assert result.op == "workon"
        assert procs.spawned == [
            ("xterm", [], module_dir),
            ("vim", ["main.go", "cmd/tool/main.go"], module_dir),
        ]
        assert result.data["module"]["identity"] == "github.com/perillo/i3workon"
        assert result.data["workspace"] is None
        assert result.data["terminal"] == "xterm"
        assert result.data["editor"] == "vim"
        assert result.data["files"] == ["main.go", "cmd/tool/main.go"]

    def test_resolve_failure_stops_everything(self, root: Path, procs: Processes) -> None:
        result = _service(root).workon("example.com/missing")

        assert result.op == "workon"
        assert result.error.code == ErrorCode.NOT_FOUND
        assert procs.spawned == []

    def test_ambiguous_stops_everything(
        self, root: Path, make_module, procs: Processes
    ) -> None:
        make_module("example.com/a")
        make_module("example.com/b")
        result = _service(root).workon("example.com/...")
        assert result.error.code == ErrorCode.AMBIGUOUS
        assert procs.spawned == []

    def test_explicit_workspace(self, root: Path, module_dir: Path, procs: Processes) -> None:
        ipc = _FakeIPC(["1"])
        result = _service(root, ipc=ipc).workon("...i3workon", workspace=7)

        assert result.ok
        assert ipc.commands == ["workspace 7:i3workon"]
        assert result.data["workspace"] == "7:i3workon"

    def test_auto_workspace(self, root: Path, module_dir: Path, procs: Processes) -> None:
        ipc = _FakeIPC(["1", "2:web", "4"])
        result = _service(root, ipc=ipc).workon("...i3workon", workspace="auto")

        assert ipc.commands == ["workspace 3:i3workon"]
        assert result.data["workspace"] == "3:i3workon"

    def test_workspace_zero_means_stay(
        self, root: Path, module_dir: Path, procs: Processes
    ) -> None:
        ipc = _FakeIPC(["1"])
        result = _service(root, ipc=ipc).workon("...i3workon", workspace=0)
        assert result.ok
        assert ipc.commands == []

    def test_workspace_without_ipc(self, root: Path, module_dir: Path, procs: Processes) -> None:
        result = _service(root).workon("...i3workon", workspace=2)
        assert result.op == "workon"
        assert result.error.code == ErrorCode.IPC_FAILED
        assert procs.spawned == []

    def test_terminal_missing(self, root: Path, module_dir: Path, procs: Processes) -> None:
        procs.spawn_error["xterm"] = FileNotFoundError(
            "xterm: executable file not found in $PATH"
        )

        result = _service(root).workon("...i3workon")

        assert result.error.code == ErrorCode.SPAWN_FAILED
        assert result.error.message == (
            "starting terminal: xterm: executable file not found in $PATH"
        )
        assert procs.spawned == []

    def test_listing_failure_skips_editor(
        self, root: Path, module_dir: Path, procs: Processes
    ) -> None:
        procs.list_error = subprocess.CalledProcessError(
            1, ["go", "list"], stderr="pattern ./...: no Go files\n"
        )

        result = _service(root).workon("...i3workon")

        assert result.error.code == ErrorCode.LIST_FAILED
        assert result.error.message.startswith("finding files to edit: ")
        assert result.error.message.endswith("pattern ./...: no Go files")
        # The terminal was already started and stays open.
        assert [call[0] for call in procs.spawned] == ["xterm"]

    def test_editor_missing(self, root: Path, module_dir: Path, procs: Processes) -> None:
        procs.spawn_error["vim"] = FileNotFoundError("vim: executable file not found in $PATH")

        result = _service(root).workon("...i3workon")

        assert result.error.code == ErrorCode.SPAWN_FAILED
        assert result.error.message.startswith("starting editor: ")

    def test_post_launch_event(self, root: Path, module_dir: Path, procs: Processes) -> None:
        plugins = PluginManager()
        recorder = _LaunchRecorder()
        plugins.register_plugin(recorder)

        _service(root, ipc=_FakeIPC([]), plugins=plugins).workon("...i3workon", workspace="auto")

        assert recorder.calls == [
            {
                "identity": "github.com/perillo/i3workon",
                "directory": str(module_dir),
                "workspace": "1:i3workon",
            }
        ]

    def test_warnings_carried_through(self, root: Path, make_module, procs: Processes) -> None:
        make_module("example.com/old", "module example.com/old\n")
        result = _service(root).workon("example.com/old")
        assert result.ok
        assert len(result.warnings) == 1
        assert "missing go directive" in result.warnings[0]
