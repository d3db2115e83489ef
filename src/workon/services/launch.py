"""LaunchService: resolve a module, then open a workspace, terminal and editor.

Steps run in order and the first failure ends the operation:

1. resolve the pattern to one module,
2. optionally switch to a workspace labelled with the module name,
3. start the terminal in the module directory,
4. list the module's Go files and start the editor on them.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, Literal

from workon.config.models import LaunchConfig
from workon.domain.models import Module
from workon.infrastructure.filelist import list_go_files
from workon.infrastructure.process import spawn_detached
from workon.services.base import BaseService
from workon.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from workon.plugins.manager import PluginManager
    from workon.services.resolve import ResolveService
    from workon.services.workspace import WorkspaceService

logger = logging.getLogger(__name__)

WorkspaceRequest = int | Literal["auto"] | None


def _process_error(exc: Exception) -> str:
    stderr = getattr(exc, "stderr", None)
    if isinstance(exc, subprocess.CalledProcessError) and stderr:
        return f"{exc}: {str(stderr).strip()}"
    return str(exc)


class LaunchService(BaseService):
    """Orchestrates resolution and the collaborator processes."""

    def __init__(
        self,
        resolver: ResolveService,
        config: LaunchConfig | None = None,
        *,
        workspaces: WorkspaceService | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        super().__init__(plugins=plugins)
        self._resolver = resolver
        self._config = config or LaunchConfig()
        self._workspaces = workspaces

    def workon(self, pattern: str, *, workspace: WorkspaceRequest = None) -> ServiceResult:
        """Resolve *pattern* and start working on the module.

        *workspace* is a workspace number, ``"auto"`` for the next free
        number, or None (or 0) to stay on the current workspace.
        """
        resolved = self._resolver.resolve(pattern)
        if not resolved.ok:
            return resolved.model_copy(update={"op": "workon"})

        warnings = list(resolved.warnings)
        module = Module.model_validate(resolved.data["module"])

        target: str | None = None
        if workspace:
            switched = self._switch_workspace(module, workspace)
            if not switched.ok:
                return switched.model_copy(update={"op": "workon", "warnings": warnings})
            target = switched.data["target"]

        terminal = self._config.terminal
        try:
            spawn_detached(terminal, cwd=module.directory)
        except OSError as exc:
            return ServiceResult.failure(
                "workon",
                ErrorCode.SPAWN_FAILED,
                f"starting terminal: {exc}",
                warnings=warnings,
            )

        try:
            files = list_go_files(module.directory, go_command=self._config.go_command)
        except (OSError, subprocess.CalledProcessError) as exc:
            return ServiceResult.failure(
                "workon",
                ErrorCode.LIST_FAILED,
                f"finding files to edit: {_process_error(exc)}",
                warnings=warnings,
            )

        editor = self._config.editor
        try:
            spawn_detached(editor, files, cwd=module.directory)
        except OSError as exc:
            return ServiceResult.failure(
                "workon",
                ErrorCode.SPAWN_FAILED,
                f"starting editor: {exc}",
                warnings=warnings,
            )

        logger.debug("Started %s and %s on %s", terminal, editor, module.identity)
        self._dispatch_event(
            "post_launch",
            {
                "identity": module.identity,
                "directory": str(module.directory),
                "workspace": target,
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op="workon",
            data={
                "module": resolved.data["module"],
                "workspace": target,
                "terminal": terminal,
                "editor": editor,
                "files": files,
            },
            warnings=warnings,
        )

    def _switch_workspace(self, module: Module, workspace: int | str) -> ServiceResult:
        if self._workspaces is None:
            return ServiceResult.failure(
                "switch_workspace",
                ErrorCode.IPC_FAILED,
                "workspace switching is not available",
            )
        if workspace == "auto":
            found = self._workspaces.next_workspace()
            if not found.ok:
                return found
            number = found.data["number"]
        else:
            number = int(workspace)
        return self._workspaces.switch(number, module.name)
