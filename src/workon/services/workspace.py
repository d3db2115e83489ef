"""WorkspaceService: pick and switch to window-manager workspaces."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from workon.domain.workspaces import format_target, next_number
from workon.services.base import BaseService
from workon.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from workon.infrastructure.i3 import I3Client
    from workon.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# Everything the IPC client can raise.
IPC_ERRORS = (OSError, subprocess.CalledProcessError, ValueError)


class WorkspaceService(BaseService):
    """Reads and switches workspaces through a window-manager IPC client."""

    def __init__(self, ipc: I3Client, *, plugins: PluginManager | None = None) -> None:
        super().__init__(plugins=plugins)
        self._ipc = ipc

    def next_workspace(self) -> ServiceResult:
        """Return the lowest workspace number not currently in use."""
        try:
            workspaces = self._ipc.workspaces()
        except IPC_ERRORS as exc:
            return ServiceResult.failure(
                "next_workspace",
                ErrorCode.IPC_FAILED,
                f"next workspace: {exc}",
            )
        number = next_number(workspaces)
        logger.debug("Next free workspace is %d", number)
        return ServiceResult(
            ok=True,
            op="next_workspace",
            data={"number": number, "workspaces": [ws.name for ws in workspaces]},
        )

    def switch(self, number: int, label: str) -> ServiceResult:
        """Switch to workspace ``<number>:<label>``, creating it if needed."""
        target = format_target(number, label)
        try:
            self._ipc.command(f"workspace {target}")
        except IPC_ERRORS as exc:
            return ServiceResult.failure(
                "switch_workspace",
                ErrorCode.IPC_FAILED,
                f"switching to workspace {target}: {exc}",
            )
        return ServiceResult(ok=True, op="switch_workspace", data={"target": target})
