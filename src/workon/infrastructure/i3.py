"""i3 window manager IPC through the ``i3-msg`` command.

``swaymsg`` accepts the same arguments and replies with the same JSON,
so the client works with sway by changing the command.
See https://i3wm.org/docs/ipc.html.
"""

from __future__ import annotations

import json
import logging
import subprocess

from pydantic import TypeAdapter, ValidationError

from workon.domain.models import Workspace

logger = logging.getLogger(__name__)

_WORKSPACE_LIST = TypeAdapter(list[Workspace])


class I3Client:
    """Thin wrapper over ``i3-msg -t <type> <msg>``."""

    def __init__(self, command: str = "i3-msg") -> None:
        self._command = command

    def invoke(self, msgtype: str, msg: str = "") -> bytes:
        """Send one message and return the raw reply.

        The child inherits our stderr.

        Raises:
            OSError: The IPC command could not be run.
            subprocess.CalledProcessError: It exited with a non-zero status.
        """
        argv = [self._command, "-t", msgtype]
        if msg:
            argv.append(msg)
        logger.debug("IPC %s", argv)
        proc = subprocess.run(argv, stdout=subprocess.PIPE, check=True)
        return proc.stdout

    def workspaces(self) -> list[Workspace]:
        """Return the current workspaces.

        Raises:
            ValueError: The reply is not a JSON list of workspaces.
        """
        data = self.invoke("get_workspaces")
        try:
            return _WORKSPACE_LIST.validate_json(data)
        except ValidationError as exc:
            msg = f"get_workspaces: invalid reply: {exc}"
            raise ValueError(msg) from exc

    def command(self, msg: str) -> None:
        """Run an i3 command, failing if any part of it was rejected.

        Raises:
            ValueError: i3 reported ``success: false``.
        """
        data = self.invoke("command", msg)
        try:
            replies = json.loads(data or b"[]")
        except json.JSONDecodeError as exc:
            msg = f"{msg}: invalid reply: {exc}"
            raise ValueError(msg) from exc
        for reply in replies:
            if isinstance(reply, dict) and not reply.get("success", True):
                error = reply.get("error", "unknown error")
                raise ValueError(f"{msg}: {error}")
