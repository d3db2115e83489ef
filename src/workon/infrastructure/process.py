"""Detached process spawning for the terminal and the editor."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def spawn_detached(
    executable: str,
    args: Sequence[str] = (),
    *,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.Popen[bytes]:
    """Start *executable* in its own session and return without waiting.

    *executable* is looked up on ``PATH``.  The child inherits the standard
    streams of this process and is never waited on.

    Raises:
        FileNotFoundError: *executable* is not on ``PATH``.
        OSError: The process could not be started.
    """
    path = shutil.which(executable)
    if path is None:
        msg = f"{executable}: executable file not found in $PATH"
        raise FileNotFoundError(msg)
    argv = [path, *args]
    logger.debug("Spawning %s in %s", argv, cwd)
    return subprocess.Popen(
        argv,
        cwd=cwd,
        env=dict(env) if env is not None else dict(os.environ),
        stdin=subprocess.DEVNULL,
        start_new_session=True,
    )
