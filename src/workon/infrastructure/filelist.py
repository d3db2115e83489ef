"""List the Go source files of a module via ``go list``.

The go tool applies build constraints and skips nested modules, vendor
and testdata directories, which a plain directory walk would get wrong.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# One absolute file path per line for every package under the module.
_LIST_TEMPLATE = '{{range .GoFiles}}{{$.Dir}}/{{.}}{{"\\n"}}{{end}}'


def list_go_files(directory: Path, *, go_command: str = "go") -> list[str]:
    """Return the Go files of every package in *directory*, relative to it.

    Raises:
        OSError: The go command could not be run.
        subprocess.CalledProcessError: ``go list`` failed, typically because
            a package did not load.
    """
    proc = subprocess.run(
        [go_command, "list", "-f", _LIST_TEMPLATE, "./..."],
        cwd=directory,
        capture_output=True,
        text=True,
        check=True,
    )
    files: list[str] = []
    for line in proc.stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        # The editor runs with its cwd at the module root.
        files.append(os.path.relpath(line, directory))
    logger.debug("Listed %d go files in %s", len(files), directory)
    return files
