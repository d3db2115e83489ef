"""Config file discovery and loading.

The config file lives in the XDG config directory
(``~/.config/workon/config.toml`` by default).  ``WORKON_CONFIG`` and
the ``--config`` CLI flag override the location.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIRNAME = "workon"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "WORKON_CONFIG"


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/workon/config.toml`` (XDG default: ``~/.config``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / CONFIG_DIRNAME / CONFIG_FILENAME


def find_config() -> Path | None:
    """Locate the config file, or return None if there is none.

    ``WORKON_CONFIG`` wins when set, even if it points to a missing file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    candidate = default_config_path()
    if candidate.is_file():
        return candidate
    return None


def load_config_data(path: Path | None) -> dict[str, Any]:
    """Parse the TOML file at *path*; a missing file means no overrides.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    raw = path.read_text(encoding="utf-8")
    return tomllib.loads(raw)
