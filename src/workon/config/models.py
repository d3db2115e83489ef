"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults live here, the config file only carries
overrides.  An empty config file (or none at all) plus ``$GOPATH`` is a
working setup.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from workon.infrastructure.walker import DEFAULT_SKIP_DIRS, MANIFEST_NAME

# Go directive assumed when a manifest has none.
DEFAULT_TOOLCHAIN_VERSION = "1.13"


class ResolverConfig(BaseModel):
    """[resolver] section.

    Attributes:
        manifest_name: File name that marks a module root.
        default_toolchain_version: Used when the manifest has no ``go`` line.
        enforce_placement: Reject modules whose declared path does not
            match their location under the root.
        strict_paths: Require a dot in the first path element of a declared
            module path.  When False, paths such as ``myproject`` (what
            ``go mod init`` accepts) are valid.
        skip_dirs: Directory names never descended into.
    """

    model_config = {"frozen": True}

    manifest_name: str = MANIFEST_NAME
    default_toolchain_version: str = DEFAULT_TOOLCHAIN_VERSION
    enforce_placement: bool = True
    strict_paths: bool = True
    skip_dirs: list[str] = Field(default_factory=lambda: sorted(DEFAULT_SKIP_DIRS))


class LaunchConfig(BaseModel):
    """[launch] section."""

    model_config = {"frozen": True}

    terminal: str = "i3-sensible-terminal"
    editor: str = "i3-sensible-editor"
    go_command: str = "go"


class WorkspaceConfig(BaseModel):
    """[workspace] section.  ``swaymsg`` speaks the same protocol as ``i3-msg``."""

    model_config = {"frozen": True}

    ipc_command: str = "i3-msg"
