"""Value types produced by the resolution engine and the workspace allocator.

A loaded candidate is either a :class:`Module` or a
:class:`RejectedCandidate`.  Neither is mutated after construction, so a
"matched but rejected" candidate is an ordinary value callers can inspect.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel

from workon.domain.types import RejectReason
from workon.domain.workspaces import parse_number


class Module(BaseModel):
    """A local module that resolved cleanly.

    Attributes:
        identity: Module path from the ``module`` directive, or the path of
            ``directory`` relative to ``root_dir`` when the directive is absent.
        version: Always empty for local modules.
        directory: Module root holding the manifest.
        manifest_path: The manifest backing this module.
        toolchain_version: The ``go`` directive, or the configured default.
        root_dir: Search root the module was found under.
    """

    model_config = {"frozen": True}

    identity: str
    version: str = ""
    directory: Path
    manifest_path: Path
    toolchain_version: str
    root_dir: Path

    @property
    def name(self) -> str:
        """Short name of the module: the last element of its identity."""
        return self.identity.rsplit("/", 1)[-1]


class RejectedCandidate(BaseModel):
    """A discovered manifest that could not be loaded as a Module."""

    model_config = {"frozen": True}

    identity: str
    directory: Path
    manifest_path: Path
    root_dir: Path
    reason: RejectReason
    message: str


@dataclass(frozen=True)
class ModuleMatch:
    """The result of matching one pattern against every configured root."""

    pattern: str
    literal: bool
    modules: tuple[Module, ...] = ()
    rejected: tuple[RejectedCandidate, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def identities(self) -> list[str]:
        return sorted(m.identity for m in self.modules)


class Workspace(BaseModel):
    """A window-manager workspace as reported by ``get_workspaces``.

    i3 reports ``num`` as -1 for workspaces without a numeric prefix.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    num: int | None = None
    name: str
    focused: bool = False
    visible: bool = False
    output: str | None = None

    @property
    def number(self) -> int:
        """Effective workspace number parsed from the name (0 for none)."""
        return parse_number(self.name)
