"""Manifest loader: turn a discovered ``go.mod`` into a Module.

Per-candidate problems never raise.  A candidate that cannot be loaded
comes back as a :class:`RejectedCandidate` so that callers can still
report it when it matches the search.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from workon.config.models import ResolverConfig
from workon.domain.modfile import ModFileError, parse_modfile
from workon.domain.modpath import check_import_path, check_module_path
from workon.domain.models import Module, RejectedCandidate
from workon.domain.types import RejectReason

if TYPE_CHECKING:
    from workon.infrastructure.walker import RawCandidate

logger = logging.getLogger(__name__)

LoadResult = Module | RejectedCandidate


def fallback_identity(candidate: RawCandidate) -> str:
    """Identity implied by the candidate's location under its root."""
    return candidate.directory.relative_to(candidate.root_dir).as_posix()


def _reject(
    candidate: RawCandidate,
    identity: str,
    reason: RejectReason,
    message: str,
) -> RejectedCandidate:
    return RejectedCandidate(
        identity=identity,
        directory=candidate.directory,
        manifest_path=candidate.manifest_path,
        root_dir=candidate.root_dir,
        reason=reason,
        message=message,
    )


def load_manifest(
    candidate: RawCandidate,
    config: ResolverConfig | None = None,
) -> tuple[LoadResult, list[str]]:
    """Read and validate the manifest of *candidate*.

    Returns ``(result, warnings)`` where *warnings* lists non-fatal
    diagnostics such as a missing ``module`` or ``go`` directive.
    """
    config = config or ResolverConfig()
    warnings: list[str] = []
    manifest = candidate.manifest_path

    try:
        data = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        # The manifest existed during the walk but can no longer be read.
        return (
            _reject(
                candidate,
                fallback_identity(candidate),
                RejectReason.MANIFEST_MISSING,
                f"{manifest}: {exc}",
            ),
            warnings,
        )

    try:
        modfile = parse_modfile(str(manifest), data)
    except ModFileError as exc:
        return (
            _reject(
                candidate,
                fallback_identity(candidate),
                RejectReason.MANIFEST_MALFORMED,
                str(exc),
            ),
            warnings,
        )

    if modfile.module is not None:
        identity = modfile.module
        check = check_module_path if config.strict_paths else check_import_path
        try:
            check(identity)
        except ValueError as exc:
            return (
                _reject(
                    candidate,
                    identity,
                    RejectReason.MANIFEST_MALFORMED,
                    f"module {identity}: invalid module path: {exc}",
                ),
                warnings,
            )
    else:
        identity = fallback_identity(candidate)
        warnings.append(f"missing module directive in {manifest}")

    if modfile.go is not None:
        toolchain_version = modfile.go
    else:
        toolchain_version = config.default_toolchain_version
        warnings.append(f"missing go directive in {manifest}")

    if config.enforce_placement:
        expected = os.path.join(candidate.root_dir, *identity.split("/"))
        if os.path.normpath(expected) != str(candidate.directory):
            return (
                _reject(
                    candidate,
                    identity,
                    RejectReason.PLACEMENT_VIOLATED,
                    f"module {identity}: not under root {candidate.root_dir}: "
                    f"{candidate.directory}",
                ),
                warnings,
            )

    module = Module(
        identity=identity,
        directory=candidate.directory,
        manifest_path=manifest,
        toolchain_version=toolchain_version,
        root_dir=candidate.root_dir,
    )
    logger.debug("Loaded module %s from %s", identity, manifest)
    return module, warnings
