"""ResolveService: resolve a pattern to exactly one local module.

Every manifest under the configured roots is loaded and matched against
the pattern by its *declared* identity, not by where it sits on disk.
Per-candidate failures are logged and dropped; only the aggregate
decision (one module, none, or several) reaches the caller.

Nothing is cached: each call walks the roots again.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from workon.config.models import ResolverConfig
from workon.domain.models import Module, ModuleMatch, RejectedCandidate
from workon.domain.pattern import check_pattern, compile_pattern
from workon.infrastructure.manifest import load_manifest
from workon.infrastructure.walker import Skipped, walk_roots
from workon.services.base import BaseService
from workon.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    import os
    from collections.abc import Sequence

    from workon.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class ResolveError(Exception):
    """A pattern did not resolve to exactly one module."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail or {}
        self.warnings = list(warnings)


def module_payload(module: Module) -> dict[str, Any]:
    """JSON-ready representation of *module*, including its short name."""
    return {**module.model_dump(mode="json"), "name": module.name}


def _rejected_payload(rejected: RejectedCandidate) -> dict[str, Any]:
    return rejected.model_dump(mode="json")


class ResolveService(BaseService):
    """Resolves module patterns against an explicit list of roots."""

    def __init__(
        self,
        roots: Sequence[str | os.PathLike[str]],
        config: ResolverConfig | None = None,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        super().__init__(plugins=plugins)
        self._roots = list(roots)
        self._config = config or ResolverConfig()

    # ------------------------------------------------------------------
    # Programmatic API
    # ------------------------------------------------------------------

    def match_modules(self, pattern: str) -> ModuleMatch:
        """Return every module, and every rejected candidate, matching *pattern*.

        Raises:
            ValueError: *pattern* is a filesystem path rather than a module
                pattern.
        """
        check_pattern(pattern)
        compiled = compile_pattern(pattern)
        modules: list[Module] = []
        rejected: list[RejectedCandidate] = []
        warnings: list[str] = []

        entries = walk_roots(
            self._roots,
            manifest_name=self._config.manifest_name,
            skip_dirs=self._config.skip_dirs,
        )
        for entry in entries:
            if isinstance(entry, Skipped):
                if entry.fatal:
                    logger.warning("Skipping root %s: %s", entry.path, entry.reason)
                else:
                    logger.debug("Skipping %s: %s", entry.path, entry.reason)
                continue

            result, load_warnings = load_manifest(entry.candidate, self._config)
            matched = compiled.matches(result.identity)
            for warning in load_warnings:
                logger.debug("%s", warning)
            if isinstance(result, RejectedCandidate):
                level = logging.WARNING if matched else logging.DEBUG
                logger.log(level, "can't load module: %s", result.message)
            if not matched:
                continue

            # Surfaced through the result, not the log, for matching candidates.
            warnings.extend(load_warnings)
            if isinstance(result, RejectedCandidate):
                rejected.append(result)
            else:
                modules.append(result)

        return ModuleMatch(
            pattern=pattern,
            literal=compiled.literal,
            modules=tuple(modules),
            rejected=tuple(rejected),
            warnings=tuple(warnings),
        )

    def resolve_module(self, pattern: str) -> Module:
        """Resolve *pattern* to exactly one module.

        The policy is the same for literal and wildcard patterns: more than
        one match is ambiguous.

        Raises:
            ResolveError: With code ``UNSUPPORTED_PATTERN``, ``NOT_FOUND``
                or ``AMBIGUOUS``.
        """
        return self._resolve_match(pattern).modules[0]

    def _resolve_match(self, pattern: str) -> ModuleMatch:
        try:
            match = self.match_modules(pattern)
        except ValueError as exc:
            raise ResolveError(
                ErrorCode.UNSUPPORTED_PATTERN,
                f"resolve: not supported: {exc}",
            ) from exc

        if not match.modules:
            raise ResolveError(
                ErrorCode.NOT_FOUND,
                f"resolve {pattern!r}: no modules matched",
                detail={"rejected": [_rejected_payload(r) for r in match.rejected]},
                warnings=match.warnings,
            )
        if len(match.modules) > 1:
            raise ResolveError(
                ErrorCode.AMBIGUOUS,
                f"resolve {pattern!r}: multiple modules matched",
                detail={"matches": match.identities},
                warnings=match.warnings,
            )
        return match

    # ------------------------------------------------------------------
    # Service operations
    # ------------------------------------------------------------------

    def resolve(self, pattern: str) -> ServiceResult:
        """Resolve *pattern*, reporting the module or why resolution failed."""
        try:
            match = self._resolve_match(pattern)
        except ResolveError as exc:
            return ServiceResult.failure(
                "resolve",
                exc.code,
                exc.message,
                detail=exc.detail,
                warnings=exc.warnings,
            )

        module = match.modules[0]
        warnings = list(match.warnings)
        self._dispatch_event(
            "post_resolve",
            {"identity": module.identity, "directory": str(module.directory)},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op="resolve",
            data={"module": module_payload(module)},
            warnings=warnings,
        )

    def match(self, pattern: str) -> ServiceResult:
        """List every module matching *pattern*; zero matches is not an error."""
        try:
            match = self.match_modules(pattern)
        except ValueError as exc:
            return ServiceResult.failure(
                "match",
                ErrorCode.UNSUPPORTED_PATTERN,
                f"match: not supported: {exc}",
            )

        warnings = list(match.warnings)
        if not match.modules:
            warnings.append(f"{pattern!r} matched no modules")
        modules = sorted(match.modules, key=lambda m: m.identity)
        return ServiceResult(
            ok=True,
            op="match",
            data={
                "pattern": match.pattern,
                "literal": match.literal,
                "items": [module_payload(m) for m in modules],
                "rejected": [_rejected_payload(r) for r in match.rejected],
                "count": len(modules),
            },
            warnings=warnings,
        )
