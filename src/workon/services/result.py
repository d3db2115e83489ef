"""ServiceResult and ServiceError: what every workon operation returns.

The CLI and any other caller consume this type; failures carry an
:class:`ErrorCode` plus a ``detail`` payload (for example the list of
candidates behind an ``AMBIGUOUS`` resolve).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure kinds surfaced to callers."""

    UNSUPPORTED_PATTERN = "UNSUPPORTED_PATTERN"
    NOT_FOUND = "NOT_FOUND"
    AMBIGUOUS = "AMBIGUOUS"
    SPAWN_FAILED = "SPAWN_FAILED"
    LIST_FAILED = "LIST_FAILED"
    IPC_FAILED = "IPC_FAILED"
    CONFIG_MISSING = "CONFIG_MISSING"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"resolve"``, ``"match"``, ``"workon"`` ...).
        data: Operation-specific payload on success.
        warnings: Non-fatal diagnostics, such as a manifest without a
            ``go`` directive.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Build a failed result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
            warnings=warnings or [],
        )
