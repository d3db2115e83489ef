"""Classification enums shared by the resolution engine."""

from __future__ import annotations

from enum import StrEnum


class RejectReason(StrEnum):
    """Why a discovered candidate could not become a Module."""

    MANIFEST_MISSING = "manifest_missing"
    MANIFEST_MALFORMED = "manifest_malformed"
    PLACEMENT_VIOLATED = "placement_violated"
