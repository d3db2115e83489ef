"""Workspace numbering.

Workspaces are named ``"<n>"`` or ``"<n>:<label>"``; anything else is a
purely label-based workspace without a number.  i3 itself is more lenient
(it also accepts ``"<n><label>"``), but only the colon form is produced or
recognised here.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workon.domain.models import Workspace

_NUMBERED = re.compile(r"([0-9]+)(?::.*)?", re.DOTALL)


def parse_number(label: str) -> int:
    """Return the numeric prefix of *label*, or 0 if it has none.

    Examples:
        >>> parse_number("5")
        5
        >>> parse_number("5:work")
        5
        >>> parse_number("work")
        0
        >>> parse_number("-1")
        0
    """
    match = _NUMBERED.fullmatch(label)
    if match is None:
        return 0
    return int(match.group(1))


def next_number(workspaces: Iterable[Workspace]) -> int:
    """Return the smallest positive workspace number not in use.

    Numbers are assumed nearly contiguous from 1, so the first gap wins;
    with no gap the result is one past the highest number.
    """
    used = sorted({ws.number for ws in workspaces if ws.number > 0})
    candidate = 1
    for number in used:
        if number > candidate:
            return candidate
        candidate += 1
    return candidate


def format_target(number: int, label: str) -> str:
    """Compose the ``"<n>:<label>"`` target for a workspace command."""
    return f"{number}:{label}"
