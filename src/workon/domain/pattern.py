"""Module patterns: a limited glob where ``...`` matches any run of characters.

The semantics follow the ``go`` tool: ``...`` may span path separators, and
a trailing ``/...`` also matches the path without it, so ``example.com/x/...``
matches ``example.com/x`` as well as everything nested below it.

Patterns only ever name module paths.  Filesystem paths (absolute, or
relative such as ``./x``) are rejected by :func:`check_pattern`.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

WILDCARD = "..."

_ESCAPED_WILDCARD = re.escape(WILDCARD)
_ESCAPED_TRAILING = re.escape("/") + _ESCAPED_WILDCARD


@dataclass(frozen=True)
class Pattern:
    """A compiled module pattern."""

    source: str
    regex: re.Pattern[str]
    literal: bool

    def matches(self, identity: str) -> bool:
        """Report whether the whole of *identity* matches the pattern."""
        return self.regex.fullmatch(identity) is not None


def is_literal(pattern: str) -> bool:
    """Return True if *pattern* contains no wildcard."""
    return WILDCARD not in pattern


def is_relative_path(pattern: str) -> bool:
    """Report whether *pattern* reads as a path relative to the current directory."""
    return (
        pattern in (".", "..")
        or pattern.startswith("./")
        or pattern.startswith("../")
    )


def check_pattern(pattern: str) -> None:
    """Raise ``ValueError`` if *pattern* cannot name a module path."""
    if not pattern:
        msg = "empty pattern"
        raise ValueError(msg)
    if os.path.isabs(pattern):
        msg = f"{pattern!r}: absolute path"
        raise ValueError(msg)
    if is_relative_path(pattern):
        msg = f"{pattern!r}: relative path"
        raise ValueError(msg)


def compile_pattern(pattern: str) -> Pattern:
    """Compile *pattern* into an anchored :class:`Pattern`.

    The pattern is escaped first and the wildcard reinstated afterwards, so
    every other character (including ``.``) matches literally.
    """
    expr = re.escape(pattern)
    if expr.endswith(_ESCAPED_TRAILING):
        expr = expr.removesuffix(_ESCAPED_TRAILING) + f"({_ESCAPED_TRAILING})?"
    expr = expr.replace(_ESCAPED_WILDCARD, ".*")
    return Pattern(source=pattern, regex=re.compile(expr), literal=is_literal(pattern))
