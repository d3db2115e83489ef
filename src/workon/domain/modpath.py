"""Module and import path validation.

Mirrors the rules the Go toolchain applies to the ``module`` directive.
:func:`check_module_path` is the strict form (the first element must look
like a domain name); :func:`check_import_path` is the lax form that
``go mod init`` itself accepts, where ``myproject`` is a valid path.

Both raise ``ValueError`` with a ``malformed ... path`` message.
"""

from __future__ import annotations

import re

_WINDOWS_RESERVED = frozenset(
    {"con", "prn", "aux", "nul"}
    | {f"com{i}" for i in range(1, 10)}
    | {f"lpt{i}" for i in range(1, 10)}
)

_MODULE_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._~"
)
_IMPORT_CHARS = _MODULE_CHARS | {"+"}
_FIRST_ELEM_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-.")

_MAJOR_SUFFIX = re.compile(r"/v([0-9]+)$")


def _check_elem(elem: str, *, module: bool) -> None:
    if not elem:
        raise ValueError("empty path element")
    if elem.count(".") == len(elem):
        raise ValueError(f"invalid path element {elem!r}")
    if module and elem.startswith("."):
        raise ValueError("leading dot in path element")
    if elem.endswith("."):
        raise ValueError("trailing dot in path element")
    allowed = _MODULE_CHARS if module else _IMPORT_CHARS
    for char in elem:
        if char not in allowed:
            raise ValueError(f"invalid char {char!r}")
    short = elem.split(".", 1)[0]
    if short.lower() in _WINDOWS_RESERVED:
        raise ValueError(f"{short!r} disallowed as path element component on Windows")


def _check_path(path: str, *, module: bool) -> None:
    if not path:
        raise ValueError("empty string")
    if path.startswith("-"):
        raise ValueError("leading dash")
    if "//" in path:
        raise ValueError("double slash")
    if path.endswith("/"):
        raise ValueError("trailing slash")
    for elem in path.split("/"):
        _check_elem(elem, module=module)


def check_import_path(path: str) -> None:
    """Validate *path* as an import path."""
    try:
        _check_path(path, module=False)
    except ValueError as exc:
        msg = f"malformed import path {path!r}: {exc}"
        raise ValueError(msg) from exc


def check_module_path(path: str) -> None:
    """Validate *path* as a module path.

    On top of the element rules, the first element must contain a dot, may
    only use lowercase ASCII letters, digits, dots and dashes, and a major
    version suffix must be ``/v2`` or higher.
    """
    try:
        _check_path(path, module=True)
        first = path.split("/", 1)[0]
        if "." not in first:
            raise ValueError("missing dot in first path element")
        for char in first:
            if char not in _FIRST_ELEM_CHARS:
                raise ValueError(f"invalid char {char!r} in first path element")
        match = _MAJOR_SUFFIX.search(path)
        if match and not path.startswith("gopkg.in/"):
            digits = match.group(1)
            if digits.startswith("0") or digits == "1":
                raise ValueError("invalid version")
    except ValueError as exc:
        msg = f"malformed module path {path!r}: {exc}"
        raise ValueError(msg) from exc
