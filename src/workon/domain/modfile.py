"""Minimal ``go.mod`` parser.

Only the ``module`` and ``go`` directives are extracted.  The remaining
directives are recognised so that a well-formed manifest parses cleanly,
but their arguments are ignored.

Lexical rules follow the Go toolchain: ``//`` starts a comment, tokens
are separated by whitespace, ``"..."`` and ```...``` are quoted strings,
and ``verb (`` opens a block whose lines share that verb until ``)``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

KNOWN_DIRECTIVES = frozenset(
    {
        "module",
        "go",
        "toolchain",
        "godebug",
        "require",
        "exclude",
        "replace",
        "retract",
        "tool",
        "ignore",
    }
)

GO_VERSION_RE = re.compile(r"^([1-9][0-9]*)\.(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))?([a-z]+[0-9]+)?$")

_DELIMS = frozenset(' \t\r()"`')


class ModFileError(ValueError):
    """One or more syntax errors in a manifest, each prefixed with ``file:line:``."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("\n".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class ModFile:
    """The directives of interest from a parsed manifest."""

    module: str | None = None
    go: str | None = None


# (text, quoted)
_Token = tuple[str, bool]


def _tokenize(line: str) -> list[_Token]:
    tokens: list[_Token] = []
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char in " \t\r":
            i += 1
        elif line.startswith("//", i):
            break
        elif char in "()":
            tokens.append((char, False))
            i += 1
        elif char == '"':
            j = i + 1
            while j < n and line[j] != '"':
                j += 2 if line[j] == "\\" else 1
            if j >= n:
                raise ValueError("unterminated quoted string")
            try:
                value = json.loads(line[i : j + 1])
            except json.JSONDecodeError as exc:
                raise ValueError(f"invalid quoted string {line[i : j + 1]}") from exc
            tokens.append((value, True))
            i = j + 1
        elif char == "`":
            j = line.find("`", i + 1)
            if j < 0:
                raise ValueError("unterminated raw string")
            tokens.append((line[i + 1 : j], True))
            i = j + 1
        else:
            j = i
            while j < n and line[j] not in _DELIMS and not line.startswith("//", j):
                j += 1
            tokens.append((line[i:j], False))
            i = j
    return tokens


def parse_modfile(path: str, data: str) -> ModFile:
    """Parse the manifest body *data* read from *path*.

    Raises :class:`ModFileError` listing every problem found.
    """
    errors: list[str] = []
    module: str | None = None
    go: str | None = None
    block_verb: str | None = None
    block_line = 0

    def error(lineno: int, msg: str) -> None:
        errors.append(f"{path}:{lineno}: {msg}")

    # Only "\n" ends a line; "\r" is trimmed as whitespace by the tokenizer.
    for lineno, line in enumerate(data.split("\n"), start=1):
        try:
            tokens = _tokenize(line)
        except ValueError as exc:
            error(lineno, str(exc))
            continue
        if not tokens:
            continue

        if tokens == [(")", False)]:
            if block_verb is None:
                error(lineno, "unexpected )")
            block_verb = None
            continue
        if block_verb is None and len(tokens) == 2 and tokens[1] == ("(", False):
            block_verb, block_line = tokens[0][0], lineno
            if block_verb not in KNOWN_DIRECTIVES:
                error(lineno, f"unknown block type: {block_verb}")
            continue
        if any(tok in (("(", False), (")", False)) for tok in tokens):
            error(lineno, "unexpected parenthesis")
            continue

        if block_verb is not None:
            verb, args = block_verb, [text for text, _ in tokens]
        else:
            verb, args = tokens[0][0], [text for text, _ in tokens[1:]]

        if verb not in KNOWN_DIRECTIVES:
            error(lineno, f"unknown directive: {verb}")
        elif verb == "module":
            if module is not None:
                error(lineno, "repeated module statement")
            elif len(args) != 1:
                error(lineno, "usage: module module/path")
            else:
                module = args[0]
        elif verb == "go":
            if go is not None:
                error(lineno, "repeated go statement")
            elif len(args) != 1:
                error(lineno, "usage: go 1.23")
            elif not GO_VERSION_RE.match(args[0]):
                error(lineno, f"invalid go version '{args[0]}': must match format 1.23.0")
            else:
                go = args[0]

    if block_verb is not None:
        error(block_line, f"unclosed {block_verb} block")
    if errors:
        raise ModFileError(errors)
    return ModFile(module=module, go=go)
