"""Root walker: discover manifest files under the configured roots.

The walk yields one tagged entry per event instead of swallowing errors
inline: :class:`Found` for every manifest, :class:`Skipped` for every
entry that could not be read.  The caller decides what to log and what to
ignore.

Order is depth-first with directory entries sorted by name, so a fixed
filesystem snapshot always produces the same sequence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

MANIFEST_NAME = "go.mod"

# VCS metadata never holds modules.
DEFAULT_SKIP_DIRS = frozenset({".git", ".hg", ".svn", ".bzr"})


@dataclass(frozen=True)
class RawCandidate:
    """A manifest found on disk, before it has been read."""

    root_dir: Path
    directory: Path
    manifest_path: Path


@dataclass(frozen=True)
class Found:
    candidate: RawCandidate


@dataclass(frozen=True)
class Skipped:
    """An entry the walk could not read.

    ``fatal`` is True when the root itself is unusable; the walk then moves
    on to the next root.
    """

    path: Path
    reason: str
    fatal: bool = False


WalkEntry = Found | Skipped


def normalize_root(root: str | os.PathLike[str]) -> Path:
    """Make *root* absolute and lexically clean, without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(root)))


def walk_roots(
    roots: Iterable[str | os.PathLike[str]],
    *,
    manifest_name: str = MANIFEST_NAME,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> Iterator[WalkEntry]:
    """Walk every root in order, yielding an entry per manifest or failure."""
    skip = frozenset(skip_dirs)
    for raw_root in roots:
        root = normalize_root(raw_root)
        if not root.is_dir():
            yield Skipped(root, "not a directory", fatal=True)
            continue
        try:
            yield from _walk_dir(root, root, manifest_name, skip)
        except OSError as exc:
            yield Skipped(root, exc.strerror or str(exc), fatal=True)


def _walk_dir(
    root: Path,
    directory: Path,
    manifest_name: str,
    skip: frozenset[str],
) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        if directory == root:
            raise
        yield Skipped(directory, exc.strerror or str(exc))
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            yield Skipped(Path(entry.path), exc.strerror or str(exc))
            continue
        if is_dir:
            if entry.name in skip:
                continue
            yield from _walk_dir(root, Path(entry.path), manifest_name, skip)
        elif entry.name == manifest_name:
            yield Found(
                RawCandidate(
                    root_dir=root,
                    directory=directory,
                    manifest_path=Path(entry.path),
                )
            )
