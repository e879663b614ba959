"""Render a directory subtree as a ``tree``-style box-drawing listing.

Traversal is depth-first and pre-order, directories before files at every
level. Each call returns only the rows below ``directory``; the caller adds
the root row. Rendering never raises for traversal problems: an unreadable
directory contributes no rows, and a cancelled frame contributes nothing.
Symlinked directories are expanded, except where they lead back to an
ancestor of the current frame.
"""

from __future__ import annotations

import locale
import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .cancellation import NEVER_CANCELLED
from .file_tree_model import DirectoryEntry, DirectoryReader, list_directory_entries

logger = logging.getLogger(__name__)

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "


@dataclass(frozen=True)
class RenderContext:
    """Read-only inputs shared by every frame of one render session."""

    ignore_patterns: frozenset[str]
    is_cancelled: Callable[[], bool]
    reader: DirectoryReader = list_directory_entries

    @classmethod
    def create(
        cls,
        ignore_patterns: Iterable[str] = (),
        cancellation: Callable[[], bool] | None = None,
        reader: DirectoryReader | None = None,
    ) -> "RenderContext":
        return cls(
            ignore_patterns=frozenset(ignore_patterns),
            is_cancelled=cancellation if cancellation is not None else NEVER_CANCELLED,
            reader=reader if reader is not None else list_directory_entries,
        )


def filter_entries(entries: Iterable[DirectoryEntry], ignore_patterns: frozenset[str]) -> list[DirectoryEntry]:
    """Drop entries whose name is exactly one of ``ignore_patterns``."""
    return [entry for entry in entries if entry.name not in ignore_patterns]


def _collation_key(name: str) -> str:
    """Locale sort key for ``name``; names the collation rejects sort by code point."""
    try:
        return locale.strxfrm(name)
    except (OSError, ValueError):
        return name


def sort_entries(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Sort directories first, then by name using the host collation locale."""
    return sorted(entries, key=lambda entry: (not entry.is_dir, _collation_key(entry.name)))


def _directory_identity(directory: Path) -> tuple[int, int] | None:
    """Return ``(st_dev, st_ino)`` of the directory a path resolves to."""
    try:
        stat = os.stat(directory)
    except (OSError, ValueError):
        return None
    if stat.st_ino == 0:
        return None
    return stat.st_dev, stat.st_ino


def render_tree(
    directory: Path,
    prefix: str,
    context: RenderContext,
    ancestors: frozenset[tuple[int, int]] = frozenset(),
) -> str:
    """Return the rows for everything below ``directory``.

    ``prefix`` is the indentation accumulated from ancestor levels (``""`` at
    the root). Cancellation is polled on entry and before every row; once it
    is set this frame returns ``""`` and discards rows it already built.

    ``ancestors`` holds the identities of the directories above this frame. A
    directory reached again through a symlink keeps its row but is not
    expanded a second time.
    """
    if context.is_cancelled():
        return ""

    identity = _directory_identity(directory)
    if identity is not None:
        if identity in ancestors:
            logger.debug("Not descending into %s: already an ancestor", directory)
            return ""
        ancestors = ancestors | {identity}

    try:
        listed = context.reader(directory)
    except RecursionError:
        raise
    except Exception as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return ""

    entries = sort_entries(filter_entries(listed, context.ignore_patterns))

    output: list[str] = []
    for idx, entry in enumerate(entries):
        if context.is_cancelled():
            return ""

        last = idx == len(entries) - 1
        connector = LAST_BRANCH if last else BRANCH
        output.append(f"{prefix}{connector}{entry.name}\n")

        if entry.is_dir:
            child_prefix = prefix + (SPACE_PREFIX if last else PIPE_PREFIX)
            output.append(render_tree(directory / entry.name, child_prefix, context, ancestors))

    return "".join(output)


__all__ = [
    "BRANCH",
    "LAST_BRANCH",
    "PIPE_PREFIX",
    "SPACE_PREFIX",
    "RenderContext",
    "filter_entries",
    "sort_entries",
    "render_tree",
]
