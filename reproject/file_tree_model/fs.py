"""Filesystem-backed directory reader for tree rendering."""

from __future__ import annotations

import os
from pathlib import Path

from .types import DirectoryEntry, EntryKind


def list_directory_entries(directory: Path) -> list[DirectoryEntry]:
    """Return the immediate children of ``directory`` in scan order.

    A symlink to a directory is listed as a directory; a dangling link is
    listed as a file. Raises ``OSError`` when ``directory`` itself cannot be
    scanned (missing, not a directory, permission denied).
    """
    entries: list[DirectoryEntry] = []
    with os.scandir(directory) as children:
        for child in children:
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            entries.append(
                DirectoryEntry(
                    name=child.name,
                    kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                )
            )
    return entries


__all__ = [
    "list_directory_entries",
]
