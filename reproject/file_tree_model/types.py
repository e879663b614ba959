"""Domain datatypes for one directory listing."""

from __future__ import annotations

import enum
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of a listed directory.

    Entries are produced fresh by every listing call and are not cached.
    """

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


# Lists the immediate children of a directory, raising ``OSError`` when the
# directory cannot be read.
DirectoryReader = Callable[[Path], Sequence[DirectoryEntry]]


__all__ = [
    "EntryKind",
    "DirectoryEntry",
    "DirectoryReader",
]
