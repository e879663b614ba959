"""Domain model for directory listings consumed by the tree renderer.

This package contains non-UI tree primitives:
- entry kind and per-listing entry datatypes
- the default filesystem-backed directory reader
"""

from __future__ import annotations

from .types import DirectoryEntry, DirectoryReader, EntryKind
from .fs import list_directory_entries

__all__ = [
    "DirectoryEntry",
    "DirectoryReader",
    "EntryKind",
    "list_directory_entries",
]
