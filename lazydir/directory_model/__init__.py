"""Domain model for single-level directory listings.

This package contains the non-UI listing primitives:
- metadata and entry datatypes cached once per child path
- per-entry classification (kind, hidden, icon)
- directory loading with visibility filters and stable ordering
- a pollable listing handle loaded inline or on a worker thread
"""

from __future__ import annotations

from .types import DirectoryEntry, Metadata, display_name
from .classify import Classification, classify, gen_path_icon
from .loader import directory_sort_key, load_directory
from .promise import Promise
from .content import DirectoryContent, DirectoryContentState, LoadResult, matches_search_value

__all__ = [
    "Metadata",
    "DirectoryEntry",
    "display_name",
    "Classification",
    "classify",
    "gen_path_icon",
    "directory_sort_key",
    "load_directory",
    "Promise",
    "DirectoryContent",
    "DirectoryContentState",
    "LoadResult",
    "matches_search_value",
]
