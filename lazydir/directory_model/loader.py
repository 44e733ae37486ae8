"""Load, filter, and sort the immediate children of one directory."""

from __future__ import annotations

import logging
import time
from pathlib import PurePath
from typing import TYPE_CHECKING

from .types import DirectoryEntry

if TYPE_CHECKING:
    from ..config import FileDialogConfig, FileFilter
    from ..file_system import FileSystem

logger = logging.getLogger(__name__)


def directory_sort_key(entry: DirectoryEntry) -> tuple[bool, str, str]:
    """Directories first, then case-sensitive display name; path breaks ties."""
    return (not entry.is_dir, entry.file_name, str(entry.path))


def _is_visible(
    config: "FileDialogConfig",
    entry: DirectoryEntry,
    include_files: bool,
    file_filter: "FileFilter | None",
) -> bool:
    if entry.is_system_file and not config.storage.show_system_files:
        return False
    if entry.is_file and not include_files:
        return False
    if entry.is_hidden and not config.storage.show_hidden:
        return False
    if file_filter is not None and entry.is_file and not file_filter.filter(entry.path):
        return False
    return True


def load_directory(
    config: "FileDialogConfig",
    path: PurePath,
    include_files: bool,
    file_filter: "FileFilter | None",
    file_system: "FileSystem",
) -> list[DirectoryEntry]:
    """Return the visible children of ``path`` in display order.

    Raises ``OSError`` only when ``path`` itself cannot be enumerated; a child
    that cannot be inspected is kept as a system file instead.
    """
    started = time.monotonic()
    children = list(file_system.read_dir(path))

    entries: list[DirectoryEntry] = []
    for child in children:
        entry = DirectoryEntry.from_path(config, child, file_system)
        if _is_visible(config, entry, include_files, file_filter):
            entries.append(entry)

    entries.sort(key=directory_sort_key)
    logger.debug(
        "Loaded %s: kept %d of %d entries in %.3fs",
        path,
        len(entries),
        len(children),
        time.monotonic() - started,
    )
    return entries


__all__ = [
    "directory_sort_key",
    "load_directory",
]
