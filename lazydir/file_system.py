"""Filesystem capability consumed by directory loading.

The loader never touches ``os`` directly; it asks a ``FileSystem`` so callers
can substitute virtual or remote trees. ``NativeFileSystem`` is the default,
backed by ``os.scandir``/``os.stat``. Implementations are shared with
background load threads and must tolerate concurrent reads.
"""

from __future__ import annotations

import logging
import os
import stat
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from pygments.lexers import find_lexer_class_for_filename

from .directory_model.types import Metadata

logger = logging.getLogger(__name__)

FOLDER_FILE_TYPE = "Folder"


class FileSystem(Protocol):
    """Read-only view of a tree, one directory level at a time."""

    def read_dir(self, path: Path) -> list[Path]:
        """Return the immediate children of ``path``; raise ``OSError`` on failure."""
        ...

    def metadata(self, path: Path) -> Metadata | None:
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def is_file(self, path: Path) -> bool:
        ...

    def is_path_hidden(self, path: Path) -> bool:
        ...


@lru_cache(maxsize=4096)
def file_type_for_name(name: str) -> str | None:
    """Return a human-readable file type for ``name`` from the Pygments registry."""
    try:
        lexer_class = find_lexer_class_for_filename(name)
    except Exception as exc:
        # Third-party lexer plugins are loaded lazily and may be broken.
        logger.debug("Lexer lookup failed for %r: %s", name, exc)
        return None
    if lexer_class is None:
        return None
    return lexer_class.name


def _safe_stat(path: Path) -> os.stat_result | None:
    try:
        return os.stat(path)
    except (OSError, ValueError):
        return None


class NativeFileSystem:
    """``FileSystem`` backed by the local operating system."""

    def read_dir(self, path: Path) -> list[Path]:
        with os.scandir(path) as entries:
            return [Path(entry.path) for entry in entries]

    def metadata(self, path: Path) -> Metadata | None:
        """Stat ``path`` once; ``None`` when the path cannot be stat'ed at all."""
        st = _safe_stat(path)
        if st is None:
            return None

        is_dir = stat.S_ISDIR(st.st_mode)
        if is_dir:
            file_type: str | None = FOLDER_FILE_TYPE
        elif stat.S_ISREG(st.st_mode):
            file_type = file_type_for_name(path.name)
        else:
            file_type = None

        return Metadata(
            size=None if is_dir else int(st.st_size),
            last_modified=float(st.st_mtime),
            created=getattr(st, "st_birthtime", None),
            file_type=file_type,
        )

    def is_dir(self, path: Path) -> bool:
        st = _safe_stat(path)
        return st is not None and stat.S_ISDIR(st.st_mode)

    def is_file(self, path: Path) -> bool:
        st = _safe_stat(path)
        return st is not None and stat.S_ISREG(st.st_mode)

    def is_path_hidden(self, path: Path) -> bool:
        if os.name != "nt":
            return path.name.startswith(".")
        try:
            attributes = os.stat(path, follow_symlinks=False).st_file_attributes
        except OSError:
            return False
        return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


__all__ = [
    "FOLDER_FILE_TYPE",
    "FileSystem",
    "NativeFileSystem",
    "file_type_for_name",
]
