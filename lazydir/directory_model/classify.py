"""Per-entry classification: kind, visibility, icon, and cached metadata."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, TypeVar

from .types import Metadata

if TYPE_CHECKING:
    from ..config import FileDialogConfig
    from ..file_system import FileSystem

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Classification:
    """Everything ``DirectoryEntry`` caches about one path."""

    metadata: Metadata
    is_dir: bool
    is_system_file: bool
    is_hidden: bool
    icon: str


def _probe(label: str, probe: Callable[[PurePath], T], path: PurePath, fallback: T) -> T:
    """Run one capability query, degrading an ``OSError`` to ``fallback``."""
    try:
        return probe(path)
    except OSError as exc:
        logger.debug("%s probe failed for %s: %s", label, path, exc)
        return fallback


def gen_path_icon(config: "FileDialogConfig", path: PurePath, is_dir: bool) -> str:
    """Return the icon of the first matching rule, else the folder/file default."""
    for icon_filter in config.file_icon_filters:
        if icon_filter.filter(path):
            return icon_filter.icon

    if is_dir:
        return config.default_folder_icon
    return config.default_file_icon


def classify(config: "FileDialogConfig", path: PurePath, file_system: "FileSystem") -> Classification:
    """Classify ``path`` with one query per question; never raises ``OSError``.

    A path that is neither a directory nor a regular file (vanished, special
    device, permission denied) is a system file.
    """
    is_dir = _probe("is_dir", file_system.is_dir, path, False)
    is_regular_file = _probe("is_file", file_system.is_file, path, False)
    metadata = _probe("metadata", file_system.metadata, path, None) or Metadata()
    return Classification(
        metadata=metadata,
        is_dir=is_dir,
        is_system_file=not is_dir and not is_regular_file,
        is_hidden=_probe("is_path_hidden", file_system.is_path_hidden, path, False),
        icon=gen_path_icon(config, path, is_dir),
    )


__all__ = [
    "Classification",
    "classify",
    "gen_path_icon",
]
