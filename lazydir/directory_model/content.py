"""Pollable directory listing loaded inline or on a background thread.

A presentation layer typically asks for ``DirectoryContent.from_path`` once per
navigation and then reads it every frame. Until the load finishes (and also
when it failed) every read operation behaves like an empty listing, so
callers that only iterate never block or raise. Callers that care about the
difference check ``state`` or ``error_message``.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from .loader import load_directory
from .promise import Promise
from .types import DirectoryEntry

if TYPE_CHECKING:
    from ..config import FileDialogConfig, FileFilter
    from ..file_system import FileSystem

logger = logging.getLogger(__name__)

LOAD_THREAD_NAME = "lazydir-directory-load"


class DirectoryContentState(enum.Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERRORED = "errored"


@dataclass(frozen=True)
class LoadResult:
    """Terminal payload of one load: entries on success, a message on error."""

    entries: list[DirectoryEntry] | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.entries is None) == (self.error is None):
            raise ValueError("exactly one of entries or error must be set")

    @classmethod
    def success(cls, entries: list[DirectoryEntry]) -> "LoadResult":
        return cls(entries=entries)

    @classmethod
    def failure(cls, exc: BaseException) -> "LoadResult":
        return cls(error=str(exc) or type(exc).__name__)


def _run_load(
    config: "FileDialogConfig",
    path: PurePath,
    include_files: bool,
    file_filter: "FileFilter | None",
    file_system: "FileSystem",
) -> LoadResult:
    try:
        return LoadResult.success(load_directory(config, path, include_files, file_filter, file_system))
    except OSError as exc:
        logger.warning("Failed to load directory %s: %s", path, exc)
        return LoadResult.failure(exc)


def matches_search_value(entry: DirectoryEntry, search_value: str) -> bool:
    """Case-insensitive substring test on the display name; ``""`` matches all.

    Both sides go through ``str.casefold()``, which folds more aggressively than
    lowercasing: ``"ss"`` matches ``"straße"``.
    """
    return not search_value or search_value.casefold() in entry.file_name.casefold()


class DirectoryContent:
    """Owns one listing's completion cell and the entries inside it."""

    def __init__(
        self,
        content: Promise[LoadResult] | None = None,
        creation_time: float | None = None,
    ) -> None:
        self.content: Promise[LoadResult] = (
            content if content is not None else Promise.from_ready(LoadResult.success([]))
        )
        self.creation_time = creation_time if creation_time is not None else time.time()

    @classmethod
    def from_path(
        cls,
        config: "FileDialogConfig",
        path: PurePath,
        include_files: bool,
        file_filter: "FileFilter | None",
        file_system: "FileSystem",
    ) -> "DirectoryContent":
        """Start loading ``path``; returns immediately when ``load_via_thread`` is set.

        Inline mode blocks for the whole filesystem walk and returns a listing
        that is already terminal.
        """
        creation_time = time.time()
        if config.load_via_thread:
            snapshot = config.snapshot()
            promise = Promise.spawn_thread(
                LOAD_THREAD_NAME,
                lambda: _run_load(snapshot, path, include_files, file_filter, file_system),
                on_error=LoadResult.failure,
            )
        else:
            promise = Promise.from_ready(_run_load(config, path, include_files, file_filter, file_system))
        return cls(content=promise, creation_time=creation_time)

    def _entries(self) -> list[DirectoryEntry] | None:
        result = self.content.ready()
        if result is None:
            return None
        return result.entries

    @property
    def state(self) -> DirectoryContentState:
        result = self.content.ready()
        if result is None:
            return DirectoryContentState.PENDING
        if result.entries is None:
            return DirectoryContentState.ERRORED
        return DirectoryContentState.SUCCESS

    def is_pending(self) -> bool:
        return not self.content.is_ready()

    @property
    def error_message(self) -> str | None:
        result = self.content.ready()
        if result is None:
            return None
        return result.error

    def elapsed(self) -> float:
        """Seconds since the listing was requested."""
        return max(0.0, time.time() - self.creation_time)

    def iter(self) -> Iterator[DirectoryEntry]:
        return iter(self._entries() or ())

    def iter_mut(self) -> Iterator[DirectoryEntry]:
        """Same entries as ``iter``; yielded objects may have ``selected`` changed."""
        return self.iter()

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return self.iter()

    def iter_range(self, start: int, stop: int) -> Iterator[DirectoryEntry]:
        """Iterate ``entries[start:stop]`` without filtering; out-of-range and negative bounds clamp."""
        entries = self._entries()
        if entries is None:
            return iter(())
        return iter(entries[max(start, 0) : max(stop, 0)])

    def iter_range_mut(self, start: int, stop: int) -> Iterator[DirectoryEntry]:
        return self.iter_range(start, stop)

    def filtered_iter(self, search_value: str) -> Iterator[DirectoryEntry]:
        """Lazily yield entries whose display name contains ``search_value``."""
        return (entry for entry in self.iter() if matches_search_value(entry, search_value))

    def filtered_iter_mut(self, search_value: str) -> Iterator[DirectoryEntry]:
        return self.filtered_iter(search_value)

    def reset_multi_selection(self) -> None:
        """Mark every entry as unselected."""
        for entry in self.iter_mut():
            entry.selected = False

    def __len__(self) -> int:
        entries = self._entries()
        return len(entries) if entries is not None else 0

    def push(self, entry: DirectoryEntry) -> None:
        """Append ``entry`` to a successful listing; ignored while pending or errored."""
        entries = self._entries()
        if entries is not None:
            entries.append(entry)

    def __repr__(self) -> str:
        return f"DirectoryContent(state={self.state.value}, entries={len(self)})"


__all__ = [
    "DirectoryContent",
    "DirectoryContentState",
    "LoadResult",
    "matches_search_value",
]
