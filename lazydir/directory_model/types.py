"""Domain datatypes for one listed directory level.

``Metadata`` and the classification fields of ``DirectoryEntry`` are captured
once when the entry is built so a caller that redraws every frame never has
to ask the operating system again. ``selected`` is the only field that may
change afterwards.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import FileDialogConfig
    from ..file_system import FileSystem

_WINDOWS_NAMESPACE_PREFIX = "\\\\?\\"


@dataclass(frozen=True)
class Metadata:
    """Best-effort stat snapshot; ``None`` means unknown, not zero."""

    size: int | None = None
    last_modified: float | None = None
    created: float | None = None
    file_type: str | None = None


def display_name(path: PurePath) -> str:
    """Return the row label for ``path``.

    Roots have no final component, so ``C:\\`` renders as ``C:`` (with any
    ``\\\\?\\`` namespace prefix removed) and ``/`` renders literally.
    """
    if path.name:
        return path.name

    drive = path.drive
    if drive:
        if drive.startswith(_WINDOWS_NAMESPACE_PREFIX):
            return drive[len(_WINDOWS_NAMESPACE_PREFIX) :]
        return drive

    if len(path.parts) == 1:
        return str(path)
    return ""


@dataclass(eq=False)
class DirectoryEntry:
    """One child of a listed directory with cached metadata and classification."""

    path: PurePath
    metadata: Metadata = field(default_factory=Metadata)
    is_dir: bool = False
    is_system_file: bool = False
    is_hidden: bool = False
    icon: str = ""
    selected: bool = False

    def __post_init__(self) -> None:
        if self.is_dir and self.is_system_file:
            raise ValueError(f"{self.path} cannot be both a directory and a system file")

    def __setattr__(self, name: str, value: object) -> None:
        if name != "selected" and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        object.__setattr__(self, name, value)

    @classmethod
    def from_path(
        cls,
        config: "FileDialogConfig",
        path: PurePath,
        file_system: "FileSystem",
    ) -> "DirectoryEntry":
        """Probe ``file_system`` once for ``path`` and freeze the results."""
        from .classify import classify

        classification = classify(config, path, file_system)
        return cls(
            path=path,
            metadata=classification.metadata,
            is_dir=classification.is_dir,
            is_system_file=classification.is_system_file,
            is_hidden=classification.is_hidden,
            icon=classification.icon,
        )

    @property
    def is_file(self) -> bool:
        """``True`` for anything that was not a directory when the entry was built."""
        return not self.is_dir

    @property
    def file_name(self) -> str:
        return display_name(self.path)

    def as_path(self) -> PurePath:
        return self.path

    def path_eq(self, other: "DirectoryEntry") -> bool:
        """Return whether both entries point at the same path."""
        return other.path == self.path


__all__ = [
    "Metadata",
    "DirectoryEntry",
    "display_name",
]
