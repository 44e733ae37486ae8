"""Listing configuration plus persisted visibility preferences.

``FileDialogConfig`` is what the directory loader consumes: visibility toggles,
icon rules, and the inline/background switch. ``FileDialogStorage`` is the
subset remembered between runs in a small JSON file. All persistence access is
defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazydir"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_FOLDER_ICON = "🗀"
DEFAULT_FILE_ICON = "🖹"

PathPredicate = Callable[[Path], bool]


@dataclass(frozen=True)
class IconFilter:
    """Icon shown for every path the predicate accepts."""

    icon: str
    filter: PathPredicate


@dataclass(frozen=True)
class FileFilter:
    """Named predicate that decides which files a listing keeps."""

    name: str
    filter: PathPredicate

    @classmethod
    def for_extensions(cls, name: str, *extensions: str) -> "FileFilter":
        """Build a filter accepting files whose suffix is one of ``extensions``.

        Extensions may be given with or without the leading dot and match
        case-insensitively.
        """
        wanted = frozenset("." + ext.lower().lstrip(".") for ext in extensions if ext.strip("."))

        def accepts(path: Path) -> bool:
            return path.suffix.lower() in wanted

        return cls(name=name, filter=accepts)


@dataclass
class FileDialogStorage:
    """Preferences that survive between runs."""

    show_hidden: bool = False
    show_system_files: bool = False
    last_visited_dir: Path | None = None


@dataclass
class FileDialogConfig:
    """Options consumed by directory loading and entry classification."""

    storage: FileDialogStorage = field(default_factory=FileDialogStorage)
    load_via_thread: bool = True
    file_icon_filters: list[IconFilter] = field(default_factory=list)
    file_filters: list[FileFilter] = field(default_factory=list)
    default_folder_icon: str = DEFAULT_FOLDER_ICON
    default_file_icon: str = DEFAULT_FILE_ICON

    def set_file_icon(self, icon: str, filter: PathPredicate) -> "FileDialogConfig":
        """Append an icon rule. Earlier rules take precedence."""
        self.file_icon_filters.append(IconFilter(icon=icon, filter=filter))
        return self

    def add_file_filter(self, name: str, filter: PathPredicate) -> "FileDialogConfig":
        self.file_filters.append(FileFilter(name=name, filter=filter))
        return self

    def file_filter_by_name(self, name: str) -> FileFilter | None:
        for file_filter in self.file_filters:
            if file_filter.name == name:
                return file_filter
        return None

    def snapshot(self) -> "FileDialogConfig":
        """Return a copy whose storage and rule lists are detached from ``self``."""
        return replace(
            self,
            storage=replace(self.storage),
            file_icon_filters=list(self.file_icon_filters),
            file_filters=list(self.file_filters),
        )


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored; preferences are not
    worth failing a listing over.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Could not write config %s: %s", CONFIG_PATH, exc)


def _load_bool(data: dict[str, object], key: str) -> bool:
    """Only explicit booleans are accepted; anything else reads as ``False``."""
    value = data.get(key)
    return value if isinstance(value, bool) else False


def load_storage() -> FileDialogStorage:
    """Load persisted visibility preferences and the last visited directory."""
    data = load_config()
    raw_dir = data.get("last_visited_dir")
    last_visited_dir = Path(raw_dir) if isinstance(raw_dir, str) and raw_dir else None
    return FileDialogStorage(
        show_hidden=_load_bool(data, "show_hidden"),
        show_system_files=_load_bool(data, "show_system_files"),
        last_visited_dir=last_visited_dir,
    )


def save_storage(storage: FileDialogStorage) -> None:
    """Merge ``storage`` into the persisted config, keeping unrelated keys."""
    config = load_config()
    config["show_hidden"] = bool(storage.show_hidden)
    config["show_system_files"] = bool(storage.show_system_files)
    if storage.last_visited_dir is None:
        config.pop("last_visited_dir", None)
    else:
        config["last_visited_dir"] = str(storage.last_visited_dir)
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_FILE_ICON",
    "DEFAULT_FOLDER_ICON",
    "FileDialogConfig",
    "FileDialogStorage",
    "FileFilter",
    "IconFilter",
    "load_config",
    "load_storage",
    "save_config",
    "save_storage",
]
