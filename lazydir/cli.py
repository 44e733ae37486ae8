"""Command-line front door for lazydir.

Parses CLI options, resolves the target directory, and requests a listing.
Then polls it to completion and prints one row per entry.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from .config import FileDialogConfig, FileFilter, load_storage, save_storage
from .directory_model import DirectoryContent, DirectoryContentState, DirectoryEntry
from .file_system import NativeFileSystem

LOADING_NOTICE_SECONDS = 0.5
POLL_INTERVAL_SECONDS = 0.01

DIR_COLOR = "\033[1;34m"
FILE_COLOR = "\033[38;5;252m"
SYSTEM_COLOR = "\033[38;5;179m"
SIZE_COLOR = "\033[38;5;109m"
RESET = "\033[0m"


def format_size(size_bytes: int) -> str:
    """Format a byte count with a binary unit suffix (``512 B``, ``1.5 KB``)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = size_bytes / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def format_entry_row(entry: DirectoryEntry, no_color: bool) -> str:
    """Render ``icon name[/] [size]`` for one entry."""
    suffix = "/" if entry.is_dir else ""
    size = entry.metadata.size
    size_label = f" [{format_size(size)}]" if size is not None and not entry.is_dir else ""
    if no_color:
        return f"{entry.icon} {entry.file_name}{suffix}{size_label}"

    if entry.is_dir:
        name_color = DIR_COLOR
    elif entry.is_system_file:
        name_color = SYSTEM_COLOR
    else:
        name_color = FILE_COLOR
    if size_label:
        size_label = f"{SIZE_COLOR}{size_label}{RESET}"
    return f"{entry.icon} {name_color}{entry.file_name}{suffix}{RESET}{size_label}"


def wait_for_listing(
    content: DirectoryContent,
    path: Path,
    stream: TextIO,
    notice_seconds: float = LOADING_NOTICE_SECONDS,
) -> None:
    """Poll ``content`` until it is terminal, noting slow loads on ``stream`` once."""
    noticed = False
    while content.is_pending():
        if not noticed and content.elapsed() >= notice_seconds:
            stream.write(f"Loading {path} ...\n")
            stream.flush()
            noticed = True
        time.sleep(POLL_INTERVAL_SECONDS)


def render_listing(content: DirectoryContent, search_value: str, no_color: bool) -> str:
    """Render the filtered listing, one row per line."""
    return "".join(format_entry_row(entry, no_color) + "\n" for entry in content.filtered_iter(search_value))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List one directory level with icons and sizes.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument(
        "--hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show hidden entries (default: stored preference).",
    )
    parser.add_argument(
        "--system",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show entries that are neither files nor directories (default: stored preference).",
    )
    parser.add_argument("--dirs-only", action="store_true", help="List directories only.")
    parser.add_argument(
        "--ext",
        action="append",
        default=[],
        metavar="EXT",
        help="Only list files with this extension. May be repeated.",
    )
    parser.add_argument("--search", default="", help="Case-insensitive substring filter on entry names.")
    parser.add_argument("--inline", action="store_true", help="Load on the calling thread instead of a worker.")
    parser.add_argument("--remember", action="store_true", help="Persist visibility flags and this directory.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--verbose", action="store_true", help="Log loading details to stderr.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the listing of one directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = _build_parser().parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    storage = load_storage()
    if args.hidden is not None:
        storage.show_hidden = args.hidden
    if args.system is not None:
        storage.show_system_files = args.system
    config = FileDialogConfig(storage=storage, load_via_thread=not args.inline)
    file_filter = FileFilter.for_extensions("cli", *args.ext) if args.ext else None

    content = DirectoryContent.from_path(
        config,
        path,
        include_files=not args.dirs_only,
        file_filter=file_filter,
        file_system=NativeFileSystem(),
    )
    wait_for_listing(content, path, sys.stderr)
    if content.state is DirectoryContentState.ERRORED:
        raise SystemExit(f"Cannot list {path}: {content.error_message}")

    if args.remember:
        storage.last_visited_dir = path.resolve()
        save_storage(storage)

    sys.stdout.write(render_listing(content, args.search, args.no_color))


if __name__ == "__main__":
    main()
