"""Fixed-width line formatting for entries, aggregates and errors."""

from __future__ import annotations

from datetime import datetime
from typing import Final

from fsscan.fs import PERMISSIONS_SUPPORTED, EntryKind, SpecialKind
from fsscan.options import PathStyle, WalkOptions
from fsscan.walker import (
    Entry,
    EntryEvent,
    ErrorEvent,
    HiddenCategoryEvent,
    WalkEvent,
)

FIELD_WIDTH: Final[int] = 20
GAP: Final[str] = "    "
INDENT_WIDTH: Final[int] = 4

PERMISSIONS_WIDTH: Final[int] = 10
TIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
TIME_WIDTH: Final[int] = 19

NO_SIZE_MARKER: Final[str] = "-"

SPECIAL_MARKERS: Final[dict[SpecialKind, str]] = {
    SpecialKind.SOCKET: "SOCKET",
    SpecialKind.BLOCK_DEVICE: "BLOCK DEVICE",
    SpecialKind.FIFO: "FIFO PIPE",
    SpecialKind.OTHER: "SPECIAL",
}

HIDDEN_LABELS: Final[dict[EntryKind, str]] = {
    EntryKind.FILE: "files",
    EntryKind.SYMLINK: "symlinks",
    EntryKind.SPECIAL: "special entries",
}


def format_timestamp(timestamp: float | None) -> str:
    """Render a Unix timestamp in local time, ``?`` when unknown."""
    if timestamp is None:
        return "?".ljust(TIME_WIDTH)
    return datetime.fromtimestamp(timestamp).strftime(TIME_FORMAT)


def _prefix(options: WalkOptions, entry: Entry | None = None) -> str:
    """Build the optional permission and time blocks.

    Lines without an entry get blank blocks so columns stay aligned.

    Args:
        options: Active walk options.
        entry: Entry being rendered, ``None`` for aggregate/error lines.

    Returns:
        str: Prefix, empty when neither block is enabled.
    """
    blocks: list[str] = []
    if options.show_permissions and PERMISSIONS_SUPPORTED:
        if entry is None:
            blocks.append(" " * PERMISSIONS_WIDTH)
        else:
            blocks.append((entry.permissions or "?").ljust(PERMISSIONS_WIDTH))
    if options.show_mtime:
        if entry is None:
            blocks.append(" " * TIME_WIDTH)
        else:
            blocks.append(format_timestamp(entry.modified_time))
    return "".join(block + GAP for block in blocks)


def _indent(options: WalkOptions, level: int) -> str:
    if options.path_style is PathStyle.ABSOLUTE or options.searching:
        return ""
    return " " * (INDENT_WIDTH * level)


def _line(prefix: str, marker: str, indent: str, text: str) -> str:
    return f"{prefix}{marker:>{FIELD_WIDTH}}{GAP}{indent}{text}"


def entry_marker(entry: Entry) -> str:
    """Return the right-aligned type/size field for an entry."""
    if entry.kind is EntryKind.SYMLINK:
        return "SYMLINK"
    if entry.kind is EntryKind.SPECIAL:
        return SPECIAL_MARKERS[entry.special or SpecialKind.OTHER]
    if entry.kind is EntryKind.UNKNOWN:
        return "UNKNOWN"
    return NO_SIZE_MARKER if entry.size is None else str(entry.size)


def entry_text(entry: Entry) -> str:
    """Return the name column: ``<dir>``, ``link -> target`` or the name."""
    if entry.kind is EntryKind.DIRECTORY:
        return f"<{entry.display}>"
    if entry.kind is EntryKind.SYMLINK:
        target = "?" if entry.symlink_target is None else entry.symlink_target
        return f"{entry.display} -> {target}"
    return entry.display


def format_entry(event: EntryEvent, options: WalkOptions) -> str:
    entry = event.entry
    return _line(
        _prefix(options, entry),
        entry_marker(entry),
        _indent(options, event.level),
        entry_text(entry),
    )


def format_hidden(event: HiddenCategoryEvent, options: WalkOptions) -> str:
    """Format an aggregate line such as ``<3 files>``.

    The file aggregate carries the directory's byte total in the size
    field; the others show ``-``.
    """
    marker = NO_SIZE_MARKER if event.total_size is None else str(event.total_size)
    return _line(
        _prefix(options),
        marker,
        _indent(options, event.level),
        f"<{event.count} {HIDDEN_LABELS[event.kind]}>",
    )


def format_error(event: ErrorEvent, options: WalkOptions) -> str:
    exc = event.error
    message = exc.strerror or str(exc)
    if exc.errno is not None:
        message = f"{message} [errno {exc.errno}]"
    return _line(
        _prefix(options),
        "ERROR",
        _indent(options, event.level),
        f"{event.path}: {message}",
    )


def format_event(event: WalkEvent, options: WalkOptions) -> str:
    """Render any walker event as a single output line.

    Args:
        event: Event produced by ``Walker``.
        options: Options the walk ran with.

    Returns:
        str: One output line without trailing newline.
    """
    if isinstance(event, EntryEvent):
        return format_entry(event, options)
    if isinstance(event, HiddenCategoryEvent):
        return format_hidden(event, options)
    return format_error(event, options)
