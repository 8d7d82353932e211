"""Recursive directory walker with per-directory aggregation and search mode."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, TypeVar, Union

from fsscan import FssError, UnclassifiableEntryError
from fsscan.filter import EntryFilter, NullFilter
from fsscan.fs import EntryKind, FileSystem, OsFileSystem, SpecialKind
from fsscan.matcher import get_matcher, name_stem
from fsscan.options import PathStyle, WalkOptions
from fsscan.sizer import calc_size

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry encountered during a walk.

    Attributes:
        path: Path of the entry as enumerated from its parent.
        name: Basename of the entry.
        kind: Type tag.
        display: Path text to render (name, or absolute/canonical path).
        special: Subtype, only for ``EntryKind.SPECIAL`` entries.
        size: Size in bytes, ``None`` when unknown or not computed.
        permissions: Mode string such as ``-rw-r--r--``.
        modified_time: Last modification time as a Unix timestamp.
        symlink_target: Link target, only for symlinks.
    """

    path: Path
    name: str
    kind: EntryKind
    display: str
    special: SpecialKind | None = None
    size: int | None = None
    permissions: str | None = None
    modified_time: float | None = None
    symlink_target: str | None = None


@dataclass(slots=True)
class DirectorySummary:
    """Counters for the immediate children of one directory.

    Also used as a running tally for the root, all-levels and search totals.
    """

    file_count: int = 0
    file_total_size: int = 0
    symlink_count: int = 0
    special_count: int = 0
    subdir_count: int = 0
    unknown_count: int = 0
    error_count: int = 0

    @property
    def total_entries(self) -> int:
        return (
            self.file_count
            + self.symlink_count
            + self.special_count
            + self.subdir_count
            + self.unknown_count
        )

    def add(self, kind: EntryKind, size: int | None = None) -> None:
        """Count one classified entry.

        Args:
            kind: Kind of the entry.
            size: File size to add to the byte total, if known.
        """
        if kind is EntryKind.FILE:
            self.file_count += 1
            if size is not None:
                self.file_total_size += size
        elif kind is EntryKind.SYMLINK:
            self.symlink_count += 1
        elif kind is EntryKind.SPECIAL:
            self.special_count += 1
        elif kind is EntryKind.DIRECTORY:
            self.subdir_count += 1
        else:
            self.unknown_count += 1

    def merge(self, other: DirectorySummary) -> None:
        """Fold another summary's counters into this one."""
        self.file_count += other.file_count
        self.file_total_size += other.file_total_size
        self.symlink_count += other.symlink_count
        self.special_count += other.special_count
        self.subdir_count += other.subdir_count
        self.unknown_count += other.unknown_count
        self.error_count += other.error_count


@dataclass(slots=True)
class SearchTotals:
    """Matched vs. traversed tallies of a search run."""

    matched: DirectorySummary = field(default_factory=DirectorySummary)
    traversed: DirectorySummary = field(default_factory=DirectorySummary)


@dataclass(slots=True)
class WalkState:
    """Accumulators for one run of the walker.

    Attributes:
        root_totals: Counts of the root directory's own children.
        grand_totals: Counts summed over every visited directory.
        search: Search-mode tallies.
        root_failed: Whether the root directory could not be listed.
        error_count: Number of I/O failures met during the run.
    """

    root_totals: DirectorySummary = field(default_factory=DirectorySummary)
    grand_totals: DirectorySummary = field(default_factory=DirectorySummary)
    search: SearchTotals = field(default_factory=SearchTotals)
    root_failed: bool = False
    error_count: int = 0


@dataclass(frozen=True, slots=True)
class EntryEvent:
    """An entry line is due."""

    entry: Entry
    level: int


@dataclass(frozen=True, slots=True)
class HiddenCategoryEvent:
    """Aggregate line for a kind whose entries were not shown individually."""

    kind: EntryKind
    count: int
    total_size: int | None
    level: int


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """An I/O failure to report inline."""

    path: Path
    error: OSError
    level: int


WalkEvent = Union[EntryEvent, HiddenCategoryEvent, ErrorEvent]


def _discard(event: WalkEvent) -> None:
    pass


def _require_path(path: Path | str | None) -> Path:
    """Return ``path`` as a ``Path``, rejecting empty input.

    Only ``None`` and the empty string are rejected. ``Path("")`` is
    already normalized to ``Path(".")`` by ``pathlib``, so it is taken
    as the current directory.

    Raises:
        FssError: If ``path`` is ``None`` or an empty string.
    """
    if path is None or (isinstance(path, str) and not path):
        raise FssError("Path can not be empty")
    return Path(path)


class Walker:
    """Depth-first scanner producing entry events and directory summaries.

    The walker only computes: it hands ``WalkEvent`` objects to ``sink``
    in output order and leaves rendering to ``fsscan.formatter``.
    """

    def __init__(
        self,
        options: WalkOptions | None = None,
        fs: FileSystem | None = None,
        sink: Callable[[WalkEvent], None] | None = None,
        entry_filter: EntryFilter | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            options: Walk options. Defaults to ``WalkOptions()``.
            fs: Filesystem adapter. Defaults to ``OsFileSystem()``.
            sink: Callable receiving events in output order.
            entry_filter: Optional exclusion filter.
        """
        self.options = options or WalkOptions()
        self.fs = fs or OsFileSystem()
        self.state = WalkState()
        self._sink = sink or _discard
        self._filter = entry_filter or NullFilter()

    def run(self, root: Path | str) -> WalkState:
        """Scan from ``root`` with fresh accumulators.

        Args:
            root: Start directory (level 0).

        Returns:
            WalkState: Totals of the run.

        Raises:
            FssError: If ``root`` is empty, or an entry can't be classified
                in strict mode.
        """
        self.state = WalkState()
        if self.options.searching:
            self.search(root, 0)
        else:
            self.walk(root, 0)
        return self.state

    # ------------------------------------------------------------------
    # Display walk
    # ------------------------------------------------------------------
    def walk(self, path: Path | str, level: int) -> DirectorySummary:
        """List one directory, recursing as the options allow.

        Args:
            path: Directory to list.
            level: Depth of ``path`` below the scan root.

        Returns:
            DirectorySummary: Counts of this directory's own children.
        """
        directory = _require_path(path)
        opts = self.options
        summary = DirectorySummary()

        children = self._list(directory, level)
        if children is None:
            return summary

        for child in children:
            entry = self._classify(child, level, summary)
            if entry is None:
                continue

            if entry.kind is EntryKind.SYMLINK:
                summary.add(entry.kind)
                if opts.show_symlinks:
                    target = self._target(entry, level)
                    self._emit_entry(entry, level, symlink_target=target)
            elif entry.kind is EntryKind.FILE:
                size = self._query(self.fs.size, entry.path, level)
                summary.add(entry.kind, size)
                if opts.show_files:
                    self._emit_entry(entry, level, size=size)
            elif entry.kind is EntryKind.SPECIAL:
                summary.add(entry.kind)
                if opts.show_special:
                    special = self.fs.special_kind(entry.path)
                    self._emit_entry(entry, level, special=special)
            elif entry.kind is EntryKind.DIRECTORY:
                summary.add(entry.kind)
                size = calc_size(entry.path, self.fs) if opts.dir_size else None
                self._emit_entry(entry, level, size=size)
                if opts.may_recurse(level):
                    self.walk(entry.path, level + 1)
            else:
                summary.add(entry.kind)
                self._emit_entry(entry, level)

        self.state.grand_totals.merge(summary)
        if level == 0:
            self.state.root_totals.merge(summary)

        self._emit_hidden(summary, level)
        return summary

    def _emit_hidden(self, summary: DirectorySummary, level: int) -> None:
        opts = self.options
        file_size = summary.file_total_size
        hidden = [
            (EntryKind.FILE, opts.show_files, summary.file_count, file_size),
            (EntryKind.SYMLINK, opts.show_symlinks, summary.symlink_count, None),
            (EntryKind.SPECIAL, opts.show_special, summary.special_count, None),
        ]
        for kind, shown, count, total_size in hidden:
            if count and not shown:
                self._sink(HiddenCategoryEvent(kind, count, total_size, level))

    # ------------------------------------------------------------------
    # Search walk
    # ------------------------------------------------------------------
    def search(self, path: Path | str, level: int) -> None:
        """Walk like ``walk`` but report only entries whose name matches.

        Every classified entry counts as traversed. An entry counts as
        matched when its name matches and its kind is shown; directories
        are always eligible.

        Args:
            path: Directory to search.
            level: Depth of ``path`` below the scan root.

        Raises:
            ValueError: If the options carry no search mode.
        """
        directory = _require_path(path)
        totals = self.state.search
        matcher = get_matcher(self.options.search_mode)
        pattern = self.options.pattern

        children = self._list(directory, level)
        if children is None:
            return

        for child in children:
            entry = self._classify(child, level, totals.traversed)
            if entry is None:
                continue

            totals.traversed.add(entry.kind)
            name = entry.name
            if self._is_shown(entry.kind) and matcher.matches(
                name, name_stem(name), pattern
            ):
                self._record_match(entry, level)

            if entry.kind is EntryKind.DIRECTORY and self.options.may_recurse(level):
                self.search(entry.path, level + 1)

    def _is_shown(self, kind: EntryKind) -> bool:
        opts = self.options
        if kind is EntryKind.DIRECTORY:
            return True
        if kind is EntryKind.FILE:
            return opts.show_files
        if kind is EntryKind.SYMLINK:
            return opts.show_symlinks
        return opts.show_special

    def _record_match(self, entry: Entry, level: int) -> None:
        details: dict[str, Any] = {}
        if entry.kind is EntryKind.FILE:
            details["size"] = self._query(self.fs.size, entry.path, level)
        elif entry.kind is EntryKind.DIRECTORY and self.options.dir_size:
            details["size"] = calc_size(entry.path, self.fs)
        self.state.search.matched.add(entry.kind, details.get("size"))

        display = self._canonical_display(entry, level)
        if display is None:
            return

        if entry.kind is EntryKind.SYMLINK:
            details["symlink_target"] = self._target(entry, level)
        elif entry.kind is EntryKind.SPECIAL:
            details["special"] = self.fs.special_kind(entry.path)
        self._emit_entry(entry, level, display=display, **details)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    def _list(self, directory: Path, level: int) -> list[Path] | None:
        try:
            return self.fs.list_dir(directory)
        except OSError as exc:
            self._report_error(directory, exc, level)
            if level == 0:
                self.state.root_failed = True
            return None

    def _classify(
        self, path: Path, level: int, summary: DirectorySummary
    ) -> Entry | None:
        """Build the entry for ``path``, or ``None`` when it is skipped.

        Raises:
            UnclassifiableEntryError: On an unknown kind in strict mode.
        """
        try:
            kind = self.fs.kind(path)
        except OSError as exc:
            self._report_error(path, exc, level)
            summary.error_count += 1
            return None

        if self._filter.should_exclude(path, kind is EntryKind.DIRECTORY):
            return None

        if kind is EntryKind.UNKNOWN and self.options.strict_kinds:
            raise UnclassifiableEntryError(
                f"File type of '{path}' can not be determined"
            )

        return Entry(path=path, name=path.name, kind=kind, display=path.name)

    def _emit_entry(self, entry: Entry, level: int, **details: Any) -> None:
        opts = self.options
        if "display" not in details and opts.path_style is PathStyle.ABSOLUTE:
            details["display"] = self._absolute_display(entry, level)
        if opts.show_permissions:
            details["permissions"] = self._query(self.fs.permissions, entry.path, level)
        if opts.show_mtime:
            details["modified_time"] = self._query(
                self.fs.modified_time, entry.path, level
            )
        self._sink(EntryEvent(replace(entry, **details), level))

    def _absolute_display(self, entry: Entry, level: int) -> str:
        """Canonical path, or the absolute path for symlinks and on failure."""
        if entry.kind is not EntryKind.SYMLINK:
            canonical = self._query(self.fs.canonicalize, entry.path, level)
            if canonical is not None:
                return str(canonical)
        try:
            return str(self.fs.absolute(entry.path))
        except OSError as exc:
            self._report_error(entry.path, exc, level)
            return str(entry.path)

    def _canonical_display(self, entry: Entry, level: int) -> str | None:
        """Like ``_absolute_display`` but ``None`` when resolution fails."""
        resolve = (
            self.fs.absolute
            if entry.kind is EntryKind.SYMLINK
            else self.fs.canonicalize
        )
        resolved = self._query(resolve, entry.path, level)
        return None if resolved is None else str(resolved)

    def _target(self, entry: Entry, level: int) -> str | None:
        return self._query(self.fs.read_link, entry.path, level)

    def _query(self, func: Callable[[Path], T], path: Path, level: int) -> T | None:
        try:
            return func(path)
        except OSError as exc:
            self._report_error(path, exc, level)
            return None

    def _report_error(self, path: Path, exc: OSError, level: int) -> None:
        logger.debug("Cannot access %s: %s", path, exc)
        self.state.error_count += 1
        if self.options.show_errors:
            self._sink(ErrorEvent(path, exc, level))
