"""Resolved run configuration for a scan."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SearchMode(enum.Enum):
    """Name matching strategy used by search mode."""

    NONE = "none"
    EXACT_NAME = "exact name"
    EXACT_STEM = "exact name without extension"
    SUBSTRING = "name contains"


class PathStyle(enum.Enum):
    """How entry paths are rendered."""

    INDENTED = "indented"
    ABSOLUTE = "absolute"


@dataclass(frozen=True, slots=True)
class WalkOptions:
    """Options controlling the walker and the reporter.

    Attributes:
        recursive: Whether to descend into subdirectories.
        max_depth: Recursion limit. Directories found at a level below it are
            descended into. ``0`` means unlimited.
        show_files: Whether regular files are listed individually.
        show_symlinks: Whether symlinks are listed individually.
        show_special: Whether special files are listed individually.
        show_permissions: Whether to prefix lines with a permission block.
        show_mtime: Whether to prefix lines with the modification time.
        path_style: Indented names or absolute canonical paths.
        dir_size: Whether to compute recursive directory sizes.
        show_errors: Whether per-entry I/O errors are reported inline.
        search_mode: Active search strategy, ``NONE`` for a normal listing.
        pattern: Search pattern, required when ``search_mode`` is set.
        strict_kinds: Whether an unclassifiable entry aborts the run.
    """

    recursive: bool = False
    max_depth: int = 0
    show_files: bool = False
    show_symlinks: bool = False
    show_special: bool = False
    show_permissions: bool = False
    show_mtime: bool = False
    path_style: PathStyle = PathStyle.INDENTED
    dir_size: bool = False
    show_errors: bool = False
    search_mode: SearchMode = SearchMode.NONE
    pattern: str = ""
    strict_kinds: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError("max_depth must be 0 (unlimited) or positive")
        if self.search_mode is not SearchMode.NONE and not self.pattern:
            raise ValueError(f"search mode '{self.search_mode.value}' needs a pattern")

    @property
    def searching(self) -> bool:
        return self.search_mode is not SearchMode.NONE

    def may_recurse(self, level: int) -> bool:
        """Return whether a directory found at ``level`` is descended into."""
        if not self.recursive:
            return False
        return self.max_depth == 0 or level < self.max_depth
