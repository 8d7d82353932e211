"""Entry exclusion using gitignore-style patterns."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Protocol

from pathspec import GitIgnoreSpec


class EntryFilter(Protocol):
    """Protocol for entry exclusion.

    Keeps walker logic decoupled from the matching strategy.
    """

    def should_exclude(self, path: Path, is_dir: bool) -> bool: ...


class NullFilter:
    """Default pass-through filter that excludes nothing."""

    def should_exclude(self, path: Path, is_dir: bool) -> bool:
        return False


class ExcludeFilter:
    """Filter entries by gitignore-style patterns relative to a root.

    Implements ``-x PATTERN`` and ``--gitignore`` exclusion behavior.
    """

    def __init__(self, root: Path, patterns: list[str] | None = None) -> None:
        """Initialize the pattern filter.

        Args:
            root: Scan root that patterns are anchored to.
            patterns: Optional gitignore pattern lines.
        """
        self._root = root
        self._spec = GitIgnoreSpec.from_lines(list(patterns) if patterns else [])

    def relative_key(self, path: Path, is_dir: bool) -> str:
        """Return the root-relative POSIX key matched against the patterns.

        Args:
            path: Entry path below the root.
            is_dir: Whether the entry is a directory.

        Returns:
            str: Relative path, with a trailing ``/`` for directories.
        """
        try:
            rel = PurePath(path).relative_to(self._root).as_posix()
        except ValueError:
            rel = PurePath(path).name
        return rel + "/" if is_dir else rel

    def should_exclude(self, path: Path, is_dir: bool) -> bool:
        """Return whether an entry should be skipped.

        Args:
            path: Entry path.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when the patterns ignore the entry.
        """
        return self._spec.match_file(self.relative_key(path, is_dir))
