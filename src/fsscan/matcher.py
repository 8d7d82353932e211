"""Name matching strategies for search mode."""

from __future__ import annotations

import os
from typing import Final, Protocol

from fsscan.options import SearchMode


class NameMatcher(Protocol):
    """Protocol for search-mode name matching.

    Keeps the walker decoupled from the matching strategy.
    """

    def matches(self, name: str, stem: str, pattern: str) -> bool: ...


class ExactNameMatcher:
    """Full file name equality."""

    def matches(self, name: str, stem: str, pattern: str) -> bool:
        return name == pattern


class ExactStemMatcher:
    """Equality of the name with its final extension removed."""

    def matches(self, name: str, stem: str, pattern: str) -> bool:
        return stem == pattern


class SubstringMatcher:
    """Pattern occurs anywhere in the file name."""

    def matches(self, name: str, stem: str, pattern: str) -> bool:
        return pattern in name


MATCHERS: Final[dict[SearchMode, NameMatcher]] = {
    SearchMode.EXACT_NAME: ExactNameMatcher(),
    SearchMode.EXACT_STEM: ExactStemMatcher(),
    SearchMode.SUBSTRING: SubstringMatcher(),
}


def name_stem(name: str) -> str:
    """Return ``name`` without its final extension.

    Leading dots do not start an extension, so ``.bashrc`` is its own stem.

    Args:
        name: Entry basename.

    Returns:
        str: Stem of the name.
    """
    return os.path.splitext(name)[0]


def get_matcher(mode: SearchMode) -> NameMatcher:
    """Return the matcher registered for ``mode``.

    Raises:
        ValueError: If ``mode`` is ``SearchMode.NONE``.
    """
    try:
        return MATCHERS[mode]
    except KeyError:
        raise ValueError(f"No matcher for search mode '{mode.value}'") from None


def matches(name: str, stem: str, pattern: str, mode: SearchMode) -> bool:
    """Return whether an entry name matches ``pattern`` under ``mode``.

    Args:
        name: Entry basename.
        stem: Basename without its final extension.
        pattern: Search pattern.
        mode: Active search mode.

    Returns:
        bool: ``True`` on a match.
    """
    return get_matcher(mode).matches(name, stem, pattern)
