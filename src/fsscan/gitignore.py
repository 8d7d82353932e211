"""Gitignore integration — read the scan root's .gitignore patterns."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def load_gitignore_patterns(root: Path) -> list[str]:
    """Load .gitignore lines from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        The file's lines when a ``.gitignore`` exists and is readable,
        otherwise an empty list.
    """
    gitignore_path = root / ".gitignore"
    try:
        return gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return []
