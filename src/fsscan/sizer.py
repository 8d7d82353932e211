"""Recursive directory size calculation."""

from __future__ import annotations

import logging
from pathlib import Path

from fsscan.fs import EntryKind, FileSystem, OsFileSystem

logger = logging.getLogger(__name__)


def calc_size(path: Path, fs: FileSystem | None = None) -> int | None:
    """Sum the sizes of all regular files below ``path``.

    Subdirectories are descended into, symlinks never are, so a link
    back to an ancestor cannot loop. An entry whose status or size can't
    be read contributes 0.

    Args:
        path: Directory to measure.
        fs: Filesystem adapter. Defaults to ``OsFileSystem()``.

    Returns:
        int | None: Total bytes, or ``None`` if ``path`` can't be listed.
    """
    active_fs = fs or OsFileSystem()
    try:
        children = active_fs.list_dir(path)
    except OSError:
        logger.debug("Cannot list for size: %s", path)
        return None

    total = 0
    for child in children:
        try:
            kind = active_fs.kind(child)
        except OSError:
            logger.debug("Cannot stat: %s", child)
            continue

        if kind is EntryKind.FILE:
            try:
                total += active_fs.size(child)
            except OSError:
                logger.debug("Cannot read size: %s", child)
        elif kind is EntryKind.DIRECTORY:
            total += calc_size(child, active_fs) or 0
    return total
