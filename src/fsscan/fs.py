"""Filesystem access adapter: thin wrappers over os.lstat / os.scandir."""

from __future__ import annotations

import enum
import os
import stat
from pathlib import Path
from typing import Final, Protocol


class EntryKind(enum.Enum):
    """Type tag of a filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    SPECIAL = "special"
    UNKNOWN = "unknown"


class SpecialKind(enum.Enum):
    """Subtype of a special (non-regular, non-directory, non-symlink) entry."""

    SOCKET = "socket"
    BLOCK_DEVICE = "block device"
    FIFO = "fifo"
    OTHER = "other"


class FileSystem(Protocol):
    """Protocol for filesystem queries used by the walker.

    Every method may raise ``OSError`` independently of the others;
    callers decide whether a failure skips or degrades the entry.
    """

    def list_dir(self, path: Path) -> list[Path]: ...

    def kind(self, path: Path) -> EntryKind: ...

    def special_kind(self, path: Path) -> SpecialKind: ...

    def size(self, path: Path) -> int: ...

    def permissions(self, path: Path) -> str | None: ...

    def modified_time(self, path: Path) -> float: ...

    def read_link(self, path: Path) -> str: ...

    def canonicalize(self, path: Path) -> Path: ...

    def absolute(self, path: Path) -> Path: ...


def classify_mode(mode: int) -> EntryKind:
    """Map an ``st_mode`` value to an entry kind.

    Character devices count as special entries, like sockets, block
    devices and fifos.

    Args:
        mode: ``st_mode`` from ``os.lstat``.

    Returns:
        EntryKind: Kind tag, ``UNKNOWN`` when no file type bit matches.
    """
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if (
        stat.S_ISSOCK(mode)
        or stat.S_ISBLK(mode)
        or stat.S_ISFIFO(mode)
        or stat.S_ISCHR(mode)
    ):
        return EntryKind.SPECIAL
    return EntryKind.UNKNOWN


PERMISSIONS_SUPPORTED: Final[bool] = os.name == "posix"


class OsFileSystem:
    """Local filesystem backed by ``os`` and ``pathlib``.

    Symlinks are never followed except by ``canonicalize``.
    """

    def list_dir(self, path: Path) -> list[Path]:
        """Return child paths in the order the OS enumerates them."""
        with os.scandir(path) as it:
            return [Path(dir_entry.path) for dir_entry in it]

    def kind(self, path: Path) -> EntryKind:
        return classify_mode(os.lstat(path).st_mode)

    def special_kind(self, path: Path) -> SpecialKind:
        """Probe socket, block device, then fifo; anything else is OTHER.

        A failing probe is treated as "not this subtype", so the result
        is best effort and never raises.
        """
        try:
            mode = os.lstat(path).st_mode
        except OSError:
            return SpecialKind.OTHER
        if stat.S_ISSOCK(mode):
            return SpecialKind.SOCKET
        if stat.S_ISBLK(mode):
            return SpecialKind.BLOCK_DEVICE
        if stat.S_ISFIFO(mode):
            return SpecialKind.FIFO
        return SpecialKind.OTHER

    def size(self, path: Path) -> int:
        return os.lstat(path).st_size

    def permissions(self, path: Path) -> str | None:
        """Return an ``ls -l`` style mode string, or ``None`` off POSIX."""
        if not PERMISSIONS_SUPPORTED:
            return None
        return stat.filemode(os.lstat(path).st_mode)

    def modified_time(self, path: Path) -> float:
        return os.lstat(path).st_mtime

    def read_link(self, path: Path) -> str:
        return os.readlink(path)

    def canonicalize(self, path: Path) -> Path:
        return path.resolve(strict=True)

    def absolute(self, path: Path) -> Path:
        return Path(os.path.abspath(path))
