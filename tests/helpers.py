"""Test helpers shared across fsscan test modules."""

from __future__ import annotations

import errno
from pathlib import Path

from fsscan.fs import EntryKind, SpecialKind

FIELD_WIDTH = 20


def row(marker: str, text: str, level: int = 0) -> str:
    """Expected output line without permission/time blocks."""
    return f"{marker:>{FIELD_WIDTH}}    {' ' * (4 * level)}{text}"


class FakeFileSystem:
    """In-memory ``FileSystem`` with scripted per-operation failures.

    Children are listed in insertion order, so tests control the
    enumeration order the walker sees.
    """

    def __init__(self, root: Path = Path("/fake")) -> None:
        self.root = root
        self.kinds: dict[Path, EntryKind] = {root: EntryKind.DIRECTORY}
        self.children: dict[Path, list[Path]] = {root: []}
        self.sizes: dict[Path, int] = {}
        self.targets: dict[Path, str] = {}
        self.specials: dict[Path, SpecialKind] = {}
        self.canonical: dict[Path, Path] = {}
        self.failures: dict[tuple[str, Path], OSError] = {}

    def _add(self, path: Path, kind: EntryKind) -> Path:
        self.children.setdefault(path.parent, []).append(path)
        self.kinds[path] = kind
        return path

    def add_dir(self, path: Path) -> Path:
        self.children.setdefault(path, [])
        return self._add(path, EntryKind.DIRECTORY)

    def add_file(self, path: Path, size: int = 0) -> Path:
        self.sizes[path] = size
        return self._add(path, EntryKind.FILE)

    def add_symlink(self, path: Path, target: str) -> Path:
        self.targets[path] = target
        return self._add(path, EntryKind.SYMLINK)

    def add_special(self, path: Path, special: SpecialKind = SpecialKind.OTHER) -> Path:
        self.specials[path] = special
        return self._add(path, EntryKind.SPECIAL)

    def add_unknown(self, path: Path) -> Path:
        return self._add(path, EntryKind.UNKNOWN)

    def fail(self, op: str, path: Path, code: int = errno.EACCES) -> None:
        self.failures[(op, path)] = OSError(code, "Permission denied", str(path))

    def _check(self, op: str, path: Path) -> None:
        if (op, path) in self.failures:
            raise self.failures[(op, path)]

    def list_dir(self, path: Path) -> list[Path]:
        self._check("list_dir", path)
        if path not in self.children:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        return list(self.children[path])

    def kind(self, path: Path) -> EntryKind:
        self._check("kind", path)
        return self.kinds[path]

    def special_kind(self, path: Path) -> SpecialKind:
        return self.specials.get(path, SpecialKind.OTHER)

    def size(self, path: Path) -> int:
        self._check("size", path)
        return self.sizes.get(path, 0)

    def permissions(self, path: Path) -> str | None:
        self._check("permissions", path)
        return "-rw-r--r--"

    def modified_time(self, path: Path) -> float:
        self._check("modified_time", path)
        return 0.0

    def read_link(self, path: Path) -> str:
        self._check("read_link", path)
        return self.targets[path]

    def canonicalize(self, path: Path) -> Path:
        self._check("canonicalize", path)
        return self.canonical.get(path, path)

    def absolute(self, path: Path) -> Path:
        self._check("absolute", path)
        return path
