"""Tests for fsscan.fs — the OS filesystem adapter."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from fsscan.fs import EntryKind, OsFileSystem, SpecialKind, classify_mode


class TestClassifyMode:
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (stat.S_IFREG | 0o644, EntryKind.FILE),
            (stat.S_IFDIR | 0o755, EntryKind.DIRECTORY),
            (stat.S_IFLNK | 0o777, EntryKind.SYMLINK),
            (stat.S_IFSOCK | 0o755, EntryKind.SPECIAL),
            (stat.S_IFBLK | 0o660, EntryKind.SPECIAL),
            (stat.S_IFIFO | 0o644, EntryKind.SPECIAL),
            (stat.S_IFCHR | 0o666, EntryKind.SPECIAL),
            (0o644, EntryKind.UNKNOWN),
        ],
    )
    def test_kinds(self, mode: int, expected: EntryKind) -> None:
        assert classify_mode(mode) is expected


class TestOsFileSystem:
    def test_list_dir_returns_child_paths(self, scenario_tree: Path) -> None:
        children = OsFileSystem().list_dir(scenario_tree)
        assert sorted(p.name for p in children) == ["a.txt", "b.txt", "sub"]
        assert all(p.parent == scenario_tree for p in children)

    def test_list_dir_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            OsFileSystem().list_dir(tmp_path / "missing")

    def test_kind_and_size(self, scenario_tree: Path) -> None:
        fs = OsFileSystem()
        assert fs.kind(scenario_tree / "a.txt") is EntryKind.FILE
        assert fs.kind(scenario_tree / "sub") is EntryKind.DIRECTORY
        assert fs.size(scenario_tree / "b.txt") == 20

    def test_kind_of_missing_entry_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            OsFileSystem().kind(tmp_path / "gone")

    def test_symlink_is_not_followed(self, scenario_tree: Path) -> None:
        link = scenario_tree / "link"
        link.symlink_to(scenario_tree / "sub")
        fs = OsFileSystem()
        assert fs.kind(link) is EntryKind.SYMLINK
        assert fs.read_link(link) == str(scenario_tree / "sub")
        assert fs.absolute(link) == link
        assert fs.canonicalize(link) == (scenario_tree / "sub").resolve()

    def test_canonicalize_dangling_symlink_raises(self, tmp_path: Path) -> None:
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "nowhere")
        with pytest.raises(OSError):
            OsFileSystem().canonicalize(link)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="fifos need POSIX")
    def test_fifo_is_special(self, tmp_path: Path) -> None:
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        fs = OsFileSystem()
        assert fs.kind(fifo) is EntryKind.SPECIAL
        assert fs.special_kind(fifo) is SpecialKind.FIFO

    def test_special_kind_of_missing_entry_is_other(self, tmp_path: Path) -> None:
        assert OsFileSystem().special_kind(tmp_path / "gone") is SpecialKind.OTHER

    @pytest.mark.skipif(os.name != "posix", reason="permission bits need POSIX")
    def test_permissions(self, scenario_tree: Path) -> None:
        target = scenario_tree / "a.txt"
        target.chmod(0o640)
        assert OsFileSystem().permissions(target) == "-rw-r-----"

    def test_modified_time(self, scenario_tree: Path) -> None:
        target = scenario_tree / "a.txt"
        os.utime(target, (1_700_000_000, 1_700_000_000))
        assert OsFileSystem().modified_time(target) == 1_700_000_000
