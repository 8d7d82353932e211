"""Tests for fsscan.filter."""

from pathlib import Path

import pytest

from fsscan.filter import ExcludeFilter, NullFilter

ROOT = Path("/scan")


class TestExcludeFilter:
    def test_no_patterns_excludes_nothing(self) -> None:
        f = ExcludeFilter(ROOT)
        assert f.should_exclude(ROOT / "foo.py", False) is False
        assert f.should_exclude(ROOT / "node_modules", True) is False

    @pytest.mark.parametrize(
        ("patterns", "rel", "is_dir", "expected"),
        [
            (["node_modules"], "node_modules", True, True),
            (["node_modules"], "src", True, False),
            (["*.pyc"], "foo.pyc", False, True),
            (["*.pyc"], "src/deep/foo.pyc", False, True),
            (["*.pyc"], "foo.py", False, False),
            (["build/"], "build", True, True),
            (["build/"], "build", False, False),
            (["/docs"], "docs", True, True),
            (["/docs"], "src/docs", True, False),
            (["*.log", "!keep.log"], "keep.log", False, False),
        ],
    )
    def test_pattern_matching(
        self,
        patterns: list[str],
        rel: str,
        is_dir: bool,
        expected: bool,
    ) -> None:
        f = ExcludeFilter(ROOT, patterns)
        assert f.should_exclude(ROOT / rel, is_dir) is expected

    @pytest.mark.parametrize(
        ("path", "is_dir", "key"),
        [
            (ROOT / "a" / "b.txt", False, "a/b.txt"),
            (ROOT / "a", True, "a/"),
            (Path("/elsewhere/x"), False, "x"),
        ],
    )
    def test_relative_key(self, path: Path, is_dir: bool, key: str) -> None:
        assert ExcludeFilter(ROOT).relative_key(path, is_dir) == key


class TestNullFilter:
    def test_excludes_nothing(self) -> None:
        assert NullFilter().should_exclude(ROOT / "anything", True) is False
