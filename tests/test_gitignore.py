"""Tests for gitignore module — .gitignore loading."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from fsscan.filter import ExcludeFilter
from fsscan.gitignore import load_gitignore_patterns


class TestLoadGitignorePatterns:
    def test_no_gitignore_returns_empty(self, tmp_path: Path) -> None:
        assert load_gitignore_patterns(tmp_path) == []

    def test_returns_lines(self, tmp_path: Path) -> None:
        (tmp_path / ".gitignore").write_text("# comment\n*.pyc\ndist/\n")
        assert load_gitignore_patterns(tmp_path) == ["# comment", "*.pyc", "dist/"]

    def test_nonexistent_root_returns_empty(self, tmp_path: Path) -> None:
        assert load_gitignore_patterns(tmp_path / "nonexistent") == []

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="chmod does not block reads on Windows or as root",
    )
    def test_unreadable_gitignore_returns_empty(self, tmp_path: Path) -> None:
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("*.pyc\n")
        gitignore.chmod(0o000)
        try:
            assert load_gitignore_patterns(tmp_path) == []
        finally:
            gitignore.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestGitignoreMatching:
    @pytest.mark.parametrize(
        ("gitignore_content", "rel", "is_dir", "expected"),
        [
            ("*.pyc\n", "foo.pyc", False, True),
            ("__pycache__/\n", "src/__pycache__", True, True),
            ("node_modules/\n*.pyc\n", "deep/node_modules", True, True),
            ("node_modules/\n*.pyc\n", "src/app.py", False, False),
            ("# ignore pyc\n*.pyc\n", "# ignore pyc", False, False),
            ("", "anything.py", False, False),
        ],
    )
    def test_loaded_patterns_drive_filter(
        self,
        tmp_path: Path,
        gitignore_content: str,
        rel: str,
        is_dir: bool,
        expected: bool,
    ) -> None:
        (tmp_path / ".gitignore").write_text(gitignore_content)
        f = ExcludeFilter(tmp_path, load_gitignore_patterns(tmp_path))
        assert f.should_exclude(tmp_path / rel, is_dir) is expected
