"""Shared fixtures for fsscan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import FakeFileSystem


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    """Create the basic listing tree.

    Structure::

        root/
        ├── a.txt   (10 bytes)
        ├── b.txt   (20 bytes)
        └── sub/
    """
    (tmp_path / "a.txt").write_bytes(b"x" * 10)
    (tmp_path / "b.txt").write_bytes(b"x" * 20)
    (tmp_path / "sub").mkdir()
    return tmp_path


@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Create a chain of nested directories.

    Structure::

        root/
        ├── top.txt          (1 byte)
        └── a/
            ├── a.txt        (2 bytes)
            └── b/
                ├── b.txt    (3 bytes)
                └── c/
                    └── deep.txt  (4 bytes)
    """
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    (tmp_path / "top.txt").write_bytes(b"x")
    (tmp_path / "a" / "a.txt").write_bytes(b"xx")
    (tmp_path / "a" / "b" / "b.txt").write_bytes(b"xxx")
    (tmp_path / "a" / "b" / "c" / "deep.txt").write_bytes(b"xxxx")
    return tmp_path


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()
