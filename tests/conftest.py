"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by the CLI's logging setup."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def dummy_tree(tmp_path):
    """Create example/dummy with nested files and an empty directory.

    Layout:
        a.txt            10 bytes
        empty/
        sub/b.txt        20 bytes
        sub/deep/c.bin   30 bytes
    """
    root = tmp_path / "example" / "dummy"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_bytes(b"a" * 10)
    (root / "sub" / "b.txt").write_bytes(b"b" * 20)
    (root / "sub" / "deep" / "c.bin").write_bytes(b"c" * 30)
    return root
