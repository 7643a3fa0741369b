"""Tests for the backup archiver."""

from __future__ import annotations

import os
import re
import stat
import zipfile
from datetime import datetime
from pathlib import Path

import pytest

from dir_worker.core import archiver as archiver_module
from dir_worker.core.archiver import BackupArchiver
from dir_worker.core.models import EntryKind, WalkEntry
from dir_worker.exceptions import TaskIOError

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 45, 123456)


@pytest.fixture
def backup_root(tmp_path):
    return tmp_path / "example" / "backup"


class TestArchiveName:
    def test_name_uses_basename_and_timestamp(self, backup_root):
        archiver = BackupArchiver(str(backup_root), clock=lambda: FIXED_TIME)
        assert archiver.archive_name("example/dummy") == "dummy_20240501_123045_123456.zip"

    def test_trailing_separator_is_ignored(self, backup_root):
        archiver = BackupArchiver(str(backup_root), clock=lambda: FIXED_TIME)
        assert archiver.archive_name("example/dummy/") == "dummy_20240501_123045_123456.zip"

    def test_successive_backups_get_distinct_names(self, dummy_tree, backup_root):
        archiver = BackupArchiver(str(backup_root))
        first = archiver.create_backup(str(dummy_tree))
        second = archiver.create_backup(str(dummy_tree))

        assert first != second
        assert len(os.listdir(backup_root)) == 2


class TestCreateBackup:
    def test_archive_lands_in_backup_root(self, dummy_tree, backup_root):
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))

        assert Path(archive_path).parent == backup_root
        assert re.fullmatch(r"dummy_\d{8}_\d{6}_\d{6}\.zip", Path(archive_path).name)

    def test_backup_root_is_created(self, dummy_tree, backup_root):
        assert not backup_root.exists()
        BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))
        assert backup_root.is_dir()

    def test_round_trip_reproduces_files(self, dummy_tree, backup_root, tmp_path):
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))
        restored = tmp_path / "restored"
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(restored)

        originals = {p.relative_to(dummy_tree): p.read_bytes() for p in dummy_tree.rglob("*") if p.is_file()}
        extracted = {p.relative_to(restored): p.read_bytes() for p in restored.rglob("*") if p.is_file()}
        assert extracted == originals

    def test_empty_directories_are_kept(self, dummy_tree, backup_root, tmp_path):
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))

        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
            archive.extractall(tmp_path / "restored")

        assert "empty/" in names
        assert "sub/" in names
        assert (tmp_path / "restored" / "empty").is_dir()

    def test_entries_are_compressed(self, dummy_tree, backup_root):
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))
        with zipfile.ZipFile(archive_path) as archive:
            info = archive.getinfo("a.txt")
        assert info.compress_type == zipfile.ZIP_DEFLATED

    def test_symlinks_are_stored_as_links(self, dummy_tree, backup_root):
        os.symlink("../gone", dummy_tree / "dangling")
        os.symlink("sub", dummy_tree / "sub_link")
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))

        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
            dangling = archive.getinfo("dangling")
            sub_link = archive.getinfo("sub_link")
            assert archive.read("dangling") == b"../gone"
            assert archive.read("sub_link") == b"sub"

        assert stat.S_ISLNK(dangling.external_attr >> 16)
        assert stat.S_ISLNK(sub_link.external_attr >> 16)
        assert "sub_link/" not in names
        assert "sub_link/b.txt" not in names
        assert "sub/b.txt" in names

    def test_archive_inside_source_excludes_itself(self, dummy_tree):
        backup_root = dummy_tree / "backups"
        archive_path = BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))

        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
        assert f"backups/{Path(archive_path).name}" not in names
        assert "a.txt" in names


class TestBackupErrors:
    def test_missing_source(self, tmp_path, backup_root):
        with pytest.raises(TaskIOError, match="not a directory"):
            BackupArchiver(str(backup_root)).create_backup(str(tmp_path / "missing"))
        assert not backup_root.exists()

    def test_existing_archive_is_not_overwritten(self, dummy_tree, backup_root):
        archiver = BackupArchiver(str(backup_root), clock=lambda: FIXED_TIME)
        archive_path = archiver.create_backup(str(dummy_tree))
        original = Path(archive_path).read_bytes()

        with pytest.raises(TaskIOError):
            archiver.create_backup(str(dummy_tree))
        assert Path(archive_path).read_bytes() == original

    def test_backup_root_cannot_be_created(self, dummy_tree, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(TaskIOError, match="backup root"):
            BackupArchiver(str(blocker / "backup")).create_backup(str(dummy_tree))

    def test_partial_archive_is_removed_on_failure(self, dummy_tree, backup_root, monkeypatch):
        def failing_walk(root, recurse=False):
            yield WalkEntry(path=os.path.join(root, "a.txt"), kind=EntryKind.FILE, size=10)
            raise TaskIOError("Failed to read directory", root)

        monkeypatch.setattr(archiver_module, "walk", failing_walk)

        with pytest.raises(TaskIOError):
            BackupArchiver(str(backup_root)).create_backup(str(dummy_tree))
        assert os.listdir(backup_root) == []
