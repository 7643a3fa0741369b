"""Zip backups of configured directories."""

import logging
import os
import stat
import time
import zipfile
from datetime import datetime
from typing import Callable, Optional

from .walker import walk
from ..exceptions import TaskIOError

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S_%f"


class BackupArchiver:
    """Writes timestamped zip archives of directories into a backup root."""

    def __init__(self, backup_root: str, clock: Optional[Callable[[], datetime]] = None):
        """Initialize backup archiver.

        Args:
            backup_root: Directory that receives the archives. Created on
                first use if it does not exist.
            clock: Callable returning the current time, used for naming.
        """
        self.backup_root = backup_root
        self.clock = clock or datetime.now
        self.logger = logging.getLogger(__name__)

    def archive_name(self, source: str) -> str:
        """Build the archive file name for a source directory.

        Args:
            source: Directory being backed up.

        Returns:
            File name of the form <basename>_<timestamp>.zip.
        """
        basename = os.path.basename(os.path.normpath(os.path.abspath(source)))
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        return f"{basename}_{timestamp}.zip"

    def create_backup(self, source: str) -> str:
        """Archive the full tree under source.

        Every file is stored under its path relative to source, and every
        directory gets an explicit entry so empty directories are kept.
        Symbolic links are stored as link entries holding their target.
        Existing files in the backup root are never overwritten.

        Args:
            source: Directory to back up.

        Returns:
            Path of the written archive.

        Raises:
            TaskIOError: If the source cannot be read, the backup root cannot
                be created or the archive cannot be written.
        """
        if not os.path.isdir(source):
            raise TaskIOError(f"Backup source is not a directory: {source}", source)

        try:
            os.makedirs(self.backup_root, exist_ok=True)
        except OSError as e:
            raise TaskIOError(f"Failed to create backup root {self.backup_root}", self.backup_root) from e

        archive_path = os.path.join(self.backup_root, self.archive_name(source))
        self.logger.info(f"Backing up '{source}' to '{archive_path}'")

        try:
            archive = zipfile.ZipFile(archive_path, "x", compression=zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise TaskIOError(f"Failed to create archive {archive_path}", archive_path) from e

        try:
            with archive:
                entry_count = self._write_tree(archive, source, archive_path)
        except OSError as e:
            self._remove_partial(archive_path)
            if isinstance(e, TaskIOError):
                raise
            raise TaskIOError(f"Failed to write archive {archive_path}", archive_path) from e

        self.logger.info(f"Backup complete: {entry_count} entries written to {archive_path}")
        return archive_path

    def _write_tree(self, archive: zipfile.ZipFile, source: str, archive_path: str) -> int:
        """Add every entry under source to an open archive."""
        own_path = os.path.abspath(archive_path)
        count = 0

        for entry in walk(source, recurse=True):
            if os.path.abspath(entry.path) == own_path:
                continue
            arcname = os.path.relpath(entry.path, source).replace(os.sep, "/")
            try:
                if os.path.islink(entry.path):
                    self._write_symlink(archive, entry.path, arcname)
                else:
                    archive.write(entry.path, arcname)
            except OSError as e:
                raise TaskIOError(f"Failed to archive {entry.path}", entry.path) from e
            count += 1
            self.logger.debug(f"Archived {arcname}")

        return count

    def _write_symlink(self, archive: zipfile.ZipFile, path: str, arcname: str):
        """Store a symbolic link as a link entry whose data is its target."""
        info = zipfile.ZipInfo(arcname, time.localtime(os.lstat(path).st_mtime)[:6])
        info.create_system = 3
        info.external_attr = (stat.S_IFLNK | 0o777) << 16
        archive.writestr(info, os.readlink(path))

    def _remove_partial(self, archive_path: str):
        """Delete an archive left behind by a failed write."""
        try:
            os.remove(archive_path)
        except OSError as e:
            self.logger.warning(f"Could not remove partial archive {archive_path}: {e}")
