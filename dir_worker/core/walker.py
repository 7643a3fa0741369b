"""Directory traversal for task execution."""

import logging
import os
from typing import Iterator, List

from .models import EntryKind, WalkEntry
from ..exceptions import TaskIOError

logger = logging.getLogger(__name__)


def walk(root: str, recurse: bool = False) -> Iterator[WalkEntry]:
    """Lazily yield the entries under a directory.

    The children of each directory are yielded together, sorted by name, and
    subdirectories are then descended depth-first in name order. A directory
    is always yielded before any of its descendants. Symbolic links are
    reported as files and never followed.

    Args:
        root: Directory to walk.
        recurse: If True, descend into every subdirectory.

    Yields:
        WalkEntry for each visited file or directory.

    Raises:
        TaskIOError: If root is not a readable directory, or if any entry
            cannot be read during the walk.
    """
    if not os.path.exists(root):
        raise TaskIOError(f"Path does not exist: {root}", root)
    if not os.path.isdir(root):
        raise TaskIOError(f"Path is not a directory: {root}", root)

    pending = [root]
    while pending:
        directory = pending.pop()
        subdirectories = []

        for entry in _read_directory(directory):
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(entry.path)
                    yield WalkEntry(path=entry.path, kind=EntryKind.DIRECTORY)
                else:
                    size = entry.stat(follow_symlinks=False).st_size
                    yield WalkEntry(path=entry.path, kind=EntryKind.FILE, size=size)
            except OSError as e:
                raise TaskIOError(f"Failed to read entry {entry.path}", entry.path) from e

        if recurse:
            # Reversed so the stack pops them in name order
            pending.extend(reversed(subdirectories))


def _read_directory(directory: str) -> List[os.DirEntry]:
    """Return the entries of a directory sorted by name."""
    try:
        with os.scandir(directory) as entries:
            children = sorted(entries, key=lambda e: e.name)
    except OSError as e:
        raise TaskIOError(f"Failed to read directory {directory}", directory) from e

    logger.debug(f"Read {len(children)} entries from {directory}")
    return children
