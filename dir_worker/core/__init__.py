"""Core task functionality."""

from .archiver import BackupArchiver
from .dispatcher import ActionDispatcher
from .models import Action, Config, DirectoryStats, EntryKind, Task, TaskResult, WalkEntry
from .walker import walk

__all__ = [
    "ActionDispatcher", "BackupArchiver", "walk",
    "Action", "Config", "DirectoryStats", "EntryKind", "Task", "TaskResult", "WalkEntry",
]
