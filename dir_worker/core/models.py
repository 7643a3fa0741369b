"""Data models for directory tasks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Action(Enum):
    """Action performed on a configured directory."""
    LIST = "list"
    ANALYZE = "analyze"
    BACKUP = "backup"
    CLEAN = "clean"


class EntryKind(Enum):
    """Classification of a walked filesystem entry."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Task:
    """One configured action on one directory."""
    action: Action
    path: str
    include_directories: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    """Logging options read from the config file."""
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass(frozen=True)
class Config:
    """Validated configuration for a run."""
    directories: Tuple[Task, ...]
    backup_root_path: Optional[str] = None
    logging: LoggingSettings = field(default_factory=LoggingSettings)


@dataclass(frozen=True)
class WalkEntry:
    """A file or directory produced by the walker."""
    path: str
    kind: EntryKind
    size: int = 0

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass
class DirectoryStats:
    """File count and total size accumulated by an analyze task."""
    path: str
    file_count: int = 0
    total_size: int = 0


@dataclass
class TaskResult:
    """Outcome of running a single task."""
    task: Task
    success: bool
    error_message: Optional[str] = None
    file_count: int = 0
    total_size: int = 0
    deleted_count: int = 0
    archive_path: Optional[str] = None
