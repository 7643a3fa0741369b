"""Exception types for dir-worker."""

from typing import Optional


class DirWorkerError(Exception):
    """Base class for all dir-worker errors."""


class ConfigError(DirWorkerError, ValueError):
    """Raised when the configuration file cannot be loaded or is invalid."""


class TaskIOError(DirWorkerError, OSError):
    """Raised when a filesystem operation fails while running a task."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = self.args[0] if self.args else ""
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message
