"""
Dir Worker - run list, analyze, backup and clean actions on configured directories.

This package reads a JSON or YAML configuration listing directories and the action
to perform on each, then executes those actions in order.
"""

__version__ = "1.0.0"

from .core.dispatcher import ActionDispatcher
from .core.archiver import BackupArchiver
from .config.config_manager import ConfigManager
from .exceptions import ConfigError, DirWorkerError, TaskIOError

__all__ = ["ActionDispatcher", "BackupArchiver", "ConfigManager",
           "ConfigError", "DirWorkerError", "TaskIOError"]
