"""Runs configured directory tasks."""

import logging
import os
from typing import Callable, Dict, Iterable, List, Optional

import click

from .archiver import BackupArchiver
from .models import Action, DirectoryStats, Task, TaskResult
from .walker import walk
from ..exceptions import TaskIOError
from ..utils.formatters import format_file_size


class ActionDispatcher:
    """Maps each task's action to its behavior and runs tasks in order."""

    def __init__(self, archiver: Optional[BackupArchiver] = None,
                 echo: Callable[[str], None] = click.echo):
        """Initialize action dispatcher.

        Args:
            archiver: Archiver used by backup tasks. Required only when a
                backup task is executed.
            echo: Function that writes one line of task output.
        """
        self.archiver = archiver
        self.echo = echo
        self.logger = logging.getLogger(__name__)

        self._handlers: Dict[Action, Callable[[Task], TaskResult]] = {
            Action.LIST: self._list,
            Action.ANALYZE: self._analyze,
            Action.BACKUP: self._backup,
            Action.CLEAN: self._clean,
        }
        unhandled = set(Action) - set(self._handlers)
        if unhandled:
            raise RuntimeError(f"No handler for actions: {sorted(a.value for a in unhandled)}")

    def run(self, tasks: Iterable[Task]) -> List[TaskResult]:
        """Execute tasks one after another.

        A task that fails is logged and recorded, and the remaining tasks
        still run.

        Args:
            tasks: Tasks in configuration order.

        Returns:
            One TaskResult per task, in the same order.
        """
        results = []
        for task in tasks:
            try:
                results.append(self.execute(task))
            except TaskIOError as e:
                self.logger.error(f"Task '{task.action.value}' failed for '{task.path}': {e}")
                results.append(TaskResult(task=task, success=False, error_message=str(e)))
        return results

    def execute(self, task: Task) -> TaskResult:
        """Execute a single task.

        Raises:
            TaskIOError: If the task's filesystem work fails.
        """
        self.logger.info(f"Running '{task.action.value}' on '{task.path}' "
                         f"(include_directories={task.include_directories})")
        return self._handlers[task.action](task)

    def _list(self, task: Task) -> TaskResult:
        count = 0
        for entry in walk(task.path, recurse=task.include_directories):
            # Directories are listed only when the walk descends into them
            if entry.is_directory and not task.include_directories:
                continue
            self.echo(entry.path)
            count += 1
        self.logger.info(f"Listed {count} entries under '{task.path}'")
        return TaskResult(task=task, success=True)

    def _analyze(self, task: Task) -> TaskResult:
        self.echo(f"Analyzing directory (subdirs={task.include_directories}): '{task.path}'")
        stats = DirectoryStats(path=task.path)

        for entry in walk(task.path, recurse=task.include_directories):
            if entry.is_directory:
                continue
            stats.file_count += 1
            stats.total_size += entry.size

        self.echo(f"Number of files: {stats.file_count}")
        self.echo(f"Total size: {stats.total_size} bytes ({format_file_size(stats.total_size)})")
        return TaskResult(task=task, success=True,
                          file_count=stats.file_count, total_size=stats.total_size)

    def _backup(self, task: Task) -> TaskResult:
        if self.archiver is None:
            raise TaskIOError("Backup task requires a backup root path", task.path)
        archive_path = self.archiver.create_backup(task.path)
        return TaskResult(task=task, success=True, archive_path=archive_path)

    def _clean(self, task: Task) -> TaskResult:
        # Collect first; reversed walk order removes descendants before their directory
        entries = list(walk(task.path, recurse=task.include_directories))
        deleted = 0

        for entry in reversed(entries):
            try:
                if entry.is_directory:
                    if not task.include_directories:
                        self.logger.info(f"Skipping directory: '{entry.path}'")
                        continue
                    self.logger.info(f"Removing directory: '{entry.path}'")
                    os.rmdir(entry.path)
                else:
                    self.logger.info(f"Removing file: '{entry.path}'")
                    os.remove(entry.path)
            except OSError as e:
                raise TaskIOError(f"Failed to remove {entry.path}", entry.path) from e
            deleted += 1

        self.logger.info(f"Removed {deleted} entries under '{task.path}'")
        return TaskResult(task=task, success=True, deleted_count=deleted)
