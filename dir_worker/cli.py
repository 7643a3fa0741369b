"""Command-line interface for dir-worker."""

import logging
import sys
from typing import Optional

import click

from . import __version__
from .config.config_manager import ConfigManager
from .core.archiver import BackupArchiver
from .core.dispatcher import ActionDispatcher
from .exceptions import ConfigError
from .utils.formatters import format_run_summary

EXIT_TASK_FAILED = 1
EXIT_CONFIG_ERROR = 2


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration."""
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Console output goes to stderr so stdout carries only task output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


@click.command()
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.version_option(__version__, prog_name='dir-worker')
def cli(config_path: str):
    """Run the list, analyze, backup and clean tasks defined in CONFIG_PATH."""
    try:
        config = ConfigManager(config_path).load_config()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(config.logging.level, config.logging.file)
    logger = logging.getLogger(__name__)
    logger.info(f"Loaded {len(config.directories)} tasks from {config_path}")

    archiver = BackupArchiver(config.backup_root_path) if config.backup_root_path else None
    dispatcher = ActionDispatcher(archiver=archiver)
    results = dispatcher.run(config.directories)

    failed = [result for result in results if not result.success]
    click.echo(format_run_summary(len(results), len(failed)), err=True)
    for result in failed:
        click.echo(f"  {result.task.action.value} '{result.task.path}': {result.error_message}", err=True)

    if failed:
        sys.exit(EXIT_TASK_FAILED)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
