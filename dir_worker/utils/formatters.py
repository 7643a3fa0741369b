"""Formatting utilities for task output."""


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human readable size string.
    """
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"


def format_run_summary(total: int, failed: int) -> str:
    """Summarize a run as '<total> tasks, <failed> failed'."""
    noun = "task" if total == 1 else "tasks"
    return f"{total} {noun}, {failed} failed"
