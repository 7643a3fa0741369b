"""Utility modules for dir-worker."""

from .formatters import format_file_size, format_run_summary

__all__ = ["format_file_size", "format_run_summary"]
