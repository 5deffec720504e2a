"""Utilities submodule of the sequencing module."""

from .logging import setup_logging, clear_log_file, get_logger

__all__ = [
    "setup_logging",
    "clear_log_file",
    "get_logger",
]
