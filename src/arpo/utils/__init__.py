"""Utility modules for arpo."""

from .filesystem import directory_exists, list_child_directories, move_directory
from .logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "directory_exists",
    "list_child_directories",
    "move_directory",
]
