"""
arpo - archive finished projects from the terminal.

Pick directories under a projects root and move them, one at a time, into an
archive folder while watching per-project progress.
"""

__version__ = "0.1.0"
__author__ = "arpo contributors"
__license__ = "MIT"

from .catalog import Entry, ProjectCatalog
from .config import ArpoConfig
from .core import AppController, AppState, ArchivalPipeline, SelectionState
from .errors import ArpoError, CatalogLoadError, MoveError, ProtocolViolation
from .mover import DirectoryMover
from .runtime import CommandExecutor, EventLoop
from .utils.logging import get_logger

__all__ = [
    "ArpoConfig",
    "get_logger",
    # Catalog
    "Entry",
    "ProjectCatalog",
    # Mover
    "DirectoryMover",
    # Core
    "AppController",
    "AppState",
    "ArchivalPipeline",
    "SelectionState",
    # Runtime
    "CommandExecutor",
    "EventLoop",
    # Errors
    "ArpoError",
    "CatalogLoadError",
    "MoveError",
    "ProtocolViolation",
]
