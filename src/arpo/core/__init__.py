"""Core state machine: selection, sequential archival, and their messages."""

from .controller import AppController
from .history import HISTORY_CAPACITY, ArchivalRecord, RecentHistory
from .messages import (
    CatalogLoaded,
    CatalogLoadFailed,
    Command,
    CommandCrashed,
    Commit,
    Event,
    LoadCatalog,
    MoveCompleted,
    MoveEntry,
    MoveFailed,
    Quit,
    Toggle,
)
from .pipeline import ArchivalPipeline, PipelineStatus
from .selection import SelectionState
from .state import AppState, Phase, initial_state, reduce, start
from .view import Row, ViewModel, describe, describe_record, format_duration

__all__ = [
    "AppController",
    "AppState",
    "Phase",
    "initial_state",
    "reduce",
    "start",
    # Selection / archival
    "SelectionState",
    "ArchivalPipeline",
    "PipelineStatus",
    "ArchivalRecord",
    "RecentHistory",
    "HISTORY_CAPACITY",
    # Messages
    "Event",
    "CatalogLoaded",
    "CatalogLoadFailed",
    "MoveCompleted",
    "MoveFailed",
    "CommandCrashed",
    "Toggle",
    "Commit",
    "Quit",
    "Command",
    "LoadCatalog",
    "MoveEntry",
    # View
    "Row",
    "ViewModel",
    "describe",
    "describe_record",
    "format_duration",
]
