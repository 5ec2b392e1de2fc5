"""Application state and the pure transition function."""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from ..errors import ProtocolViolation
from ..utils.logging import get_logger
from .messages import (
    CatalogLoaded,
    CatalogLoadFailed,
    Command,
    CommandCrashed,
    Commit,
    Event,
    LoadCatalog,
    MoveCompleted,
    MoveFailed,
    Quit,
    Toggle,
)
from .pipeline import ArchivalPipeline, PipelineStatus
from .selection import SelectionState

logger = get_logger(__name__)


class Phase(str, Enum):
    LOADING = "loading"
    SELECTING = "selecting"
    ARCHIVING = "archiving"


@dataclass(frozen=True)
class AppState:
    """Everything the session knows. Replaced, never mutated."""

    projects_root: Path
    archive_root: Path
    history_size: int = 5
    phase: Phase = Phase.LOADING
    selection: SelectionState | None = None
    pipeline: ArchivalPipeline | None = None
    cancelled: bool = False
    error: str | None = None

    @property
    def done(self) -> bool:
        return self.pipeline is not None and self.pipeline.status is PipelineStatus.COMPLETED

    @property
    def finished(self) -> bool:
        """True once nothing more will happen in this session."""
        return self.cancelled or self.error is not None or self.done


Transition = tuple[AppState, list[Command]]


def initial_state(projects_root: Path, archive_root: Path, history_size: int = 5) -> AppState:
    return AppState(
        projects_root=Path(projects_root),
        archive_root=Path(archive_root),
        history_size=history_size,
    )


def start(state: AppState) -> Transition:
    """Startup commands: load the catalog."""
    if state.phase is not Phase.LOADING or state.finished:
        return state, []
    return state, [LoadCatalog(root=state.projects_root)]


def reduce(state: AppState, event: Event) -> Transition:
    """
    Apply ``event`` to ``state``.

    Returns the next state and the commands to run. Events that do not apply
    to the current phase, and events arriving after the session finished,
    leave the state unchanged.
    """
    if isinstance(event, Quit):
        return _quit(state), []

    if state.finished:
        return state, []

    if isinstance(event, CatalogLoaded):
        if state.phase is not Phase.LOADING:
            return state, []
        return (
            replace(state, phase=Phase.SELECTING, selection=SelectionState(catalog=event.entries)),
            [],
        )

    if isinstance(event, CatalogLoadFailed):
        return replace(state, error=str(event.error)), []

    if isinstance(event, Toggle):
        if state.phase is not Phase.SELECTING:
            return state, []
        return replace(state, selection=state.selection.toggle(event.name)), []

    if isinstance(event, Commit):
        return _commit(state)

    if isinstance(event, MoveCompleted):
        if state.pipeline is None:
            return state, []
        try:
            pipeline, commands = state.pipeline.complete(event.index, event.elapsed)
        except ProtocolViolation as e:
            logger.debug(f"Dropped stale completion: {e}")
            return state, []
        return replace(state, pipeline=pipeline), commands

    if isinstance(event, MoveFailed):
        if state.pipeline is None:
            return state, []
        try:
            pipeline = state.pipeline.fail(event.index, event.error)
        except ProtocolViolation as e:
            logger.debug(f"Dropped stale failure: {e}")
            return state, []
        return replace(state, pipeline=pipeline, error=str(event.error)), []

    if isinstance(event, CommandCrashed):
        pipeline = state.pipeline
        if pipeline is not None and not pipeline.status.is_terminal:
            pipeline = replace(pipeline, status=PipelineStatus.FAILED)
        return replace(state, pipeline=pipeline, error=f"Unexpected error: {event.error}"), []

    logger.debug(f"Ignoring unknown event: {event!r}")
    return state, []


def _quit(state: AppState) -> AppState:
    if state.finished:
        return state
    pipeline = state.pipeline.cancel() if state.pipeline is not None else None
    return replace(state, pipeline=pipeline, cancelled=True)


def _commit(state: AppState) -> Transition:
    if state.phase is not Phase.SELECTING:
        return state, []

    work = state.selection.commit()
    pipeline = ArchivalPipeline.create(work, state.archive_root, state.history_size)
    pipeline, commands = pipeline.start()
    return replace(state, phase=Phase.ARCHIVING, pipeline=pipeline), commands
