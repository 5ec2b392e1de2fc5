"""Stateful wrapper around the reducer for use by an event loop."""

from pathlib import Path

from ..utils.logging import get_logger
from .messages import Command, Event, MoveCompleted
from .state import AppState, Phase, initial_state, reduce, start
from .view import ViewModel, describe

logger = get_logger(__name__)


class AppController:
    """
    Holds the current ``AppState`` and feeds events through ``reduce``.

    This is the only component that decides the session is over. It logs
    phase changes and outcomes; everything else stays in the pure reducer.
    """

    def __init__(self, projects_root: Path, archive_root: Path, history_size: int = 5):
        self.state: AppState = initial_state(projects_root, archive_root, history_size)

    @property
    def finished(self) -> bool:
        return self.state.finished

    def start(self) -> list[Command]:
        self.state, commands = start(self.state)
        logger.info(f"Loading projects from {self.state.projects_root}")
        return commands

    def dispatch(self, event: Event) -> list[Command]:
        """Apply one event and return the commands it produced."""
        before = self.state
        self.state, commands = reduce(before, event)
        self._log_transition(before, self.state, event)
        return commands

    def view(self) -> ViewModel:
        return describe(self.state)

    def _log_transition(self, before: AppState, after: AppState, event: Event) -> None:
        if after is before:
            return

        if before.phase is not after.phase:
            if after.phase is Phase.SELECTING:
                logger.info(f"Loaded {len(after.selection.catalog)} project(s)")
            elif after.phase is Phase.ARCHIVING:
                logger.info(
                    f"Archiving {after.pipeline.total} project(s) into {after.archive_root}"
                )

        if isinstance(event, MoveCompleted) and after.pipeline is not None:
            entry = after.pipeline.entries[event.index]
            logger.info(f"Moved {entry.name} in {event.elapsed:.3f}s")

        if after.error and not before.error:
            logger.error(after.error)
        elif after.cancelled and not before.cancelled:
            logger.info("Session cancelled by user")
        elif after.done and not before.done:
            logger.info("Archiving completed")
