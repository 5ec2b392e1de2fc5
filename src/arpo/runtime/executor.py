"""Runs core commands against the catalog and mover."""

from ..catalog import ProjectCatalog
from ..core.messages import (
    CatalogLoaded,
    CatalogLoadFailed,
    Command,
    Event,
    LoadCatalog,
    MoveCompleted,
    MoveEntry,
    MoveFailed,
)
from ..errors import CatalogLoadError, MoveError
from ..mover import DirectoryMover


class CommandExecutor:
    """
    Turns a command into the event that reports its outcome.

    Typed failures become failure events. Anything else propagates so the
    loop can report it as a crash.
    """

    def __init__(self, catalog: ProjectCatalog, mover: DirectoryMover):
        self.catalog = catalog
        self.mover = mover

    def execute(self, command: Command) -> Event:
        if isinstance(command, LoadCatalog):
            try:
                return CatalogLoaded(entries=self.catalog.load(command.root))
            except CatalogLoadError as e:
                return CatalogLoadFailed(error=e)

        if isinstance(command, MoveEntry):
            try:
                elapsed = self.mover.move(command.entry, command.destination_root)
            except MoveError as e:
                return MoveFailed(index=command.index, error=e)
            return MoveCompleted(index=command.index, elapsed=elapsed)

        raise TypeError(f"Unknown command: {command!r}")
