"""Events fed into the state machine and commands it asks the runtime to run."""

from dataclasses import dataclass
from pathlib import Path

from ..catalog import Entry
from ..errors import CatalogLoadError, MoveError


class Event:
    """Base class for everything the reducer consumes."""


@dataclass(frozen=True)
class CatalogLoaded(Event):
    entries: tuple[Entry, ...]


@dataclass(frozen=True)
class CatalogLoadFailed(Event):
    error: CatalogLoadError


@dataclass(frozen=True)
class MoveCompleted(Event):
    index: int
    elapsed: float


@dataclass(frozen=True)
class MoveFailed(Event):
    index: int
    error: MoveError


@dataclass(frozen=True)
class CommandCrashed(Event):
    """A command raised something other than its typed failure."""

    command: "Command"
    error: BaseException


@dataclass(frozen=True)
class Toggle(Event):
    name: str


@dataclass(frozen=True)
class Commit(Event):
    pass


@dataclass(frozen=True)
class Quit(Event):
    pass


class Command:
    """Base class for units of work the runtime executes off the loop thread."""


@dataclass(frozen=True)
class LoadCatalog(Command):
    root: Path


@dataclass(frozen=True)
class MoveEntry(Command):
    index: int
    entry: Entry
    destination_root: Path
