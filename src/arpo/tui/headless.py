"""Non-interactive presenter for scripted archival runs."""

from rich.console import Console
from rich.markup import escape

from ..core.messages import Commit, Event, Quit, Toggle
from ..core.state import Phase
from ..core.view import ViewModel, describe_record


class HeadlessPresenter:
    """
    Selects a fixed list of project names as soon as the catalog is shown,
    commits, and prints each completed move.

    If any requested name is not in the catalog nothing is archived: the
    missing names are kept in ``missing`` and the session is quit.
    """

    def __init__(self, names: list[str], console: Console | None = None):
        self.names = list(dict.fromkeys(names))
        self.console = console or Console()
        self.missing: list[str] = []

        self._loop = None
        self._submitted = False
        self._announced = False
        self._printed = 0

    def start(self, loop) -> None:
        self._loop = loop

    def stop(self) -> None:
        self._loop = None

    def translate(self, key: str, view: ViewModel) -> Event | None:
        return None

    def render(self, view: ViewModel) -> None:
        if view.phase is Phase.SELECTING and not self._submitted:
            self._submit(view)
        elif view.phase is Phase.ARCHIVING:
            self._report(view)

    def _submit(self, view: ViewModel) -> None:
        self._submitted = True
        available = {row.name for row in view.rows}
        self.missing = [name for name in self.names if name not in available]
        if self.missing:
            self._loop.post(Quit())
            return
        for name in self.names:
            self._loop.post(Toggle(name=name))
        self._loop.post(Commit())

    def _report(self, view: ViewModel) -> None:
        if not self._announced:
            self._announced = True
            self.console.print(f"[cyan]Archiving {view.total} project(s)...[/cyan]")

        fresh = view.completed_count - self._printed
        if fresh > 0:
            real = [r for r in view.history if not r.is_placeholder]
            for record in real[-fresh:]:
                self.console.print(f"  {escape(describe_record(record))}")
            self._printed = view.completed_count
