"""Interactive terminal presenter built on Rich Live."""

import os
import select
import sys
import threading

import click
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.padding import Padding
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from ..config.models import UISettings
from ..core.messages import Commit, Event, Quit, Toggle
from ..core.state import Phase
from ..core.view import ViewModel, describe_record, format_duration
from ..utils.logging import get_logger
from .keys import normalize_key

logger = get_logger(__name__)

HELP_SELECTING = "↑/↓ move • space select • enter archive • q quit"
HELP_ARCHIVING = "Press q to exit"


class TerminalPresenter:
    """
    Draws the session with Rich and reads single keypresses.

    Cursor position is presentation state and lives here; everything else
    comes from the ``ViewModel`` handed over by the event loop. Styling and
    key bindings are taken from the ``UISettings`` given at construction.
    """

    def __init__(self, ui: UISettings, console: Console | None = None, read_input: bool = True):
        self.ui = ui
        self.theme = ui.theme
        self.keys = ui.keys
        self.console = console or Console()
        self.read_input = read_input
        self.cursor = 0

        self._spinner = Spinner("dots", style=self.theme.spinner)
        self._live: Live | None = None
        self._reader: threading.Thread | None = None
        self._stopping = threading.Event()
        self._saved_tty = None

    # Lifecycle

    def start(self, loop) -> None:
        self._live = Live(
            console=self.console,
            refresh_per_second=self.ui.refresh_per_second,
            screen=True,
        )
        self._live.start()

        if self.read_input and sys.stdin.isatty():
            self._enter_cbreak()
            self._stopping.clear()
            self._reader = threading.Thread(
                target=self._read_keys, args=(loop,), name="arpo-keys", daemon=True
            )
            self._reader.start()

    def stop(self) -> None:
        self._stopping.set()
        if self._reader is not None:
            self._reader.join(timeout=1.0)
            self._reader = None
        self._restore_tty()
        if self._live is not None:
            self._live.stop()
            self._live = None

    def render(self, view: ViewModel) -> None:
        if self._live is not None:
            self._live.update(self.build(view), refresh=True)

    # Input

    def translate(self, key: str, view: ViewModel) -> Event | None:
        """Map a normalized key to a core event, moving the cursor as needed."""
        action = self.keys.action_for(key)
        if action == "quit":
            return Quit()
        if view.phase is not Phase.SELECTING or view.finished or not view.rows:
            return None

        if action == "up":
            self.cursor = max(0, self.cursor - 1)
        elif action == "down":
            self.cursor = min(len(view.rows) - 1, self.cursor + 1)
        elif action == "toggle":
            self.cursor = min(self.cursor, len(view.rows) - 1)
            return Toggle(name=view.rows[self.cursor].name)
        elif action == "commit":
            return Commit()
        return None

    def _key_available(self, timeout: float) -> bool:
        if os.name == "nt":
            import msvcrt

            if msvcrt.kbhit():
                return True
            self._stopping.wait(timeout)
            return False
        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        return bool(ready)

    def _read_keys(self, loop) -> None:
        from ..runtime.loop import KeyPressed

        while not self._stopping.is_set():
            if not self._key_available(0.1):
                continue
            try:
                raw = click.getchar()
            except KeyboardInterrupt:
                raw = "\x03"
            except EOFError:
                raw = "\x04"
            loop.post(KeyPressed(normalize_key(raw)))

    def _enter_cbreak(self) -> None:
        if os.name == "nt":
            return
        import termios
        import tty

        fd = sys.stdin.fileno()
        self._saved_tty = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def _restore_tty(self) -> None:
        if self._saved_tty is None:
            return
        import termios

        termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_tty)
        self._saved_tty = None

    # Rendering

    def build(self, view: ViewModel) -> RenderableType:
        if view.phase is Phase.LOADING:
            body = self._build_loading(view)
        elif view.phase is Phase.SELECTING:
            body = self._build_selecting(view)
        else:
            body = self._build_archiving(view)
        return Padding(body, (1, 2, 0, 2))

    def _build_loading(self, view: ViewModel) -> RenderableType:
        if view.finished:
            return Text(view.status)
        self._spinner.update(text=Text(view.status))
        return self._spinner

    def _page_bounds(self, count: int) -> tuple[int, int, int, int]:
        size = self.ui.page_size
        page = self.cursor // size
        pages = max(1, -(-count // size))
        return page * size, min(count, (page + 1) * size), page + 1, pages

    def _build_selecting(self, view: ViewModel) -> RenderableType:
        if not view.rows:
            return Group(
                Text("No projects found.", style="yellow"),
                Text(HELP_ARCHIVING, style=self.theme.help),
            )

        self.cursor = min(self.cursor, len(view.rows) - 1)
        first, last, page, pages = self._page_bounds(len(view.rows))

        table = Table(
            border_style=self.theme.border,
            header_style=self.theme.header,
            style=self.theme.row,
            caption=f"{page}/{pages}" if pages > 1 else None,
        )
        table.add_column("✓", width=1, style=self.theme.check_mark)
        table.add_column("Name", min_width=20)

        for position in range(first, last):
            row = view.rows[position]
            table.add_row(
                "✓" if row.selected else " ",
                row.name,
                style=self.theme.cursor if position == self.cursor else None,
            )

        parts: list[RenderableType] = [table, Text(view.status)]
        if not view.cancelled:
            parts.append(Text(f"\n{HELP_SELECTING}", style=self.theme.help))
        return Group(*parts)

    def _build_archiving(self, view: ViewModel) -> RenderableType:
        parts: list[RenderableType] = []

        if view.finished:
            style = "red" if view.error else ("green" if view.done else None)
            parts.append(Text(view.status, style=style))
        else:
            self._spinner.update(text=Text(f" {view.status}"))
            parts.append(self._spinner)

        parts.append(Text(""))
        for record in view.history:
            if record.is_placeholder:
                parts.append(Text(describe_record(record), style=self.theme.placeholder))
            else:
                text = Text(f"📦 Moved {record.entry.name} ")
                text.append(format_duration(record.elapsed), style=self.theme.duration)
                parts.append(text)

        if view.done:
            parts.append(Text("\nDone!"))
        if not view.cancelled:
            parts.append(Text(f"\n{HELP_ARCHIVING}", style=self.theme.help))
        return Group(*parts)
