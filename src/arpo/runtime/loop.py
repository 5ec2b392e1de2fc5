"""Single-threaded event loop that drives the controller."""

import queue
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from ..core.controller import AppController
from ..core.messages import Command, CommandCrashed, Event, Quit
from ..core.state import AppState
from ..core.view import ViewModel
from ..utils.logging import get_logger
from .executor import CommandExecutor

logger = get_logger(__name__)


@dataclass(frozen=True)
class KeyPressed:
    """Raw input from the presenter, translated on the loop thread."""

    key: str


class Presenter(Protocol):
    def start(self, loop: "EventLoop") -> None: ...

    def render(self, view: ViewModel) -> None: ...

    def translate(self, key: str, view: ViewModel) -> Event | None: ...

    def stop(self) -> None: ...


class EventLoop:
    """
    Processes one message at a time on the calling thread.

    Commands run on a small thread pool and report back through the same
    queue as user input, so the controller only ever sees a serial stream of
    events. The presenter is given a fresh view after every message.
    """

    def __init__(
        self,
        controller: AppController,
        executor: CommandExecutor,
        presenter: Presenter,
        max_workers: int = 2,
    ):
        self.controller = controller
        self.executor = executor
        self.presenter = presenter
        self.max_workers = max_workers

        self._events: queue.Queue = queue.Queue()
        self._pool: ThreadPoolExecutor | None = None

    def post(self, message: Event | KeyPressed) -> None:
        """Queue a message. Safe to call from any thread."""
        self._events.put(message)

    def _submit(self, commands: list[Command]) -> None:
        for command in commands:
            logger.debug(f"Dispatching {command!r}")
            future = self._pool.submit(self.executor.execute, command)
            future.add_done_callback(lambda f, c=command: self._on_done(c, f))

    def _on_done(self, command: Command, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"Command {command!r} crashed: {error}")
            self.post(CommandCrashed(command=command, error=error))
            return
        self.post(future.result())

    def _next_event(self) -> Event | None:
        message = self._events.get()
        if isinstance(message, KeyPressed):
            return self.presenter.translate(message.key, self.controller.view())
        return message

    def run(self) -> AppState:
        """Run until the controller reports the session finished."""
        self._pool = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="arpo-command"
        )
        self.presenter.start(self)
        try:
            self._submit(self.controller.start())

            while True:
                # Ctrl+C anywhere in a turn, drawing included, quits the session
                try:
                    self.presenter.render(self.controller.view())
                    if self.controller.finished:
                        break
                    event = self._next_event()
                    if event is not None:
                        self._submit(self.controller.dispatch(event))
                except KeyboardInterrupt:
                    self.controller.dispatch(Quit())
        finally:
            self.presenter.stop()
            # A move already running is left to finish; queued work is dropped
            self._pool.shutdown(wait=False, cancel_futures=True)

        return self.controller.state
