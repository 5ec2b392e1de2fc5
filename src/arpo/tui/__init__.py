"""Presenters: the interactive terminal UI and a headless runner."""

from .headless import HeadlessPresenter
from .keys import normalize_key
from .terminal import TerminalPresenter

__all__ = [
    "HeadlessPresenter",
    "TerminalPresenter",
    "normalize_key",
]
