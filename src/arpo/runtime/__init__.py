"""Event loop and command execution."""

from .executor import CommandExecutor
from .loop import EventLoop, KeyPressed, Presenter

__all__ = [
    "CommandExecutor",
    "EventLoop",
    "KeyPressed",
    "Presenter",
]
