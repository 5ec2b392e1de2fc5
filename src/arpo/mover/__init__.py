"""Mover module for relocating projects into the archive."""

from .mover import DirectoryMover

__all__ = [
    "DirectoryMover",
]
