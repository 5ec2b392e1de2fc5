"""Exception hierarchy for arpo."""

from pathlib import Path


class ArpoError(Exception):
    """Base error for arpo."""


class CatalogLoadError(ArpoError):
    """The projects root could not be listed."""

    def __init__(self, root: Path, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot read projects root {root}: {reason}")


class MoveError(ArpoError):
    """A directory could not be moved into the archive."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to archive {name}: {reason}")


class ProtocolViolation(ArpoError):
    """A completion message does not match the move currently in flight."""
