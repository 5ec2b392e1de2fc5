"""Mover component: relocates one project directory into the archive."""

import time
from pathlib import Path

from ..catalog import Entry
from ..errors import MoveError
from ..utils.filesystem import directory_exists, move_directory


class DirectoryMover:
    """
    Moves project directories into an archive folder.

    A move either completes fully or leaves the source untouched. The
    returned duration covers the whole call, including destination checks.
    """

    def __init__(
        self,
        archive_root: Path,
        dry_run: bool = False,
        on_conflict: str = "error",
    ):
        """
        Initialize the mover.

        Args:
            archive_root: Default destination folder
            dry_run: Validate and time moves without changing anything on disk
            on_conflict: "error" to refuse an existing destination, "rename" to
                pick a free "name (N)" instead
        """
        if on_conflict not in ("error", "rename"):
            raise ValueError(f"Unknown conflict policy: {on_conflict}")
        self.archive_root = Path(archive_root)
        self.dry_run = dry_run
        self.on_conflict = on_conflict

    def _resolve_conflict(self, destination: Path) -> Path:
        """
        Resolve naming conflicts by adding (1), (2), etc.

        Args:
            destination: Original destination path

        Returns:
            Conflict-free destination path
        """
        if not destination.exists():
            return destination

        counter = 1
        while True:
            candidate = destination.with_name(f"{destination.name} ({counter})")
            if not candidate.exists():
                return candidate
            counter += 1

            if counter > 1000:
                raise MoveError(destination.name, f"Too many conflicts for {destination}")

    def destination_for(self, entry: Entry, destination_root: Path | None = None) -> Path:
        """Where ``entry`` lands, before conflict resolution."""
        return Path(destination_root or self.archive_root) / entry.name

    def move(self, entry: Entry, destination_root: Path | None = None) -> float:
        """
        Move ``entry`` into ``destination_root`` (the archive root by default).

        Returns:
            Elapsed wall-clock seconds for the whole operation

        Raises:
            MoveError: If the source is unusable, the destination is taken, or
                the filesystem refuses the move
        """
        started = time.perf_counter()

        source = Path(entry.source_path)
        dest_root = Path(destination_root or self.archive_root)

        try:
            if not source.is_dir():
                raise MoveError(entry.name, f"Source is not a directory: {source}")

            destination = self.destination_for(entry, dest_root)
            if self.on_conflict == "rename":
                destination = self._resolve_conflict(destination)
            elif destination.exists():
                raise MoveError(entry.name, f"Already archived at {destination}")

            if not self.dry_run:
                if not directory_exists(dest_root):
                    dest_root.mkdir(parents=True, exist_ok=True)
                move_directory(source, destination)

        except PermissionError as e:
            raise MoveError(entry.name, f"Permission denied: {e}") from e
        except FileExistsError as e:
            raise MoveError(entry.name, f"Destination is occupied: {e}") from e
        except OSError as e:
            raise MoveError(entry.name, f"Move failed: {e}") from e

        return time.perf_counter() - started
