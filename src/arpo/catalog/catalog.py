"""Project catalog: the candidate directories under the projects root."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import CatalogLoadError
from ..utils.filesystem import list_child_directories


@dataclass(frozen=True)
class Entry:
    """One directory that can be archived."""

    name: str
    source_path: Path


Catalog = tuple[Entry, ...]


class ProjectCatalog:
    """
    Lists the immediate subdirectories of a projects root.

    Each directory becomes one ``Entry``. Files are never listed. Results are
    sorted by name so the same tree always renders in the same order.
    """

    def __init__(
        self,
        skip_hidden: bool = False,
        excluded_paths: Iterable[Path] | None = None,
    ):
        """
        Initialize the catalog.

        Args:
            skip_hidden: Leave out directories whose name starts with a dot
            excluded_paths: Directories that must never be offered (e.g. the archive)
        """
        self.skip_hidden = skip_hidden
        self.excluded_paths = {Path(p).resolve() for p in (excluded_paths or ())}

    def _should_exclude(self, name: str, path: Path) -> bool:
        if self.skip_hidden and name.startswith("."):
            return True
        return path.resolve() in self.excluded_paths

    def load(self, root: Path) -> Catalog:
        """
        Enumerate ``root`` into a catalog.

        Raises:
            CatalogLoadError: If the root is missing, not a directory or unreadable
        """
        root = Path(root)
        try:
            children = list_child_directories(root)
        except FileNotFoundError:
            raise CatalogLoadError(root, "no such directory") from None
        except NotADirectoryError:
            raise CatalogLoadError(root, "not a directory") from None
        except PermissionError:
            raise CatalogLoadError(root, "permission denied") from None
        except OSError as e:
            raise CatalogLoadError(root, e.strerror or str(e)) from e

        entries = [
            Entry(name=name, source_path=path)
            for name, path in children
            if not self._should_exclude(name, path)
        ]
        entries.sort(key=lambda entry: entry.name)
        return tuple(entries)
