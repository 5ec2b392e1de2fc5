"""Selection phase state."""

from dataclasses import dataclass, field, replace

from ..catalog import Catalog, Entry


@dataclass(frozen=True)
class SelectionState:
    """The loaded catalog plus the names the user has marked."""

    catalog: Catalog = ()
    marked: frozenset[str] = field(default_factory=frozenset)

    def toggle(self, name: str) -> "SelectionState":
        """Flip ``name`` in the mark set. Names not in the catalog are ignored."""
        if not any(entry.name == name for entry in self.catalog):
            return self
        return replace(self, marked=self.marked ^ {name})

    def is_marked(self, name: str) -> bool:
        return name in self.marked

    def commit(self) -> tuple[Entry, ...]:
        """Marked entries in catalog order."""
        return tuple(entry for entry in self.catalog if entry.name in self.marked)
