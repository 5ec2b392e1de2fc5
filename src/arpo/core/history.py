"""Bounded history of completed moves."""

from dataclasses import dataclass

from ..catalog import Entry

HISTORY_CAPACITY = 5


@dataclass(frozen=True)
class ArchivalRecord:
    """One completed move. A zero ``elapsed`` with no entry is an empty slot."""

    entry: Entry | None
    elapsed: float = 0.0

    @classmethod
    def placeholder(cls) -> "ArchivalRecord":
        return cls(entry=None, elapsed=0.0)

    @property
    def is_placeholder(self) -> bool:
        return self.entry is None and self.elapsed == 0


@dataclass(frozen=True)
class RecentHistory:
    """
    Fixed-capacity FIFO of the latest records, oldest first.

    Starts filled with placeholders so the display keeps a constant height.
    Records pushed past capacity are discarded for good. Capacity is at most
    ``HISTORY_CAPACITY``.
    """

    records: tuple[ArchivalRecord, ...]

    @classmethod
    def empty(cls, capacity: int = HISTORY_CAPACITY) -> "RecentHistory":
        if not 1 <= capacity <= HISTORY_CAPACITY:
            raise ValueError(f"history capacity must be between 1 and {HISTORY_CAPACITY}")
        return cls(records=(ArchivalRecord.placeholder(),) * capacity)

    @property
    def capacity(self) -> int:
        return len(self.records)

    def push(self, record: ArchivalRecord) -> "RecentHistory":
        return RecentHistory(records=self.records[1:] + (record,))

    def completed(self) -> tuple[ArchivalRecord, ...]:
        """Real records only, in completion order."""
        return tuple(r for r in self.records if not r.is_placeholder)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
