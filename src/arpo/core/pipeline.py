"""Sequential archival pipeline."""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from ..catalog import Entry
from ..errors import MoveError, ProtocolViolation
from .history import ArchivalRecord, RecentHistory
from .messages import MoveEntry


class PipelineStatus(str, Enum):
    """Where the pipeline is in its run."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStatus.COMPLETED, PipelineStatus.CANCELLED, PipelineStatus.FAILED)


@dataclass(frozen=True)
class ArchivalPipeline:
    """
    Moves a fixed work list one entry at a time.

    Only the entry at ``index`` is ever in flight. Its completion is recorded
    in ``history`` and the next move is requested; completions for any other
    index are rejected with ``ProtocolViolation``.
    """

    entries: tuple[Entry, ...]
    destination_root: Path
    status: PipelineStatus = PipelineStatus.IDLE
    index: int = 0
    history: RecentHistory = field(default_factory=RecentHistory.empty)
    error: MoveError | None = None

    @classmethod
    def create(
        cls,
        entries: tuple[Entry, ...],
        destination_root: Path,
        history_size: int = 5,
    ) -> "ArchivalPipeline":
        return cls(
            entries=tuple(entries),
            destination_root=Path(destination_root),
            history=RecentHistory.empty(history_size),
        )

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def in_flight(self) -> Entry | None:
        if self.status is PipelineStatus.IN_FLIGHT:
            return self.entries[self.index]
        return None

    def _request(self, index: int) -> MoveEntry:
        return MoveEntry(
            index=index,
            entry=self.entries[index],
            destination_root=self.destination_root,
        )

    def start(self) -> tuple["ArchivalPipeline", list[MoveEntry]]:
        """Issue the first move, or finish straight away on an empty work list."""
        if self.status is not PipelineStatus.IDLE:
            return self, []
        if not self.entries:
            return replace(self, status=PipelineStatus.COMPLETED), []
        return replace(self, status=PipelineStatus.IN_FLIGHT, index=0), [self._request(0)]

    def _check_in_flight(self, index: int) -> None:
        if self.status is not PipelineStatus.IN_FLIGHT:
            raise ProtocolViolation(
                f"Completion for index {index} while pipeline is {self.status.value}"
            )
        if index != self.index:
            raise ProtocolViolation(
                f"Completion for index {index} while index {self.index} is in flight"
            )

    def complete(self, index: int, elapsed: float) -> tuple["ArchivalPipeline", list[MoveEntry]]:
        """
        Record the move at ``index`` and request the next one.

        Raises:
            ProtocolViolation: If ``index`` is not the move in flight
        """
        self._check_in_flight(index)

        record = ArchivalRecord(entry=self.entries[index], elapsed=elapsed)
        history = self.history.push(record)
        next_index = index + 1

        if next_index >= self.total:
            return (
                replace(self, history=history, index=next_index, status=PipelineStatus.COMPLETED),
                [],
            )
        advanced = replace(self, history=history, index=next_index)
        return advanced, [advanced._request(next_index)]

    def fail(self, index: int, error: MoveError) -> "ArchivalPipeline":
        """
        Stop the run because the move at ``index`` failed.

        Raises:
            ProtocolViolation: If ``index`` is not the move in flight
        """
        self._check_in_flight(index)
        return replace(self, status=PipelineStatus.FAILED, error=error)

    def cancel(self) -> "ArchivalPipeline":
        if self.status.is_terminal:
            return self
        return replace(self, status=PipelineStatus.CANCELLED)
