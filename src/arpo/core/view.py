"""Presentation-neutral description of the current state."""

from dataclasses import dataclass

from .history import ArchivalRecord
from .state import AppState, Phase

PLACEHOLDER_WIDTH = 30


@dataclass(frozen=True)
class Row:
    name: str
    selected: bool


@dataclass(frozen=True)
class ViewModel:
    """What a presenter needs to draw one frame."""

    phase: Phase
    rows: tuple[Row, ...]
    status: str
    history: tuple[ArchivalRecord, ...]
    done: bool = False
    cancelled: bool = False
    error: str | None = None
    completed_count: int = 0
    total: int = 0

    @property
    def finished(self) -> bool:
        return self.done or self.cancelled or self.error is not None


def format_duration(seconds: float) -> str:
    """Short human duration: 850ms, 2.41s, 3m05s."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(round(seconds)), 60)
    return f"{minutes}m{secs:02d}s"


def describe_record(record: ArchivalRecord) -> str:
    if record.is_placeholder:
        return "." * PLACEHOLDER_WIDTH
    return f"📦 Moved {record.entry.name} {format_duration(record.elapsed)}"


def _status_line(state: AppState) -> str:
    if state.phase is Phase.LOADING:
        if state.error:
            return f"✗ {state.error}"
        return "Cancelled" if state.cancelled else "Loading projects..."

    if state.phase is Phase.SELECTING:
        if state.cancelled:
            return "Cancelled"
        marked = len(state.selection.marked)
        return f"{marked} of {len(state.selection.catalog)} selected"

    pipeline = state.pipeline
    if state.cancelled:
        return "Archiving Cancelled"
    if state.error:
        return f"✗ Archiving failed: {state.error}"
    if state.done:
        return "✓ Archiving Completed!"
    return f"Archiving projects... ({pipeline.index + 1}/{pipeline.total})"


def describe(state: AppState) -> ViewModel:
    """Build the view model for ``state``. Pure."""
    rows: tuple[Row, ...] = ()
    if state.selection is not None:
        rows = tuple(
            Row(name=entry.name, selected=state.selection.is_marked(entry.name))
            for entry in state.selection.catalog
        )

    history: tuple[ArchivalRecord, ...] = ()
    completed = total = 0
    if state.pipeline is not None:
        history = state.pipeline.history.records
        # index counts finished moves; a failed move never advances it
        completed = state.pipeline.index
        total = state.pipeline.total

    return ViewModel(
        phase=state.phase,
        rows=rows,
        status=_status_line(state),
        history=history,
        done=state.done,
        cancelled=state.cancelled,
        error=state.error,
        completed_count=completed,
        total=total,
    )
