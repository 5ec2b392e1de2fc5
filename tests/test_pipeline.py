"""Tests for the sequential archival pipeline."""

from pathlib import Path

import pytest

from arpo.catalog import Entry
from arpo.core import ArchivalPipeline, MoveEntry, PipelineStatus
from arpo.errors import MoveError, ProtocolViolation

ARCHIVE = Path("/archive")


def entries(*names):
    return tuple(Entry(name=name, source_path=Path("/projects") / name) for name in names)


def run_to_completion(pipeline):
    """Feed successful completions until the pipeline stops asking for moves."""
    pipeline, commands = pipeline.start()
    issued = list(commands)
    while commands:
        (command,) = commands
        pipeline, commands = pipeline.complete(command.index, 0.1 * (command.index + 1))
        issued.extend(commands)
    return pipeline, issued


class TestArchivalPipeline:
    """Tests for ArchivalPipeline."""

    def test_create_is_idle(self):
        pipeline = ArchivalPipeline.create(entries("A", "B"), ARCHIVE)

        assert pipeline.status is PipelineStatus.IDLE
        assert pipeline.total == 2
        assert pipeline.in_flight is None

    def test_start_issues_first_move_only(self):
        """Only one move is requested at a time."""
        pipeline, commands = ArchivalPipeline.create(entries("A", "B", "C"), ARCHIVE).start()

        assert pipeline.status is PipelineStatus.IN_FLIGHT
        assert commands == [MoveEntry(index=0, entry=pipeline.entries[0], destination_root=ARCHIVE)]
        assert pipeline.in_flight.name == "A"

    def test_start_twice_issues_nothing(self):
        pipeline, _ = ArchivalPipeline.create(entries("A"), ARCHIVE).start()
        again, commands = pipeline.start()

        assert again is pipeline
        assert commands == []

    def test_empty_work_list_completes_immediately(self):
        """Zero entries means done without a single move."""
        pipeline, commands = ArchivalPipeline.create((), ARCHIVE).start()

        assert pipeline.status is PipelineStatus.COMPLETED
        assert commands == []

    def test_completion_advances_to_next_entry(self):
        pipeline, _ = ArchivalPipeline.create(entries("A", "B"), ARCHIVE).start()

        pipeline, commands = pipeline.complete(0, 0.25)

        assert pipeline.index == 1
        assert pipeline.status is PipelineStatus.IN_FLIGHT
        assert [c.entry.name for c in commands] == ["B"]
        assert [r.entry.name for r in pipeline.history.completed()] == ["A"]
        assert pipeline.history.completed()[0].elapsed == 0.25

    def test_runs_in_index_order_one_at_a_time(self):
        """Each completion requests exactly the next index."""
        pipeline, issued = run_to_completion(
            ArchivalPipeline.create(entries("A", "B", "C", "D"), ARCHIVE)
        )

        assert [c.index for c in issued] == [0, 1, 2, 3]
        assert pipeline.status is PipelineStatus.COMPLETED
        assert pipeline.index == 4

    def test_history_keeps_last_five(self):
        """Seven completions leave the last five in the history."""
        names = [f"p{i}" for i in range(7)]
        pipeline, _ = run_to_completion(ArchivalPipeline.create(entries(*names), ARCHIVE))

        assert len(pipeline.history) == 5
        assert [r.entry.name for r in pipeline.history.completed()] == names[-5:]

    def test_custom_history_size(self):
        pipeline, _ = run_to_completion(
            ArchivalPipeline.create(entries("A", "B", "C"), ARCHIVE, history_size=2)
        )
        assert [r.entry.name for r in pipeline.history.completed()] == ["B", "C"]

    def test_mismatched_index_is_rejected(self):
        """A stale completion changes nothing."""
        pipeline, _ = ArchivalPipeline.create(entries("A", "B", "C"), ARCHIVE).start()
        pipeline, _ = pipeline.complete(0, 0.1)

        with pytest.raises(ProtocolViolation):
            pipeline.complete(0, 0.1)
        with pytest.raises(ProtocolViolation):
            pipeline.complete(2, 0.1)

        assert pipeline.index == 1
        assert len(pipeline.history.completed()) == 1

    def test_completion_while_idle_is_rejected(self):
        pipeline = ArchivalPipeline.create(entries("A"), ARCHIVE)
        with pytest.raises(ProtocolViolation):
            pipeline.complete(0, 0.1)

    def test_failure_stops_the_run(self):
        """A failed move is terminal and requests nothing further."""
        pipeline, _ = ArchivalPipeline.create(entries("A", "B", "C"), ARCHIVE).start()
        pipeline, _ = pipeline.complete(0, 0.1)
        error = MoveError("B", "disk full")

        failed = pipeline.fail(1, error)

        assert failed.status is PipelineStatus.FAILED
        assert failed.error is error
        assert failed.index == 1
        with pytest.raises(ProtocolViolation):
            failed.complete(1, 0.1)

    def test_failure_for_wrong_index_is_rejected(self):
        pipeline, _ = ArchivalPipeline.create(entries("A", "B"), ARCHIVE).start()
        with pytest.raises(ProtocolViolation):
            pipeline.fail(1, MoveError("B", "boom"))

    def test_cancel_while_in_flight(self):
        """A late completion after cancelling does not touch the history."""
        pipeline, _ = ArchivalPipeline.create(entries("A", "B"), ARCHIVE).start()

        cancelled = pipeline.cancel()

        assert cancelled.status is PipelineStatus.CANCELLED
        with pytest.raises(ProtocolViolation):
            cancelled.complete(0, 0.1)
        assert cancelled.history.completed() == ()

    def test_cancel_when_idle(self):
        pipeline = ArchivalPipeline.create(entries("A"), ARCHIVE)
        assert pipeline.cancel().status is PipelineStatus.CANCELLED

    def test_cancel_after_completion_is_noop(self):
        pipeline, _ = run_to_completion(ArchivalPipeline.create(entries("A"), ARCHIVE))
        assert pipeline.cancel() is pipeline

    def test_terminal_statuses(self):
        assert PipelineStatus.COMPLETED.is_terminal
        assert PipelineStatus.CANCELLED.is_terminal
        assert PipelineStatus.FAILED.is_terminal
        assert not PipelineStatus.IN_FLIGHT.is_terminal
        assert not PipelineStatus.IDLE.is_terminal
