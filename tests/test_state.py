"""Tests for the application reducer."""

from pathlib import Path

import pytest

from arpo.catalog import Entry
from arpo.core import (
    HISTORY_CAPACITY,
    AppController,
    CatalogLoaded,
    CatalogLoadFailed,
    CommandCrashed,
    Commit,
    LoadCatalog,
    MoveCompleted,
    MoveEntry,
    MoveFailed,
    Phase,
    PipelineStatus,
    Quit,
    Toggle,
    initial_state,
    reduce,
    start,
)
from arpo.errors import CatalogLoadError, MoveError

ROOT = Path("/projects")
ARCHIVE = Path("/projects/arpo")


def entries(*names):
    return tuple(Entry(name=name, source_path=ROOT / name) for name in names)


def feed(state, *events):
    """Apply events in order, collecting every command issued."""
    issued = []
    for event in events:
        state, commands = reduce(state, event)
        issued.extend(commands)
    return state, issued


@pytest.fixture
def fresh():
    return initial_state(ROOT, ARCHIVE)


@pytest.fixture
def selecting(fresh):
    state, _ = reduce(fresh, CatalogLoaded(entries=entries("A", "B", "C")))
    return state


class TestStartup:
    """Tests for the loading phase."""

    def test_initial_state(self, fresh):
        assert fresh.phase is Phase.LOADING
        assert fresh.selection is None
        assert fresh.pipeline is None
        assert not fresh.finished

    def test_start_requests_catalog(self, fresh):
        state, commands = start(fresh)
        assert commands == [LoadCatalog(root=ROOT)]
        assert state is fresh

    def test_catalog_loaded_enters_selecting(self, selecting):
        assert selecting.phase is Phase.SELECTING
        assert [e.name for e in selecting.selection.catalog] == ["A", "B", "C"]

    def test_catalog_load_failure_is_fatal(self, fresh):
        error = CatalogLoadError(ROOT, "no such directory")

        state, commands = reduce(fresh, CatalogLoadFailed(error=error))

        assert state.error == str(error)
        assert state.finished
        assert commands == []

    def test_second_catalog_is_ignored(self, selecting):
        state, _ = reduce(selecting, CatalogLoaded(entries=entries("X")))
        assert state is selecting

    def test_input_before_catalog_is_ignored(self, fresh):
        state, commands = feed(fresh, Toggle(name="A"), Commit())
        assert state is fresh
        assert commands == []

    def test_quit_while_loading(self, fresh):
        state, commands = reduce(fresh, Quit())
        assert state.cancelled
        assert state.finished
        assert commands == []


class TestSelecting:
    """Tests for the selection phase."""

    def test_toggle(self, selecting):
        state, commands = reduce(selecting, Toggle(name="B"))
        assert state.selection.is_marked("B")
        assert commands == []

    def test_quit_while_selecting_moves_nothing(self, selecting):
        state, commands = feed(selecting, Toggle(name="A"), Quit())

        assert state.cancelled
        assert state.pipeline is None
        assert commands == []

    def test_commit_empty_selection_completes_immediately(self, selecting):
        """Nothing selected: done without a single move."""
        state, commands = reduce(selecting, Commit())

        assert state.phase is Phase.ARCHIVING
        assert state.pipeline.status is PipelineStatus.COMPLETED
        assert state.done
        assert state.finished
        assert commands == []

    def test_commit_issues_first_move(self, selecting):
        state, commands = feed(selecting, Toggle(name="C"), Toggle(name="A"), Commit())

        assert state.phase is Phase.ARCHIVING
        assert len(commands) == 1
        assert commands[0].index == 0
        assert commands[0].entry.name == "A"
        assert commands[0].destination_root == ARCHIVE

    def test_commit_is_one_way(self, selecting):
        """Toggles and commits after the commit change nothing."""
        state, _ = feed(selecting, Toggle(name="A"), Toggle(name="B"), Commit())
        after, commands = feed(state, Toggle(name="C"), Commit())

        assert after is state
        assert commands == []


class TestArchiving:
    """Tests for the archiving phase."""

    @pytest.fixture
    def archiving(self, selecting):
        state, _ = feed(selecting, Toggle(name="A"), Toggle(name="B"), Toggle(name="C"), Commit())
        return state

    def test_stale_completion_is_dropped(self, archiving):
        """A completion for another index leaves everything as it was."""
        state, commands = reduce(archiving, MoveCompleted(index=2, elapsed=0.4))

        assert state is archiving
        assert commands == []

    def test_duplicate_completion_is_dropped(self, archiving):
        state, _ = reduce(archiving, MoveCompleted(index=0, elapsed=0.4))
        again, commands = reduce(state, MoveCompleted(index=0, elapsed=0.4))

        assert again is state
        assert commands == []
        assert again.pipeline.index == 1

    def test_quit_while_in_flight(self, archiving):
        """The late completion of the running move is ignored."""
        state, _ = reduce(archiving, Quit())
        late, commands = reduce(state, MoveCompleted(index=0, elapsed=0.4))

        assert state.cancelled
        assert state.pipeline.status is PipelineStatus.CANCELLED
        assert late is state
        assert commands == []
        assert late.pipeline.history.completed() == ()

    def test_quit_after_done_keeps_done(self, selecting):
        done, _ = reduce(selecting, Commit())
        state, _ = reduce(done, Quit())
        assert state is done
        assert not state.cancelled

    def test_command_crash_is_fatal(self, archiving):
        crash = CommandCrashed(command=None, error=RuntimeError("kaboom"))

        state, commands = reduce(archiving, crash)

        assert "kaboom" in state.error
        assert state.pipeline.status is PipelineStatus.FAILED
        assert commands == []


class TestScenarios:
    """End-to-end event traces."""

    def test_select_a_and_c(self, selecting):
        """A then C are archived sequentially and the run completes."""
        state, issued = feed(selecting, Toggle(name="A"), Toggle(name="C"), Commit())
        assert [(c.index, c.entry.name) for c in issued] == [(0, "A")]

        state, commands = reduce(state, MoveCompleted(index=0, elapsed=0.2))
        assert [(c.index, c.entry.name) for c in commands] == [(1, "C")]
        assert state.pipeline.status is PipelineStatus.IN_FLIGHT

        state, commands = reduce(state, MoveCompleted(index=1, elapsed=0.3))
        assert commands == []
        assert state.done
        history = state.pipeline.history.completed()
        assert [(r.entry.name, r.elapsed) for r in history] == [("A", 0.2), ("C", 0.3)]

    def test_failure_on_second_of_three(self, selecting):
        """B fails while in flight: fatal, and C is never attempted."""
        state, issued = feed(
            selecting, Toggle(name="A"), Toggle(name="B"), Toggle(name="C"), Commit()
        )
        state, commands = reduce(state, MoveCompleted(index=0, elapsed=0.1))
        issued.extend(commands)

        error = MoveError("B", "permission denied")
        state, commands = reduce(state, MoveFailed(index=1, error=error))
        issued.extend(commands)

        assert state.error == str(error)
        assert state.finished
        assert state.pipeline.status is PipelineStatus.FAILED
        assert [c.entry.name for c in issued] == ["A", "B"]

        state, commands = reduce(state, MoveCompleted(index=1, elapsed=0.1))
        assert commands == []

    def test_never_more_than_one_move_in_flight(self, selecting):
        """Every command is issued only after the previous one completed."""
        state, outstanding = feed(
            selecting, Toggle(name="A"), Toggle(name="B"), Toggle(name="C"), Commit()
        )
        seen = 0
        while outstanding:
            assert len(outstanding) == 1
            (command,) = outstanding
            assert isinstance(command, MoveEntry)
            assert command.index == seen
            state, outstanding = reduce(state, MoveCompleted(index=command.index, elapsed=0.1))
            seen += 1

        assert seen == 3
        assert state.done

    def test_history_view_stays_at_five(self):
        """A run longer than the history keeps only the five newest records on screen."""
        names = [f"p{i}" for i in range(8)]
        controller = AppController(ROOT, ARCHIVE)
        controller.start()
        controller.dispatch(CatalogLoaded(entries=entries(*names)))
        for name in names:
            controller.dispatch(Toggle(name=name))
        controller.dispatch(Commit())

        for index in range(len(names)):
            controller.dispatch(MoveCompleted(index=index, elapsed=0.1))
            assert len(controller.view().history) <= HISTORY_CAPACITY

        view = controller.view()
        assert view.done
        assert [r.entry.name for r in view.history] == names[-5:]
