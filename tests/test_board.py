"""Tests for TaskBoard."""

import contextlib
import time
from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest
from rich.text import Text

from logboard.board import LogKind, LogLine, TaskBoard
from logboard.config import BoardConfig
from logboard.display import Display
from logboard.task import Task, TaskContractError, TaskState


@pytest.fixture
def board(display, plain_config, clock) -> TaskBoard:
    """Return a board with plain output, a recording display and a fake clock."""
    return TaskBoard(display=display, config=plain_config, clock=clock)


class TestTaskBoardInit:
    """Tests for TaskBoard construction."""

    def test_empty_board(self, board):
        """Test the initial board state."""
        assert board.tasks == []
        assert board.log_buffer == []
        assert board.frame_index == 0

    def test_initial_tasks_registered_in_order(self, display, plain_config, clock):
        """Test initial option mappings become tasks in order."""
        board = TaskBoard(
            tasks=[{"name": "a"}, {"name": "b", "status": "waiting"}, {"name": "c", "total": 5}],
            display=display,
            config=plain_config,
            clock=clock,
        )
        assert [t.name for t in board.tasks] == ["a", "b", "c"]
        assert board.tasks[1].status == "waiting"
        assert board.tasks[2].total == 5
        assert all(t.clock is clock for t in board.tasks)

    def test_default_display_is_live(self, plain_config):
        """Test a Rich live display is created when none is given."""
        from logboard.display import LiveDisplay

        board = TaskBoard(config=plain_config)
        assert isinstance(board.display, LiveDisplay)


class TestTaskRegistry:
    """Tests for registering, finding and removing tasks."""

    def test_log_task_returns_handle(self, board):
        """Test log_task hands back the attached future."""
        future = Future()
        assert board.log_task("download", handle=future) is future
        assert board.task("download").handle is future

    def test_log_task_without_handle(self, board):
        """Test log_task returns None when no future is attached."""
        assert board.log_task("plain") is None
        assert len(board.tasks) == 1

    def test_log_future_and_alias(self, board):
        """Test log_future and log_promise register future-backed tasks."""
        first, second = Future(), Future()
        assert board.log_future("one", first) is first
        assert board.log_promise("two", second) is second
        second.set_exception(RuntimeError())
        assert board.task("two").state == TaskState.REJECTED

    def test_log_progress_returns_task(self, board):
        """Test log_progress returns the task for later updates."""
        task = board.log_progress("build", 10)
        assert isinstance(task, Task)
        assert task.total == 10
        assert task.progress == 0
        assert board.task("build") is task

    def test_lookup_by_name_first_match(self, board):
        """Test name lookups return the first task registered under that name."""
        board.log_task("dup", status="first")
        board.log_task("dup", status="second")
        assert board.task("dup").status == "first"

    def test_lookup_by_identity(self, board):
        """Test a task instance is found by identity."""
        board.log_task("a")
        task = board.log_progress("a", 3)
        assert board.task(task) is task

    def test_lookup_missing(self, board, clock):
        """Test missing names and foreign tasks return None."""
        assert board.task("ghost") is None
        assert board.task(Task("ghost", clock=clock)) is None

    def test_remove_task_by_name(self, board):
        """Test removal by name."""
        board.log_task("a")
        board.log_task("b")
        board.remove_task("a")
        assert [t.name for t in board.tasks] == ["b"]

    def test_remove_task_by_instance(self, board):
        """Test removal by instance leaves same-named tasks alone."""
        board.log_task("a", status="keep")
        task = board.log_progress("a", 3)
        board.remove_task(task)
        assert len(board.tasks) == 1
        assert board.tasks[0].status == "keep"

    def test_remove_missing_task_is_noop(self, board):
        """Test removing an unknown name leaves the collection unchanged."""
        board.log_task("a")
        before = list(board.tasks)
        board.remove_task("x")
        assert board.tasks == before

    def test_remove_pending_task_immediately(self, board):
        """Test removal does not wait for a terminal state."""
        future = Future()
        board.log_future("slow", future)
        board.remove_task("slow")
        assert board.tasks == []
        future.set_result(None)

    def test_clear_tasks(self, board):
        """Test clear_tasks empties the board."""
        board.log_task("a")
        board.log_task("b")
        board.clear_tasks()
        assert board.tasks == []


class TestTick:
    """Tests for TaskBoard.tick."""

    def test_advances_frame_modulo_frames(self, display, clock):
        """Test the frame index wraps at the spinner frame count."""
        board = TaskBoard(display=display, config=BoardConfig(frames=("a", "b", "c"), no_color=True), clock=clock)
        indices = []
        for _ in range(4):
            board.tick()
            indices.append(board.frame_index)
        assert indices == [1, 2, 0, 1]

    def test_renders_tasks_in_order(self, board, display):
        """Test each task renders on its own line in insertion order."""
        board.log_task("first")
        board.log_task("second")
        frame = board.tick().plain
        assert frame == "\\ first (0:00:00)\n\\ second (0:00:00)"
        assert display.last_frame == frame

    def test_fulfilled_progress_task(self, board):
        """Test a completed progress task shows the mark and no bar."""
        task = board.log_progress("build", 10, 0)
        task.update(10)
        frame = board.tick().plain
        assert "+ build" in frame
        assert "\n" not in frame
        assert "%" not in frame

    def test_pending_progress_task_has_bar(self, board, display):
        """Test a pending progress task renders a bar sized to the display."""
        board.log_progress("build", 4, 1)
        lines = board.tick().plain.split("\n")
        assert len(lines) == 2
        assert "25.00% (1 / 4)" in lines[1]
        assert len(lines[1]) <= display.width

    def test_width_read_on_every_tick(self, board, display):
        """Test a resized display changes the bar length."""
        board.log_progress("build", 4, 1)
        wide = board.tick().plain.split("\n")[1]
        display.resize(50)
        narrow = board.tick().plain.split("\n")[1]
        assert len(wide) - len(narrow) == 30

    def test_purges_due_removals(self, board, clock):
        """Test tasks whose removal time passed vanish from frame and board."""
        board.log_task("stays")
        board.log_task("goes", remove_when_complete=True, remove_at_time=clock.now - 1)
        frame = board.tick().plain
        assert "goes" not in frame
        assert [t.name for t in board.tasks] == ["stays"]

    def test_scheduled_removal_waits(self, board, clock):
        """Test a scheduled task survives until its time passes."""
        board.log_progress("build", 1).update(1).schedule_removal(2)
        board.tick()
        assert board.task("build") is not None
        clock.advance(2)
        board.tick()
        assert board.task("build") is None

    def test_logs_precede_tasks_and_flush_once(self, board, display):
        """Test buffered lines render before tasks and are cleared after."""
        board.log_task("work")
        board.log("hello")
        board.error("oops")
        frame = board.tick().plain
        assert frame.split("\n") == ["hello", "oops", "\\ work (0:00:00)"]
        assert display.written == ["hello", "oops"]
        assert display.last_frame == "\\ work (0:00:00)"
        assert board.log_buffer == []

        second = board.tick().plain
        assert "hello" not in second
        assert display.written == ["hello", "oops"]

    def test_logs_without_tasks(self, board, display):
        """Test a frame with only log lines."""
        board.log("only")
        assert board.tick().plain == "only"
        assert display.last_frame == ""

    def test_error_lines_styled(self, display, clock):
        """Test error lines carry the error style when colors are enabled."""
        from logboard.formatters import Styles

        board = TaskBoard(display=display, config=BoardConfig(), clock=clock)
        board.error("bad")
        board.log("fine")
        frame = board.tick()
        styles = {frame.plain[span.start:span.end]: span.style for span in frame.spans}
        assert styles.get("bad") == Styles.ERROR
        assert "fine" not in styles

    def test_detached_task_settles_quietly(self, board):
        """Test a removed task's future can still complete."""
        future = Future()
        board.log_future("gone", future)
        board.clear_tasks()
        future.set_exception(RuntimeError("late"))
        assert board.tick().plain == ""

    def test_redraw_via_display_interface(self, plain_config, clock):
        """Test tick drives any Display implementation."""
        display = MagicMock(spec=Display)
        display.width = 80
        board = TaskBoard(display=display, config=plain_config, clock=clock)
        board.log("line")
        board.tick()
        display.write_above.assert_called_once()
        display.redraw.assert_called_once()
        assert isinstance(display.redraw.call_args[0][0], Text)


class TestLogBuffer:
    """Tests for write, log, error and stream."""

    def test_write_splits_lines(self, board):
        """Test multi-line text becomes one buffer entry per line."""
        board.write(LogKind.INFO, "a\nb")
        assert board.log_buffer == [LogLine("a", LogKind.INFO), LogLine("b", LogKind.INFO)]

    def test_error_kind(self, board):
        """Test error() records error lines."""
        board.error("bad")
        assert board.log_buffer == [LogLine("bad", LogKind.ERROR)]

    def test_stream_emits_complete_lines(self, board):
        """Test the stream holds partial lines until newline or flush."""
        stream = board.stream()
        stream.write("par")
        assert board.log_buffer == []
        stream.write("tial\nnext")
        assert board.log_buffer == [LogLine("partial")]
        stream.flush()
        assert board.log_buffer == [LogLine("partial"), LogLine("next")]

    def test_stream_with_print(self, board):
        """Test print() routed through an error stream."""
        stream = board.stream(LogKind.ERROR)
        print("failed", 3, file=stream)
        assert board.log_buffer == [LogLine("failed 3", LogKind.ERROR)]

    def test_redirect_stdout(self, board):
        """Test callers can opt in to routing stdout through the board."""
        with contextlib.redirect_stdout(board.stream()):
            print("captured")
        assert board.log_buffer == [LogLine("captured")]


class TestLifecycle:
    """Tests for start and stop."""

    def test_start_and_stop(self, display, clock):
        """Test the refresh thread ticks and stop performs a final tick."""
        board = TaskBoard(display=display, config=BoardConfig(interval=0.01, no_color=True), clock=clock)
        board.log_task("spin")
        board.start()
        try:
            assert display.started is True
            deadline = time.monotonic() + 2.0
            while len(display.frames) < 2 and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            board.log("last words")
            board.stop()

        assert len(display.frames) >= 2
        assert display.stopped is True
        assert display.written[-1] == "last words"
        count = len(display.frames)
        time.sleep(0.05)
        assert len(display.frames) == count

    def test_context_manager(self, display, plain_config, clock):
        """Test the board starts and stops around a with block."""
        with TaskBoard(display=display, config=plain_config, clock=clock) as board:
            board.log_progress("build", 2).update(2)
        assert display.stopped is True
        assert "+ build" in display.last_frame


class TestBoardContract:
    """Tests for fail-fast registration and robust shutdown."""

    def test_log_progress_zero_total(self, board):
        """Test a zero total is refused and nothing is registered."""
        with pytest.raises(TaskContractError, match="total must be positive"):
            board.log_progress("x", 0)
        assert board.tasks == []

    def test_stop_releases_display_when_tick_fails(self, plain_config, clock):
        """Test the display is stopped even if the final redraw raises."""
        display = MagicMock(spec=Display)
        display.width = 80
        display.redraw.side_effect = OSError("terminal gone")
        board = TaskBoard(display=display, config=plain_config, clock=clock)
        with pytest.raises(OSError, match="terminal gone"):
            board.stop()
        display.stop.assert_called_once()
