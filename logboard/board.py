"""Task board: owns tasks, buffered log lines and the periodic redraw.

Every tick:
- advances the spinner frame
- purges tasks whose scheduled removal time has passed
- flushes buffered log lines above the display
- redraws the task lines in place

Task mutations are never pushed to the display; they are picked up on the
next tick, so bursts of updates cost one redraw per interval.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from rich.text import Text

from .config import BoardConfig
from .display import Display, LiveDisplay
from .formatters import StyleFormatter, SymbolsFormatter
from .task import Task


class LogKind(Enum):
    """Kind of a buffered log line."""
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class LogLine:
    """A single line written through the board."""
    text: str
    kind: LogKind = LogKind.INFO


class LogStream:
    """File-like writer that forwards complete lines to a board.

    Pass it to print(file=...) or contextlib.redirect_stdout to route
    ordinary output through the board instead of the raw terminal.
    """

    def __init__(self, board: "TaskBoard", kind: LogKind = LogKind.INFO):
        self._board = board
        self._kind = kind
        self._pending = ""

    def write(self, data: str) -> int:
        self._pending += data
        *lines, self._pending = self._pending.split("\n")
        for line in lines:
            self._board.write(self._kind, line)
        return len(data)

    def flush(self) -> None:
        if self._pending:
            self._board.write(self._kind, self._pending)
            self._pending = ""

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return False


class TaskBoard:
    """Live task list with buffered log output above it.

    A single re-entrant lock guards the task list and log buffer, since the
    refresh thread and callers mutate them concurrently.
    """

    def __init__(
        self,
        tasks: Optional[Iterable[Mapping[str, Any]]] = None,
        display: Optional[Display] = None,
        config: Optional[BoardConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Create a board, registering any initial tasks.

        Args:
            tasks: Option mappings, each passed to log_task as keywords
            display: Redraw target (a Rich live display if omitted)
            config: Board settings
            clock: Zero-argument callable returning seconds, shared with tasks
        """
        self.config = config or BoardConfig()
        self.display = display or LiveDisplay(no_color=self.config.no_color)
        self.clock = clock
        self.styles = StyleFormatter(no_color=self.config.no_color)
        self.symbols = SymbolsFormatter(no_color=self.config.no_color)

        self.tasks: list[Task] = []
        self.frame_index = 0
        self.log_buffer: list[LogLine] = []

        self.lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        for options in tasks or ():
            self.log_task(**options)

    def __enter__(self) -> "TaskBoard":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> "TaskBoard":
        """Start the display and the refresh thread."""
        self._stop_event.clear()
        self.display.start()
        self._thread = threading.Thread(target=self._run, name="logboard-refresh", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> "TaskBoard":
        """Stop refreshing after one final tick that flushes pending state."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        try:
            self.tick()
        finally:
            self.display.stop()
        return self

    def _run(self) -> None:
        while not self._stop_event.wait(self.config.interval):
            self.tick()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render_log_line(self, line: LogLine) -> Text:
        if line.kind is LogKind.ERROR:
            return self.styles.error(line.text)
        return Text(line.text)

    def tick(self) -> Text:
        """Run one refresh cycle and return the composite frame.

        The frame holds the flushed log lines followed by the task lines.
        Log lines go above the display once; task lines replace the
        previous block.
        """
        with self.lock:
            self.frame_index = (self.frame_index + 1) % len(self.config.frames)

            now = self.clock()
            self.tasks = [task for task in self.tasks if not task.is_due_for_removal(now)]

            pending_logs, self.log_buffer = self.log_buffer, []
            log_lines = [self._render_log_line(line) for line in pending_logs]

            width = self.display.width
            task_lines = [
                task.render(self.frame_index, width, self.styles, self.symbols, self.config.frames)
                for task in self.tasks
            ]

            if log_lines:
                self.display.write_above(Text("\n").join(log_lines))
            self.display.redraw(Text("\n").join(task_lines))

        return Text("\n").join(log_lines + task_lines)

    # =========================================================================
    # Task registry
    # =========================================================================

    def log_task(self, name: str, **options: Any) -> Any:
        """Register a new task and return its future handle, if any.

        Args:
            name: Task name
            **options: Remaining Task constructor arguments

        Returns:
            The handle passed in options, so callers can keep chaining on it
        """
        task = Task(name, clock=self.clock, **options)
        with self.lock:
            self.tasks.append(task)
        return task.handle

    def log_future(self, name: str, handle: Any) -> Any:
        """Register a task settled by a future; returns the future."""
        return self.log_task(name, handle=handle)

    log_promise = log_future

    def log_progress(self, name: str, total: float, progress: float = 0) -> Task:
        """Register a task with a progress bar and return the task itself."""
        task = Task(name, progress=progress, total=total, clock=self.clock)
        with self.lock:
            self.tasks.append(task)
        return task

    def task(self, name_or_task: Union[str, Task]) -> Optional[Task]:
        """Find a task by identity or by name (first match wins)."""
        with self.lock:
            if isinstance(name_or_task, Task):
                return next((t for t in self.tasks if t is name_or_task), None)
            return next((t for t in self.tasks if t.name == name_or_task), None)

    def remove_task(self, name_or_task: Union[str, Task]) -> None:
        """Remove a task immediately; unknown tasks are ignored."""
        with self.lock:
            task = self.task(name_or_task)
            if task is not None:
                self.tasks = [t for t in self.tasks if t is not task]

    def clear_tasks(self) -> None:
        """Remove every task immediately."""
        with self.lock:
            self.tasks = []

    # =========================================================================
    # Log output
    # =========================================================================

    def write(self, kind: LogKind, text: str) -> None:
        """Buffer text for the next tick, one entry per line."""
        with self.lock:
            for line in str(text).split("\n"):
                self.log_buffer.append(LogLine(line, kind))

    def log(self, text: str) -> None:
        self.write(LogKind.INFO, text)

    def error(self, text: str) -> None:
        self.write(LogKind.ERROR, text)

    def stream(self, kind: LogKind = LogKind.INFO) -> LogStream:
        """Return a file-like writer feeding lines of the given kind."""
        return LogStream(self, kind)
