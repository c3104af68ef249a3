"""Trackable tasks with a display state machine.

A task starts PENDING and moves once to a terminal state:
- FULFILLED: progress reached the total, or the attached future succeeded
- REJECTED: the attached future raised or was cancelled

Terminal tasks keep accepting progress and status updates for display,
but their state and completion time never change again.
"""

import threading
import time
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from rich.text import Text

from .formatters import DEFAULT_FRAMES, StyleFormatter, SymbolsFormatter
from .progress_bar import progress_bar, time_info
from .timing import elapsed_time, format_time, time_remaining


class TaskContractError(ValueError):
    """Raised when a task is updated with values that cannot be rendered."""


def _check_progress(name: str, progress: Optional[float], total: Optional[float]) -> None:
    """Reject values that cannot be rendered as a bar or an ETA."""
    if progress is not None and progress < 0:
        raise TaskContractError(f"Task '{name}': progress must not be negative, got {progress}")
    if total is not None and total <= 0:
        raise TaskContractError(f"Task '{name}': total must be positive, got {total}")


class TaskState(Enum):
    """Task display state."""
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskState.PENDING


class Task:
    """A named unit of work shown on a task board."""

    def __init__(
        self,
        name: str,
        status: str = "",
        progress: Optional[float] = None,
        total: Optional[float] = None,
        handle: Any = None,
        remove_when_complete: bool = False,
        remove_at_time: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Create a task, subscribing to handle if one is given.

        Args:
            name: Display name, used for lookups on the board
            status: Free text shown after the times
            progress: Units completed so far
            total: Units overall, enables the ETA and progress bar
            handle: Future whose completion settles the task; anything
                exposing add_done_callback (concurrent or asyncio futures)
            remove_when_complete: Whether the board should purge the task
            remove_at_time: Clock reading after which the task is purged
            clock: Zero-argument callable returning seconds
        """
        if handle is not None and not callable(getattr(handle, "add_done_callback", None)):
            raise TypeError(
                f"Task '{name}' handle must be a future with add_done_callback, "
                f"got {type(handle).__name__}"
            )
        _check_progress(name, progress, total)

        self.name = name
        self.status = status
        self.progress = progress
        self.total = total
        self.handle = handle
        self.remove_when_complete = remove_when_complete
        self.remove_at_time = remove_at_time
        self.clock = clock
        self.state = TaskState.PENDING
        self.start_time = clock()
        self.completed_time: Optional[float] = None
        self._lock = threading.Lock()

        if handle is not None:
            handle.add_done_callback(self._on_handle_done)

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, state={self.state.value})"

    # =========================================================================
    # State transitions
    # =========================================================================

    def _settle(self, state: TaskState) -> None:
        """Enter a terminal state unless one was already reached."""
        with self._lock:
            if self.state.is_terminal:
                return
            # Renders read state without the lock, so the time goes first
            self.completed_time = elapsed_time(self.start_time, self.clock())
            self.state = state

    def _on_handle_done(self, future: Any) -> None:
        # Runs on whatever thread or loop completed the future, possibly
        # after the task was removed from its board.
        if future.cancelled() or future.exception() is not None:
            self._settle(TaskState.REJECTED)
        else:
            self._settle(TaskState.FULFILLED)

    def update(
        self,
        progress: float,
        total: Optional[float] = None,
        status: Optional[str] = None,
    ) -> "Task":
        """Record progress, optionally replacing total and status.

        A pending task whose progress reaches its total becomes FULFILLED.
        Returns the task itself so calls can be chained.

        Raises:
            TaskContractError: progress is missing or negative, or no
                positive total is known
        """
        if progress is None:
            raise TaskContractError(f"Task '{self.name}': progress is required")
        effective_total = self.total if total is None else total
        if effective_total is None:
            raise TaskContractError(f"Task '{self.name}': total must be positive, got None")
        _check_progress(self.name, progress, effective_total)

        self.progress = progress
        self.total = effective_total
        if status is not None:
            self.status = status

        if progress >= effective_total:
            self._settle(TaskState.FULFILLED)
        return self

    def schedule_removal(self, delay: float = 0.0) -> "Task":
        """Mark the task for removal once delay seconds have passed."""
        self.remove_when_complete = True
        self.remove_at_time = self.clock() + delay
        return self

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def has_total(self) -> bool:
        return self.total is not None and self.total > 0

    def elapsed(self) -> float:
        """Completed time once terminal, live elapsed time before that."""
        if self.completed_time is not None:
            return self.completed_time
        return elapsed_time(self.start_time, self.clock())

    def eta(self) -> Optional[float]:
        """Estimated seconds remaining, or None when no estimate applies."""
        if self.state is not TaskState.PENDING or not self.has_total:
            return None
        return time_remaining(self.elapsed(), self.progress or 0, self.total)

    def is_due_for_removal(self, now: float) -> bool:
        return (
            self.remove_when_complete
            and self.remove_at_time is not None
            and now >= self.remove_at_time
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(
        self,
        frame_index: int,
        width: int,
        styles: StyleFormatter,
        symbols: SymbolsFormatter,
        frames: Sequence[str] = DEFAULT_FRAMES,
    ) -> Text:
        """Render the task line, plus a progress bar line when one applies."""
        line = Text()
        if self.state is TaskState.FULFILLED:
            line.append_text(styles.success(f"{symbols.Check} {self.name}"))
        elif self.state is TaskState.REJECTED:
            line.append_text(styles.failure(f"{symbols.Cross} {self.name}"))
        else:
            line.append_text(styles.neutral(frames[frame_index % len(frames)]))
            line.append(f" {self.name}")

        elapsed = self.elapsed()
        line.append(f" ({format_time(elapsed)})")

        eta = self.eta()
        if eta is not None:
            line.append(f" eta: {format_time(eta)}")

        if self.status:
            line.append(f" {self.status}")

        if self.has_total and self.state is not TaskState.FULFILLED:
            progress = self.progress or 0
            line.append("\n ")
            line.append_text(
                progress_bar(
                    progress,
                    self.total,
                    width,
                    styles,
                    symbols,
                    time_info(progress, self.total, elapsed),
                )
            )
        return line
