"""logboard - live terminal task board with buffered log output."""

from .board import LogKind, LogLine, LogStream, TaskBoard
from .config import BoardConfig
from .display import Display, LiveDisplay, RecordingDisplay
from .progress_bar import print_progress, print_time_remaining
from .task import Task, TaskContractError, TaskState
from .timing import elapsed_time, format_time, time_remaining

__all__ = [
    "BoardConfig",
    "Display",
    "LiveDisplay",
    "LogKind",
    "LogLine",
    "LogStream",
    "RecordingDisplay",
    "Task",
    "TaskBoard",
    "TaskContractError",
    "TaskState",
    "elapsed_time",
    "format_time",
    "print_progress",
    "print_time_remaining",
    "time_remaining",
]
