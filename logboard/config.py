"""Task board settings."""

from dataclasses import dataclass

from .formatters import DEFAULT_FRAMES


DEFAULT_INTERVAL = 0.08


@dataclass(frozen=True)
class BoardConfig:
    """Settings shared by a board and the tasks it renders."""

    interval: float = DEFAULT_INTERVAL
    frames: tuple[str, ...] = DEFAULT_FRAMES
    no_color: bool = False

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {self.interval}")
        if not self.frames:
            raise ValueError("At least one spinner frame is required")
