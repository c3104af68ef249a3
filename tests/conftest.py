"""Pytest configuration and shared fixtures."""

import pytest

from logboard.config import BoardConfig
from logboard.display import RecordingDisplay
from logboard.formatters import StyleFormatter, SymbolsFormatter


class FakeClock:
    """Manually advanced clock standing in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Return a fake clock starting at a fixed reading."""
    return FakeClock()


@pytest.fixture
def display() -> RecordingDisplay:
    """Return an in-memory display 80 columns wide."""
    return RecordingDisplay(width=80)


@pytest.fixture
def styles() -> StyleFormatter:
    """Return a style formatter producing plain text."""
    return StyleFormatter(no_color=True)


@pytest.fixture
def symbols() -> SymbolsFormatter:
    """Return a symbols formatter that always resolves to ASCII."""
    return SymbolsFormatter(no_color=True)


@pytest.fixture
def plain_config() -> BoardConfig:
    """Return a board config with colors disabled."""
    return BoardConfig(no_color=True)
