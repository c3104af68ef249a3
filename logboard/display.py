"""Display backends that the task board redraws into.

A display owns a block of terminal lines that is replaced on every redraw.
Text written above the block scrolls normally and is never overwritten.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text


class Display(ABC):
    """Abstract redraw target for a task board."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Current width in columns, read fresh on every call."""
        pass

    @abstractmethod
    def start(self) -> None:
        """Start the display."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the display, leaving the last frame on screen."""
        pass

    @abstractmethod
    def redraw(self, text: Text) -> None:
        """Replace the previously displayed block with text.

        Args:
            text: The new block contents
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the displayed block entirely."""
        pass

    @abstractmethod
    def write_above(self, text: Text) -> None:
        """Emit text permanently above the displayed block.

        Args:
            text: Lines to print, already styled
        """
        pass


class LiveDisplay(Display):
    """Display backed by a Rich Live region.

    Refresh is driven manually by the board's tick, so auto refresh is off.
    """

    def __init__(self, console: Optional[Console] = None, no_color: bool = False):
        self.console = console or Console(no_color=no_color, highlight=False)
        self.live: Optional[Live] = None

    @property
    def width(self) -> int:
        return self.console.width

    def start(self) -> None:
        self.live = Live(
            Text(""),
            console=self.console,
            transient=False,
            auto_refresh=False,
            # Output reaches the region only through write_above
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self.live.start()

    def stop(self) -> None:
        if self.live:
            self.live.stop()
            self.live = None

    def redraw(self, text: Text) -> None:
        if self.live:
            self.live.update(text, refresh=True)
        else:
            self.console.print(text)

    def clear(self) -> None:
        if self.live:
            self.live.update(Text(""), refresh=True)

    def write_above(self, text: Text) -> None:
        # Printing through the live console places output above the live region
        self.console.print(text, highlight=False)


class RecordingDisplay(Display):
    """In-memory display for tests and non-interactive runs."""

    def __init__(self, width: int = 80):
        self._width = width
        self.frames: list[str] = []
        self.written: list[str] = []
        self.started = False
        self.stopped = False

    @property
    def width(self) -> int:
        return self._width

    def resize(self, width: int) -> None:
        self._width = width

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def redraw(self, text: Text) -> None:
        self.frames.append(text.plain)

    def clear(self) -> None:
        self.frames.append("")

    def write_above(self, text: Text) -> None:
        self.written.extend(text.plain.split("\n"))

    @property
    def last_frame(self) -> Optional[str]:
        return self.frames[-1] if self.frames else None
