"""Progress bar sizing and single-line progress printing."""

from __future__ import annotations

import math
import time
from typing import Callable, Optional

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from .formatters import StyleFormatter, SymbolsFormatter
from .timing import elapsed_time, format_time, time_remaining


# Columns reserved next to the bar and its trailing info
BAR_MARGIN = 4
LINE_INDENT = 2


def format_number(value: float) -> str:
    """Render integral floats without a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def bar_segments(percentage: float, width: int) -> tuple[int, int]:
    """Split a bar of the given width into filled and unfilled runs.

    Both runs are clamped to zero so narrow terminals and edge percentages
    never produce negative lengths. A non-positive width yields no bar.

    Args:
        percentage: Completion in the range 0-100
        width: Columns available for the bar itself

    Returns:
        Tuple of (filled, unfilled) lengths
    """
    if width <= 0:
        return 0, 0
    filled = math.floor(percentage / (100 / width))
    filled = max(0, min(filled, width))
    unfilled = max(0, width - filled)
    return filled, unfilled


def progress_info(progress: float, total: float, text: Optional[str] = None) -> str:
    """Build the text that trails a bar: percentage, fraction and extra info."""
    completed = 100 * (progress / total)
    pad = " " if completed < 10 else ""
    info = f" {pad}{completed:.2f}% ({format_number(progress)} / {format_number(total)})"
    if text:
        info += f" {text}"
    return info


def time_info(progress: float, total: float, elapsed: float) -> str:
    """Describe elapsed time and, while unfinished, the estimated time left."""
    info = f"elapsed: {format_time(elapsed)}"
    if progress < total:
        info += f", eta: {format_time(time_remaining(elapsed, progress, total))}"
    return info


def progress_bar(
    progress: float,
    total: float,
    width: int,
    styles: StyleFormatter,
    symbols: SymbolsFormatter,
    text: Optional[str] = None,
) -> Text:
    """Render a horizontal progress bar sized against the terminal width.

    Args:
        progress: Units completed (clamped to total)
        total: Units overall, must be positive
        width: Current terminal width in columns
        styles: Style formatter for the filled and unfilled runs
        symbols: Symbols formatter supplying the bar glyphs
        text: Optional text appended after the percentage and fraction

    Returns:
        The bar followed by its info text
    """
    progress = min(progress, total)
    info = progress_info(progress, total, text)
    bar_width = width - (len(info) + BAR_MARGIN)
    filled, unfilled = bar_segments(100 * (progress / total), bar_width)

    bar = Text()
    bar.append_text(styles.success(symbols.Filled * filled))
    bar.append_text(styles.dim(symbols.Unfilled * unfilled))
    bar.append(info)
    return bar


def _rewrite_line(console: Console, renderable: Text) -> None:
    """Erase the current line and write renderable in its place."""
    console.control(
        Control((ControlType.ERASE_IN_LINE, 2)),
        Control.move_to_column(LINE_INDENT),
    )
    console.print(renderable, end="", highlight=False)
    console.control(Control.move_to_column(LINE_INDENT))


def print_progress(
    progress: float,
    total: float,
    start_time: Optional[float] = None,
    console: Optional[Console] = None,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Print a single self-overwriting progress line.

    Args:
        progress: Units completed
        total: Units overall
        start_time: Reading of clock when the work started, enables time info
        console: Console to write to (defaults to a new stdout console)
        clock: Clock that start_time was read from
    """
    console = console or Console(highlight=False)
    no_color = console.no_color
    text = None
    if start_time is not None:
        text = time_info(progress, total, elapsed_time(start_time, clock()))
    bar = progress_bar(
        progress,
        total,
        console.width,
        StyleFormatter(no_color=no_color),
        SymbolsFormatter(no_color=no_color),
        text,
    )
    _rewrite_line(console, bar)


def print_time_remaining(
    start_time: float,
    progress: float,
    total: float,
    console: Optional[Console] = None,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Print a single self-overwriting line holding the estimated time left."""
    console = console or Console(highlight=False)
    remaining = time_remaining(elapsed_time(start_time, clock()), progress, total)
    _rewrite_line(console, Text(format_time(remaining)))
