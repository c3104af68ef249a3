"""Time formatting and remaining-time estimation."""

from __future__ import annotations

import math


UNKNOWN_TIME = "--:--:--"
MAX_DISPLAY_HOURS = 99


def format_time(seconds: float) -> str:
    """Format a duration in seconds as H:MM:SS.

    Hours are unbounded up to 99. Anything larger, and any value that is
    negative or not finite (for example an ETA computed from zero progress),
    collapses to ``--:--:--``.

    Args:
        seconds: Duration in seconds (fractional allowed)

    Returns:
        Formatted duration
    """
    if not math.isfinite(seconds) or seconds < 0:
        return UNKNOWN_TIME

    hours = int(seconds // 3600)
    if hours > MAX_DISPLAY_HOURS:
        return UNKNOWN_TIME

    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def elapsed_time(start_time: float, now: float) -> float:
    """Seconds elapsed between two clock readings."""
    return now - start_time


def time_remaining(elapsed: float, progress: float, total: float) -> float:
    """Estimate seconds remaining from the average rate so far.

    Returns ``math.inf`` while no progress has been made, since no rate
    can be derived yet, and 0.0 once progress reaches the total.
    """
    if progress <= 0:
        return math.inf
    if progress >= total:
        return 0.0
    return elapsed / progress * (total - progress)
