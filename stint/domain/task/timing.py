"""Elapsed-time arithmetic.

All instants are epoch milliseconds; all durations handed to callers are
whole seconds.
"""

import time
from collections.abc import Callable

from .models import Task

# A clock returns the current wall-clock instant in epoch milliseconds.
Clock = Callable[[], int]


def now_ms() -> int:
    """Return the current wall-clock instant in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def seconds_between(start_ms: int, end_ms: int) -> int:
    """Whole seconds from start_ms to end_ms, never negative."""
    return max(0, (end_ms - start_ms) // 1000)


def effective_elapsed(task: Task, at_ms: int) -> int:
    """Committed elapsed time plus the in-flight run, as of at_ms."""
    if task.start_time is None:
        return task.elapsed_time
    return task.elapsed_time + seconds_between(task.start_time, at_ms)


def format_duration(total_seconds: int) -> str:
    """Format seconds as zero-padded HH:MM:SS.

    Hours are not wrapped, so 100 hours renders as ``100:00:00``.
    """
    total_seconds = max(0, int(total_seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
