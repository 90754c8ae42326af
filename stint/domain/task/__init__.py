"""Task domain - the two-level task forest and its time accounting.

All exports are pure: no I/O, no scheduling.

Key Types:
    TaskStatus - Task lifecycle enumeration
    Task - A task with committed elapsed time and optional running timer
    TaskTree - The forest of top-level tasks and their sub-tasks

Timing Functions:
    now_ms - Current wall-clock instant in epoch milliseconds
    seconds_between - Whole seconds between two instants
    effective_elapsed - Committed plus in-flight seconds
    format_duration - HH:MM:SS rendering

Domain Events:
    TreeLoaded, TaskAdded, TaskDeleted, TimerStarted, TimerStopped,
    StatusChanged, TimersTicked
"""

from .events import (
    StatusChanged,
    TaskAdded,
    TaskDeleted,
    TimersTicked,
    TimerStarted,
    TimerStopped,
    TreeLoaded,
)
from .ids import generate_id
from .models import Task, TaskStatus
from .timing import Clock, effective_elapsed, format_duration, now_ms, seconds_between
from .tree import TaskTree

__all__ = [
    # Models
    "TaskStatus",
    "Task",
    "TaskTree",
    "generate_id",
    # Timing
    "Clock",
    "now_ms",
    "seconds_between",
    "effective_elapsed",
    "format_duration",
    # Events
    "TreeLoaded",
    "TaskAdded",
    "TaskDeleted",
    "TimerStarted",
    "TimerStopped",
    "StatusChanged",
    "TimersTicked",
]
