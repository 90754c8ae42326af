"""Application service layer for stint.

Orchestrates the task forest, timers and status transitions, and owns the
persistence and notification that follow every command.

Services:
    tracker - id-based command facade (TaskTracker)
    timer_engine - per-task timers and the shared polling loop
    status_machine - status transitions coupled to timers
    tick_loop - asyncio polling loop
    notifier - observer registry

Example usage:
    >>> from stint.application import TaskTracker
    >>> tracker = TaskTracker(repository)
    >>> tracker.load()
    >>> tracker.add_task("Write report")
"""

from stint.application.notifier import ChangeNotifier, Observer
from stint.application.status_machine import StatusMachine
from stint.application.tick_loop import DEFAULT_TICK_INTERVAL, Ticker, TickLoop
from stint.application.timer_engine import TimerEngine
from stint.application.tracker import TaskTracker

__all__ = [
    "TaskTracker",
    "TimerEngine",
    "StatusMachine",
    "TickLoop",
    "Ticker",
    "DEFAULT_TICK_INTERVAL",
    "ChangeNotifier",
    "Observer",
]
