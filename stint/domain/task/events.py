"""Task domain events.

Each event records one committed change to the forest. Observers receive
them after the change has been persisted. All events are pure data.
"""

from stint.domain.shared.events import DomainEvent

from .models import TaskStatus


class TreeLoaded(DomainEvent):
    """Raised when the forest is replaced from persisted state."""

    task_count: int
    running_count: int


class TaskAdded(DomainEvent):
    """Raised when a new task is added to the forest."""

    task_id: str
    parent_id: str | None = None
    text: str


class TaskDeleted(DomainEvent):
    """Raised when a task is removed from the forest.

    ``elapsed_time`` is the task's final committed total.
    """

    task_id: str
    elapsed_time: int


class TimerStarted(DomainEvent):
    """Raised when a task's timer begins accruing time."""

    task_id: str
    start_time: int


class TimerStopped(DomainEvent):
    """Raised when a task's timer stops and its run is committed.

    ``duration`` is the whole seconds added by this run; ``elapsed_time`` is
    the new committed total.
    """

    task_id: str
    duration: int
    elapsed_time: int


class StatusChanged(DomainEvent):
    """Raised after a status transition (including re-confirming a status)."""

    task_id: str
    old_status: TaskStatus
    new_status: TaskStatus


class TimersTicked(DomainEvent):
    """Raised on each polling tick with live elapsed seconds per running task."""

    elapsed: dict[str, int]
