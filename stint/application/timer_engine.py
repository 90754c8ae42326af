"""Timer engine.

Starts and stops per-task timers and drives the shared polling loop.

Committed time (``Task.elapsed_time``) only changes in ``stop``. Each tick
of the polling loop derives live values from ``start_time`` and publishes
them without touching the model, so a reload can always rebuild the live
display from what was persisted.
"""

import logging
from collections.abc import Callable

from stint.domain.shared.events import DomainEvent
from stint.domain.task import (
    Clock,
    Task,
    TaskStatus,
    TaskTree,
    TimersTicked,
    TimerStarted,
    TimerStopped,
    effective_elapsed,
    now_ms,
    seconds_between,
)

from .tick_loop import Ticker, TickLoop

logger = logging.getLogger(__name__)

# Persist the forest, then notify observers.
Commit = Callable[[DomainEvent], None]


class TimerEngine:
    """Per-task timers plus the single polling loop shared by all of them."""

    def __init__(
        self,
        tree: TaskTree,
        *,
        commit: Commit,
        publish: Callable[[DomainEvent], None],
        ticker: Ticker | None = None,
        clock: Clock = now_ms,
    ) -> None:
        self._tree = tree
        self._commit = commit
        self._publish = publish
        self._ticker = ticker or TickLoop()
        self._clock = clock

    @property
    def loop_running(self) -> bool:
        return self._ticker.running

    # =========================================================================
    # Commands
    # =========================================================================

    def start(self, task: Task | None) -> None:
        """Start accruing time for a task and mark it in-progress.

        No-op for a missing task or one whose timer already runs.
        """
        if task is None or task.is_running:
            return

        task.start_time = self._clock()
        task.status = TaskStatus.IN_PROGRESS
        self.ensure_loop()

        logger.info(f"Timer started for task {task.id}")
        self._commit(TimerStarted(task_id=task.id, start_time=task.start_time))

    def stop(self, task: Task | None) -> None:
        """Stop a task's timer and commit the run's whole seconds.

        The task's status is left as it is. No-op for a missing task or one
        without a running timer.
        """
        if task is None or task.start_time is None:
            return

        duration = seconds_between(task.start_time, self._clock())
        task.elapsed_time += duration
        task.start_time = None
        self.stop_loop_if_idle()

        logger.info(f"Timer stopped for task {task.id} (+{duration}s, total {task.elapsed_time}s)")
        self._commit(TimerStopped(task_id=task.id, duration=duration, elapsed_time=task.elapsed_time))

    # =========================================================================
    # Live values
    # =========================================================================

    def live_elapsed(self, task: Task, at_ms: int | None = None) -> int:
        """Effective elapsed seconds for a task as of at_ms (default now)."""
        return effective_elapsed(task, self._clock() if at_ms is None else at_ms)

    def snapshot_live(self) -> dict[str, int]:
        """Live elapsed seconds for every running task, keyed by id."""
        at = self._clock()
        return {task.id: effective_elapsed(task, at) for task in self._tree.running_tasks()}

    # =========================================================================
    # Polling loop lifecycle
    # =========================================================================

    def ensure_loop(self) -> None:
        self._ticker.ensure_running(self.tick)

    def stop_loop_if_idle(self) -> None:
        if self._ticker.running and not self._tree.has_running():
            self._ticker.stop()

    def resume(self) -> None:
        """Match the loop to the forest, e.g. after loading persisted state."""
        if self._tree.has_running():
            self.ensure_loop()
        else:
            self.stop_loop_if_idle()

    def tick(self) -> None:
        """One polling period: publish live values, or stop when idle."""
        live = self.snapshot_live()
        if not live:
            self._ticker.stop()
            return
        self._publish(TimersTicked(elapsed=live))

    def shutdown(self) -> None:
        """Cancel the loop without touching any task's timer state."""
        self._ticker.stop()
