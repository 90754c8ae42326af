"""Task tracker - the command surface used by the UI.

Wraps the forest, timer engine and status machine behind id-based
commands. Every mutating command commits in the same order: change the
in-memory state, save a full snapshot, then notify observers.
"""

import logging

from stint.domain.shared.events import DomainEvent
from stint.domain.shared.result import Err, Ok, Result
from stint.domain.task import (
    Clock,
    Task,
    TaskAdded,
    TaskDeleted,
    TaskStatus,
    TaskTree,
    TreeLoaded,
    now_ms,
)
from stint.infrastructure.storage import TaskTreeRepository

from .notifier import ChangeNotifier, Observer
from .status_machine import StatusMachine
from .tick_loop import DEFAULT_TICK_INTERVAL, Ticker, TickLoop
from .timer_engine import TimerEngine

logger = logging.getLogger(__name__)


class TaskTracker:
    """Hierarchical task tracker with per-task timers.

    Example:
        tracker = TaskTracker(TaskTreeRepository(KeyValueStore("tasks.json")))
        tracker.load()
        result = tracker.add_task("Write report")
        if isinstance(result, Ok) and result.value:
            tracker.start(result.value.id)
    """

    def __init__(
        self,
        repository: TaskTreeRepository,
        *,
        ticker: Ticker | None = None,
        clock: Clock = now_ms,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        self._repository = repository
        self._tree = TaskTree()
        self._notifier = ChangeNotifier()
        self.engine = TimerEngine(
            self._tree,
            commit=self._commit,
            publish=self._notifier.publish,
            ticker=ticker or TickLoop(tick_interval),
            clock=clock,
        )
        self._status = StatusMachine(self.engine, commit=self._commit)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def tasks(self) -> list[Task]:
        """The current top-level tasks (each with its sub-tasks)."""
        return self._tree.tasks

    def find(self, task_id: str) -> Task | None:
        return self._tree.find_by_id(task_id)

    def live_elapsed(self, task_id: str) -> int | None:
        """Effective elapsed seconds for a task right now, or None if unknown."""
        task = self._tree.find_by_id(task_id)
        if task is None:
            return None
        return self.engine.live_elapsed(task)

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, observer: Observer):
        """Register an observer for every domain event; returns an unsubscribe function."""
        return self._notifier.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._notifier.unsubscribe(observer)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load(self, resume: bool = True) -> Result[int, str]:
        """Replace the forest with the persisted snapshot.

        A missing snapshot gives an empty forest. An unreadable one is
        logged and also gives an empty forest. With resume, the polling loop
        restarts when any loaded task is mid-run.

        Returns:
            Ok(task count) after a clean load, or the storage Err when the
            store could not be read (the forest is then empty).
        """
        result = self._repository.load()
        if isinstance(result, Err):
            logger.error(f"Could not load tasks, starting empty: {result.error}")
            snapshot: list = []
        else:
            snapshot = result.value

        loaded = TaskTree.from_snapshot(snapshot)
        self._tree.tasks = loaded.tasks

        running = len(self._tree.running_tasks())
        if resume:
            self.engine.resume()
        logger.info(f"Loaded {len(self._tree)} task(s), {running} running")
        self._notifier.publish(TreeLoaded(task_count=len(self._tree), running_count=running))
        if isinstance(result, Err):
            return result
        return Ok(len(self._tree))

    def shutdown(self) -> None:
        """Stop the polling loop. Running timers stay persisted as running."""
        self.engine.shutdown()

    # =========================================================================
    # Commands
    # =========================================================================

    def add_task(self, text: str, parent_id: str | None = None) -> Result[Task | None, str]:
        """Add a top-level task, or a sub-task when parent_id is given.

        Returns:
            Ok(Task) when created, Ok(None) for blank text (nothing created),
            Err(str) when the parent is missing or is a sub-task.
        """
        result = self._tree.add_task(text, parent_id)
        if isinstance(result, Err):
            logger.error(f"Add task aborted: {result.error}")
            return result

        task = result.value
        if task is None:
            logger.debug("Ignoring blank task text")
            return result

        logger.info(f"Added task {task.id} parent={parent_id}")
        self._commit(TaskAdded(task_id=task.id, parent_id=parent_id, text=task.text))
        return result

    def delete_task(self, task_id: str) -> Task | None:
        """Delete a task wherever it lives, stopping its timer first.

        The stop is committed on its own, so the flushed elapsed time is
        saved before the task disappears. Unknown ids are a no-op.
        """
        task = self._tree.find_by_id(task_id)
        if task is None:
            return None

        self.engine.stop(task)
        removed = self._tree.remove_task(task_id)
        self.engine.stop_loop_if_idle()

        logger.info(f"Deleted task {task_id} (elapsed {task.elapsed_time}s)")
        self._commit(TaskDeleted(task_id=task_id, elapsed_time=task.elapsed_time))
        return removed

    def start(self, task_id: str) -> None:
        """Start a task's timer. Unknown ids and running timers are no-ops."""
        self.engine.start(self._tree.find_by_id(task_id))

    def stop(self, task_id: str) -> None:
        """Stop a task's timer. Unknown ids and stopped timers are no-ops."""
        self.engine.stop(self._tree.find_by_id(task_id))

    def set_status(self, task_id: str, status: str | TaskStatus) -> Result[Task, str]:
        """Change a task's status, starting or stopping its timer as needed.

        Returns:
            Ok(Task) after the transition, or Err(str) for an unknown id or
            status. Errors leave the forest untouched.
        """
        new_status = TaskStatus.parse(status)
        if new_status is None:
            return Err(f"Unknown status: {status}")

        task = self._tree.find_by_id(task_id)
        if task is None:
            return Err(f"Task not found: {task_id}")

        self._status.set_status(task, new_status)
        return Ok(task)

    # =========================================================================
    # Commit
    # =========================================================================

    def _commit(self, event: DomainEvent) -> None:
        self._save()
        self._notifier.publish(event)

    def _save(self) -> bool:
        try:
            result = self._repository.save(self._tree.to_snapshot())
        except Exception:
            logger.exception("Saving tasks raised")
            return False

        if isinstance(result, Err):
            logger.error(f"Saving tasks failed: {result.error}")
            return False
        return True
