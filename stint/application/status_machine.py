"""Status transitions and their coupling to timers.

Any status may move to any other. Leaving in-progress stops a running
timer; entering in-progress, or re-confirming it while paused, starts one.
Everything else only changes the status field.
"""

import logging

from stint.domain.task import StatusChanged, Task, TaskStatus

from .timer_engine import Commit, TimerEngine

logger = logging.getLogger(__name__)


class StatusMachine:
    def __init__(self, engine: TimerEngine, *, commit: Commit) -> None:
        self._engine = engine
        self._commit = commit

    def set_status(self, task: Task, new_status: TaskStatus) -> None:
        """Move a task to new_status, starting or stopping its timer as needed."""
        old_status = task.status
        task.status = new_status

        if old_status == TaskStatus.IN_PROGRESS and new_status != TaskStatus.IN_PROGRESS:
            self._engine.stop(task)
        elif new_status == TaskStatus.IN_PROGRESS and old_status != TaskStatus.IN_PROGRESS:
            self._engine.start(task)
        elif new_status == TaskStatus.IN_PROGRESS and not task.is_running:
            # In-progress but paused: re-selecting it resumes the timer.
            self._engine.start(task)

        logger.info(f"Task {task.id} status {old_status.value} -> {new_status.value}")
        self._commit(StatusChanged(task_id=task.id, old_status=old_status, new_status=new_status))
