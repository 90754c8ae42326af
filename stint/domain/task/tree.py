"""The two-level task forest.

The forest is a list of top-level tasks, each owning a flat list of
sub-tasks. Sub-tasks never own children, so traversal is two nested loops
rather than general recursion.
"""

import logging
from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from stint.domain.shared.result import Err, Ok, Result

from .ids import generate_id
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskTree:
    """In-memory forest of tasks with lookup and structural CRUD.

    The tree owns every Task instance. Other components look tasks up here
    and mutate them in place; nothing else keeps copies.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_tasks())

    # =========================================================================
    # Lookup
    # =========================================================================

    def iter_tasks(self) -> Iterator[Task]:
        """Yield every task, each parent before its sub-tasks."""
        for task in self.tasks:
            yield task
            yield from task.sub_tasks

    def find_by_id(self, task_id: str | None) -> Task | None:
        """Find a task anywhere in the forest, or None if absent."""
        if not task_id:
            return None
        for task in self.iter_tasks():
            if task.id == task_id:
                return task
        return None

    def find_parent(self, task_id: str) -> Task | None:
        """Return the top-level task that owns the given sub-task."""
        for task in self.tasks:
            if any(sub.id == task_id for sub in task.sub_tasks):
                return task
        return None

    def running_tasks(self) -> list[Task]:
        """All tasks with an active timer."""
        return [task for task in self.iter_tasks() if task.is_running]

    def has_running(self) -> bool:
        return any(task.is_running for task in self.iter_tasks())

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_task(self, text: str, parent_id: str | None = None) -> Result[Task | None, str]:
        """Append a new pending task at the top level or under a parent.

        Args:
            text: Label for the task. Surrounding whitespace is trimmed.
            parent_id: ID of a top-level task to nest under, or None.

        Returns:
            Ok(Task) when a task was created, Ok(None) when the label was
            blank (nothing created), or Err(str) when the parent is missing
            or is itself a sub-task. Errors leave the forest untouched.
        """
        label = (text or "").strip()
        if not label:
            return Ok(None)

        siblings = self.tasks
        if parent_id:
            parent = self.find_by_id(parent_id)
            if parent is None:
                return Err(f"Parent task not found: {parent_id}")
            if self.find_parent(parent_id) is not None:
                return Err(f"Sub-tasks cannot have sub-tasks: {parent_id}")
            siblings = parent.sub_tasks

        task = Task(id=self._unused_id(), text=label)
        siblings.append(task)
        return Ok(task)

    def remove_task(self, task_id: str) -> Task | None:
        """Remove a task from the top level and from every sub-task list.

        Returns the removed task, or None if no task had that id.
        """
        removed: Task | None = None

        kept: list[Task] = []
        for task in self.tasks:
            if task.id == task_id:
                removed = task
            else:
                kept.append(task)
        self.tasks = kept

        for task in self.tasks:
            remaining: list[Task] = []
            for sub in task.sub_tasks:
                if sub.id == task_id:
                    removed = removed or sub
                else:
                    remaining.append(sub)
            task.sub_tasks = remaining

        return removed

    def _unused_id(self) -> str:
        task_id = generate_id()
        while self.find_by_id(task_id) is not None:
            task_id = generate_id()
        return task_id

    # =========================================================================
    # Snapshots
    # =========================================================================

    def to_snapshot(self) -> list[dict[str, Any]]:
        """Serialize the whole forest as a list of task documents."""
        return [task.to_snapshot() for task in self.tasks]

    @classmethod
    def from_snapshot(cls, data: Any) -> "TaskTree":
        """Rebuild a forest from a persisted snapshot.

        Empty or missing data yields an empty forest. Entries that fail
        validation, repeat an id, or nest deeper than one level are dropped
        or flattened with a warning rather than failing the whole load.
        """
        tree = cls()
        if not data:
            return tree
        if not isinstance(data, list):
            logger.warning(f"Ignoring task snapshot of type {type(data).__name__}")
            return tree

        seen: set[str] = set()
        for raw in data:
            try:
                task = Task.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Dropping malformed task entry: {e.error_count()} error(s)")
                continue
            if task.id in seen:
                logger.warning(f"Dropping task with duplicate id {task.id}")
                continue
            seen.add(task.id)
            _normalize_timer(task)

            children: list[Task] = []
            for sub in task.sub_tasks:
                if sub.id in seen:
                    logger.warning(f"Dropping sub-task with duplicate id {sub.id}")
                    continue
                if sub.sub_tasks:
                    logger.warning(f"Dropping {len(sub.sub_tasks)} nested task(s) under sub-task {sub.id}")
                    sub.sub_tasks = []
                seen.add(sub.id)
                _normalize_timer(sub)
                children.append(sub)
            task.sub_tasks = children

            tree.tasks.append(task)
        return tree


def _normalize_timer(task: Task) -> None:
    # A running timer implies in-progress.
    if task.is_running and task.status != TaskStatus.IN_PROGRESS:
        logger.warning(f"Task {task.id} has a running timer but status {task.status.value}; marking in-progress")
        task.status = TaskStatus.IN_PROGRESS
