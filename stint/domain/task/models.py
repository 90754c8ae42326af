"""Task domain models.

Pure domain models for the two-level task forest. Uses Pydantic so the
forest can be dumped to and rebuilt from the persisted JSON snapshot, whose
keys are camelCase (``elapsedTime``, ``startTime``, ``subTasks``).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .ids import generate_id


class TaskStatus(str, Enum):
    """Status of a task in the forest."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: "str | TaskStatus") -> "TaskStatus | None":
        """Convert a raw value into a status, or None if it names no status.

        Only the exact stored values match (`"in-progress"`, not `"In Progress"`).
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Human readable label, e.g. "In progress"."""
        return self.value.replace("-", " ").capitalize()


class Task(BaseModel):
    """A trackable work item with accrued time.

    ``elapsed_time`` holds whole seconds committed by previous runs.
    ``start_time`` is the epoch-millisecond instant the current run began,
    or None when no timer is accruing. Only top-level tasks carry
    ``sub_tasks``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    text: str
    status: TaskStatus = TaskStatus.PENDING
    elapsed_time: int = Field(default=0, ge=0, alias="elapsedTime")
    start_time: int | None = Field(default=None, alias="startTime")
    sub_tasks: list["Task"] = Field(default_factory=list, alias="subTasks")

    @property
    def is_running(self) -> bool:
        """Check if a timer is accruing time for this task right now."""
        return self.start_time is not None

    def to_snapshot(self) -> dict:
        """Serialize using the persisted key names."""
        return self.model_dump(mode="json", by_alias=True)
