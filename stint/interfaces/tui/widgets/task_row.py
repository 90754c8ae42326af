"""Task row widget for the stint TUI."""

from collections.abc import Callable
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Input, Label, Select, Static

from stint.domain.task import Task, TaskStatus, format_duration

# Status colors for display
STATUS_COLORS = {
    TaskStatus.PENDING: "dim",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.COMPLETED: "green",
}

STATUS_OPTIONS = [(status.label, status.value) for status in TaskStatus]


def timer_buttons(task: Task) -> tuple[bool, bool]:
    """Return (show_start, show_stop) for a task.

    Completed tasks show neither. In-progress tasks show Stop while the
    timer runs and Start while paused. Pending tasks show Start only.
    """
    if task.status == TaskStatus.COMPLETED:
        return False, False
    if task.status == TaskStatus.IN_PROGRESS:
        return (False, True) if task.is_running else (True, False)
    return True, False


class TaskCommand(Message):
    """Message sent when the user acts on a task row.

    ``action`` is one of "start", "stop", "delete", "status" or "add-sub";
    ``value`` carries the chosen status or the sub-task text.
    """

    def __init__(self, task_id: str, action: str, value: Optional[str] = None) -> None:
        self.task_id = task_id
        self.action = action
        self.value = value
        super().__init__()


class TaskRow(Vertical):
    """One task with its controls; top-level rows also hold their sub-tasks."""

    DEFAULT_CSS = """
    TaskRow {
        height: auto;
        border: solid $primary;
        padding: 0 1;
        margin-bottom: 1;
    }

    TaskRow.sub-task {
        border: solid $secondary;
        margin: 0 0 0 4;
    }

    TaskRow .task-header {
        height: auto;
    }

    TaskRow .task-text {
        width: 1fr;
        padding: 1 1 0 0;
    }

    TaskRow Select {
        width: 20;
    }

    TaskRow .timer-display {
        width: 12;
        padding: 1 1 0 1;
    }

    TaskRow .add-sub-task-section {
        height: auto;
    }

    TaskRow .new-sub-task-input {
        width: 1fr;
    }
    """

    def __init__(
        self,
        task: Task,
        live_elapsed: Callable[[Task], int],
        *,
        is_sub_task: bool = False,
    ) -> None:
        super().__init__(classes="sub-task" if is_sub_task else "main-task")
        self.task_model = task
        self.is_sub_task = is_sub_task
        self._live_elapsed = live_elapsed
        self.elapsed_seconds = live_elapsed(task)
        self._timer_display = Static(format_duration(self.elapsed_seconds), classes="timer-display")
        self._sub_task_input: Optional[Input] = None

    @property
    def task_id(self) -> str:
        return self.task_model.id

    def compose(self) -> ComposeResult:
        """Create the row: header controls, then sub-task input and list."""
        task = self.task_model
        show_start, show_stop = timer_buttons(task)

        start_btn = Button("Start", classes="start-btn", variant="success")
        start_btn.display = show_start
        stop_btn = Button("Stop", classes="stop-btn", variant="warning")
        stop_btn.display = show_stop

        with Horizontal(classes="task-header"):
            yield Label(Text(task.text, style=STATUS_COLORS[task.status]), classes="task-text")
            yield Select(STATUS_OPTIONS, value=task.status.value, allow_blank=False, classes="task-status-select")
            yield self._timer_display
            yield start_btn
            yield stop_btn
            yield Button("Delete", classes="delete-btn", variant="error")

        if self.is_sub_task:
            return

        self._sub_task_input = Input(placeholder="Add sub-task...", classes="new-sub-task-input")
        with Horizontal(classes="add-sub-task-section"):
            yield self._sub_task_input
            yield Button("Add Sub", classes="add-sub-task-btn")

        for sub in task.sub_tasks:
            yield TaskRow(sub, self._live_elapsed, is_sub_task=True)

    def update_elapsed(self, seconds: int) -> None:
        self.elapsed_seconds = seconds
        self._timer_display.update(format_duration(seconds))

    # =========================================================================
    # Event handlers
    # =========================================================================

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Translate this row's buttons into TaskCommand messages."""
        event.stop()
        button = event.button
        if button.has_class("start-btn"):
            self.post_message(TaskCommand(self.task_id, "start"))
        elif button.has_class("stop-btn"):
            self.post_message(TaskCommand(self.task_id, "stop"))
        elif button.has_class("delete-btn"):
            self.post_message(TaskCommand(self.task_id, "delete"))
        elif button.has_class("add-sub-task-btn"):
            self._submit_sub_task()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit_sub_task()

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        # Select also reports its initial value; only forward real changes.
        if event.value == self.task_model.status.value or event.value is Select.BLANK:
            return
        self.post_message(TaskCommand(self.task_id, "status", str(event.value)))

    def _submit_sub_task(self) -> None:
        if self._sub_task_input is None:
            return
        text = self._sub_task_input.value
        self._sub_task_input.value = ""
        self.post_message(TaskCommand(self.task_id, "add-sub", text))
