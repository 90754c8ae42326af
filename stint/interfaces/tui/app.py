"""Main stint TUI application.

StintApp paints the task forest, turns user input into tracker commands and
repaints whenever the tracker reports a change. Timer ticks only refresh
the time labels of running tasks.
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static

from stint.application import TaskTracker
from stint.domain.shared import DomainEvent, Err
from stint.domain.task import TimersTicked
from stint.interfaces.tui.widgets import TaskCommand, TaskRow

logger = logging.getLogger(__name__)


class StintApp(App):
    """Hierarchical task timer TUI."""

    TITLE = "stint"
    SUB_TITLE = "Hierarchical Task Timer"

    CSS = """
    Screen {
        background: $surface;
    }

    #add-main-task {
        height: auto;
        padding: 0 1;
    }

    #new-task-input {
        width: 1fr;
    }

    #task-list {
        height: 1fr;
        padding: 0 1;
    }

    .no-tasks {
        color: $text-muted;
        text-align: center;
        margin-top: 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, tracker: TaskTracker) -> None:
        super().__init__()
        self.tracker = tracker
        self._unsubscribe = None
        self._render_pending = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="add-main-task"):
            yield Input(placeholder="Add a new task...", id="new-task-input")
            yield Button("Add", id="add-task-btn", variant="primary")
        yield VerticalScroll(id="task-list")
        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to tracker changes and load persisted tasks."""
        self._unsubscribe = self.tracker.subscribe(self._on_tracker_event)
        # Loading inside the running event loop lets the tick loop resume.
        result = self.tracker.load()
        if isinstance(result, Err):
            self.notify(f"Could not load tasks: {result.error}", severity="error")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.tracker.shutdown()

    # =========================================================================
    # Tracker events
    # =========================================================================

    def _on_tracker_event(self, event: DomainEvent) -> None:
        if isinstance(event, TimersTicked):
            self._update_timers(event.elapsed)
            return
        self._schedule_render()

    def _update_timers(self, elapsed: dict[str, int]) -> None:
        for row in self.query(TaskRow):
            seconds = elapsed.get(row.task_id)
            if seconds is not None:
                row.update_elapsed(seconds)

    def _schedule_render(self) -> None:
        # One command can publish several events; repaint once.
        if self._render_pending:
            return
        self._render_pending = True
        self.call_later(self._render_tasks)

    async def _render_tasks(self) -> None:
        self._render_pending = False
        container = self.query_one("#task-list", VerticalScroll)
        await container.remove_children()

        live_elapsed = self.tracker.engine.live_elapsed
        rows = [TaskRow(task, live_elapsed) for task in self.tracker.tasks]
        if rows:
            await container.mount_all(rows)
        else:
            await container.mount(Static("No tasks yet. Add one above.", classes="no-tasks"))

    # =========================================================================
    # User input
    # =========================================================================

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-task-btn":
            self._add_main_task()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "new-task-input":
            self._add_main_task()

    def _add_main_task(self) -> None:
        field = self.query_one("#new-task-input", Input)
        self.tracker.add_task(field.value)
        field.value = ""

    def on_task_command(self, message: TaskCommand) -> None:
        """Dispatch a row action to the tracker."""
        tracker = self.tracker
        if message.action == "start":
            tracker.start(message.task_id)
        elif message.action == "stop":
            tracker.stop(message.task_id)
        elif message.action == "delete":
            tracker.delete_task(message.task_id)
        elif message.action == "status":
            result = tracker.set_status(message.task_id, message.value or "")
            if isinstance(result, Err):
                self.notify(result.error, severity="error")
        elif message.action == "add-sub":
            result = tracker.add_task(message.value or "", message.task_id)
            if isinstance(result, Err):
                self.notify(result.error, severity="error")
        else:
            logger.warning(f"Unknown task action: {message.action}")
