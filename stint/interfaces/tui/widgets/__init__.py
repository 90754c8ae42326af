"""TUI widgets for stint."""

from .task_row import STATUS_COLORS, TaskCommand, TaskRow, timer_buttons

__all__ = [
    "TaskRow",
    "TaskCommand",
    "STATUS_COLORS",
    "timer_buttons",
]
