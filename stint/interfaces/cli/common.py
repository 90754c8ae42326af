"""Shared utilities for stint CLI commands.

- Configuration resolution with CLI overrides
- Tracker construction
- Formatted output helpers
"""

from pathlib import Path
from typing import Optional

import typer

from stint.application import TaskTracker
from stint.config import StintConfig, get_config
from stint.domain.task import Task, TaskStatus, format_duration
from stint.infrastructure.storage import KeyValueStore, TaskTreeRepository

STATUS_FG = {
    TaskStatus.PENDING: typer.colors.WHITE,
    TaskStatus.IN_PROGRESS: typer.colors.YELLOW,
    TaskStatus.COMPLETED: typer.colors.GREEN,
}


def resolve_config(data_file: Optional[Path] = None) -> StintConfig:
    """Load configuration and apply CLI overrides."""
    config = get_config()
    if data_file is not None:
        config = config.model_copy(update={"data_file": data_file.expanduser()})
    return config


def build_tracker(config: StintConfig) -> TaskTracker:
    """Create a tracker persisting to the configured data file."""
    repository = TaskTreeRepository(KeyValueStore(config.data_file), key=config.storage_key)
    return TaskTracker(repository, tick_interval=config.tick_interval)


def format_task_line(task: Task, elapsed: int, indent: int = 0) -> str:
    """Format one task for plain-text listing.

    Example: ``[in-progress] Write report  00:12:03  (running)``
    """
    status = typer.style(f"[{task.status.value}]", fg=STATUS_FG[task.status])
    line = f"{'    ' * indent}{status} {task.text}  {format_duration(elapsed)}"
    if task.is_running:
        line += "  (running)"
    return line


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.CYAN))
