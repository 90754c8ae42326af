"""CLI interface for stint using Typer.

Usage:
    stint run               # Open the task timer TUI
    stint list              # Print tasks with their elapsed time
    stint --version

The CLI is structured as:
- app: Main Typer application
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from pathlib import Path
from typing import Optional

import typer

from stint import __version__
from stint.domain.shared import Err
from stint.interfaces.cli.common import (
    build_tracker,
    format_task_line,
    print_error,
    print_info,
    resolve_config,
)
from stint.logging_setup import setup_logging

# Create the main Typer application
app = typer.Typer(
    name="stint",
    help="Hierarchical task tracker with per-task timers",
    add_completion=False,
    no_args_is_help=True,
)

data_file_option = typer.Option(
    None,
    "--data-file",
    "-f",
    help="Task store file (or set STINT_DATA_FILE env var)",
    envvar="STINT_DATA_FILE",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"stint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """stint - track time on tasks and their sub-tasks."""
    pass


@app.command("run")
def run(data_file: Optional[Path] = data_file_option) -> None:
    """Open the task timer TUI."""
    # Imported here so `stint list` does not pay for loading Textual.
    from stint.interfaces.tui import StintApp

    config = resolve_config(data_file)
    log_file = setup_logging(log_dir=config.log_dir, level=config.log_level)
    tracker = build_tracker(config)
    StintApp(tracker).run()
    print_info(f"Tasks saved to {config.data_file} (log: {log_file})")


@app.command("list")
def list_tasks(data_file: Optional[Path] = data_file_option) -> None:
    """Print every task with its status and elapsed time."""
    config = resolve_config(data_file)
    tracker = build_tracker(config)
    result = tracker.load(resume=False)
    if isinstance(result, Err):
        print_error(f"Could not read {config.data_file}: {result.error}")
        raise typer.Exit(code=1)

    if not tracker.tasks:
        print_info("No tasks yet. Run 'stint run' to add some.")
        return

    for task in tracker.tasks:
        typer.echo(format_task_line(task, tracker.engine.live_elapsed(task)))
        for sub in task.sub_tasks:
            typer.echo(format_task_line(sub, tracker.engine.live_elapsed(sub), indent=1))
