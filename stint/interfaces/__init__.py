"""Interfaces layer for stint.

This layer contains adapters for user interaction:
- CLI: Command-line interface using Typer
- TUI: Terminal UI using Textual

The interfaces layer is responsible for:
- Accepting user input
- Calling the task tracker
- Painting tracker state for the user
"""

from stint.interfaces.cli import app

__all__ = ["app"]
