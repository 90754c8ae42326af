"""Terminal UI for stint, built on Textual."""

from stint.interfaces.tui.app import StintApp

__all__ = ["StintApp"]
