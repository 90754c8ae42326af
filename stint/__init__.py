"""stint - hierarchical task tracker with per-task timers."""

__version__ = "0.1.0"
