"""Shared domain building blocks.

- Result type for explicit error handling
- Base domain event

Example usage:
    >>> from stint.domain.shared import Ok, Err, Result
    >>>
    >>> def find_label(task_id: str) -> Result[str, str]:
    ...     if task_id == "missing":
    ...         return Err("Task not found")
    ...     return Ok("Write report")
"""

from stint.domain.shared.events import DomainEvent
from stint.domain.shared.result import Err, Ok, Result

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    # Events
    "DomainEvent",
]
