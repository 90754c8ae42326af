"""Storage infrastructure for stint.

Persistence for the task forest, using Result types for explicit error
handling.
"""

from stint.infrastructure.storage.json_storage import JsonStorage
from stint.infrastructure.storage.repositories import (
    STORAGE_KEY,
    KeyValueStore,
    TaskTreeRepository,
)

__all__ = [
    "JsonStorage",
    "KeyValueStore",
    "TaskTreeRepository",
    "STORAGE_KEY",
]
