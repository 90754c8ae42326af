"""Infrastructure layer for stint.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - KeyValueStore: JSON document used as a key-value store
        - TaskTreeRepository: Task forest persistence
"""

from stint.infrastructure.storage import (
    STORAGE_KEY,
    JsonStorage,
    KeyValueStore,
    TaskTreeRepository,
)

__all__ = [
    "JsonStorage",
    "KeyValueStore",
    "TaskTreeRepository",
    "STORAGE_KEY",
]
