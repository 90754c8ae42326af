"""Key-value store and the task forest repository built on it.

The store is a single JSON object on disk. The forest lives under one
fixed key, so other application state can share the file later without
a format change.
"""

from pathlib import Path
from typing import Any

from stint.domain.shared.result import Err, Ok, Result
from stint.infrastructure.storage.json_storage import JsonStorage

STORAGE_KEY = "hierarchicalTasks"


class KeyValueStore:
    """Durable key-value store backed by one JSON object file."""

    def __init__(self, path: str | Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document. Created on first write.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self.path = Path(path).expanduser()
        self._storage = storage or JsonStorage()

    def _read_all(self) -> Result[dict[str, Any], str]:
        if not self.path.exists():
            return Ok({})

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            return result
        if not isinstance(result.value, dict):
            return Err(f"Expected a JSON object in {self.path}")
        return Ok(result.value)

    def get(self, key: str) -> Result[Any | None, str]:
        """Read the value stored under key.

        Returns:
            Ok(value), Ok(None) if the key or the file is absent,
            or Err(str) if the file cannot be read.
        """
        result = self._read_all()
        if isinstance(result, Err):
            return result
        return Ok(result.value.get(key))

    def set(self, key: str, value: Any) -> Result[None, str]:
        """Store value under key, keeping every other key as it was."""
        result = self._read_all()
        if isinstance(result, Err):
            return result

        data = dict(result.value)
        data[key] = value
        return self._storage.save_json(self.path, data)


class TaskTreeRepository:
    """Repository for the task forest snapshot.

    The snapshot is the list of task documents produced by
    ``TaskTree.to_snapshot``. The repository never holds live tasks.
    """

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._store = store
        self.key = key

    def load(self) -> Result[list[dict[str, Any]], str]:
        """Load the persisted snapshot.

        Returns:
            Ok(list) with the stored task documents (empty when nothing has
            been saved yet), or Err(str) if the store cannot be read or the
            stored value is not a list.
        """
        result = self._store.get(self.key)
        if isinstance(result, Err):
            return result

        value = result.value
        if value is None:
            return Ok([])
        if not isinstance(value, list):
            return Err(f"Invalid task snapshot under '{self.key}': expected a list")
        return Ok(value)

    def save(self, snapshot: list[dict[str, Any]]) -> Result[None, str]:
        """Persist a full forest snapshot."""
        return self._store.set(self.key, snapshot)
