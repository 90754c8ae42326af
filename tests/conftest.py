# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from stint.application import TaskTracker
from stint.domain.shared import DomainEvent
from stint.infrastructure.storage import KeyValueStore, TaskTreeRepository

from .fakes import FakeClock, FakeTicker, RecordingRepository


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def repository(store_path: Path) -> RecordingRepository:
    """
    Real JSON-backed repository (tmp per test) that records every save.
    """
    return RecordingRepository(TaskTreeRepository(KeyValueStore(store_path)))


@pytest.fixture()
def tracker(repository: RecordingRepository, ticker: FakeTicker, clock: FakeClock) -> TaskTracker:
    """
    Tracker wired with a fake clock and ticker so timing is deterministic.
    """
    t = TaskTracker(repository, ticker=ticker, clock=clock)  # type: ignore[arg-type]
    t.load()
    return t


@pytest.fixture()
def events(tracker: TaskTracker) -> list[DomainEvent]:
    received: list[DomainEvent] = []
    tracker.subscribe(received.append)
    return received
