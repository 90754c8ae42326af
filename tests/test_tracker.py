# tests/test_tracker.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from stint.application import TaskTracker
from stint.domain.shared import Err, Ok
from stint.domain.task import TaskAdded, TaskDeleted, TaskStatus, TreeLoaded
from stint.infrastructure.storage import KeyValueStore, TaskTreeRepository

from .fakes import BrokenRepository, FakeClock, FakeTicker, RecordingRepository


def test_add_task_persists_and_notifies(tracker: TaskTracker, repository, events, store_path: Path) -> None:
    result = tracker.add_task("Buy milk")

    assert isinstance(result, Ok)
    task = result.value
    assert [e.task_id for e in events if isinstance(e, TaskAdded)] == [task.id]
    stored = json.loads(store_path.read_text(encoding="utf-8"))
    assert stored["hierarchicalTasks"][0]["text"] == "Buy milk"


def test_blank_add_does_not_save_or_notify(tracker: TaskTracker, repository, events) -> None:
    assert tracker.add_task("   ") == Ok(None)
    assert repository.saves == []
    assert events == []


def test_add_with_missing_parent_signals_error(tracker: TaskTracker, repository, events, caplog) -> None:
    tracker.add_task("Parent")
    saves = len(repository.saves)

    with caplog.at_level(logging.ERROR):
        result = tracker.add_task("Sub X", "unknown")

    assert isinstance(result, Err)
    assert "Parent task not found" in caplog.text
    assert len(repository.saves) == saves
    assert len(tracker.tasks) == 1
    assert tracker.tasks[0].sub_tasks == []


def test_delete_running_task_flushes_time_before_removal(
    tracker: TaskTracker, repository, clock: FakeClock, ticker: FakeTicker, events
) -> None:
    task = tracker.add_task("Running").value
    tracker.start(task.id)
    clock.advance(90)

    removed = tracker.delete_task(task.id)

    assert removed is task
    assert task.elapsed_time == 90
    # The snapshot saved just before removal holds the flushed run.
    pre_delete, final = repository.saves[-2], repository.saves[-1]
    assert pre_delete[0]["id"] == task.id
    assert pre_delete[0]["elapsedTime"] == 90
    assert pre_delete[0]["startTime"] is None
    assert final == []
    assert not ticker.running
    deleted = [e for e in events if isinstance(e, TaskDeleted)]
    assert deleted[-1].elapsed_time == 90


def test_delete_running_sub_task_keeps_loop_for_other_runners(
    tracker: TaskTracker, ticker: FakeTicker
) -> None:
    parent = tracker.add_task("Parent").value
    sub = tracker.add_task("Sub", parent.id).value
    tracker.start(parent.id)
    tracker.start(sub.id)

    tracker.delete_task(sub.id)

    assert parent.sub_tasks == []
    assert ticker.running


def test_delete_unknown_is_noop(tracker: TaskTracker, repository, events) -> None:
    tracker.add_task("A")
    saves = len(repository.saves)
    events.clear()

    assert tracker.delete_task("unknown") is None
    assert len(repository.saves) == saves
    assert events == []


def test_round_trip_preserves_effective_elapsed(
    tracker: TaskTracker, repository, clock: FakeClock
) -> None:
    parent = tracker.add_task("Parent").value
    sub = tracker.add_task("Sub", parent.id).value
    tracker.start(sub.id)
    clock.advance(30)
    tracker.stop(sub.id)
    tracker.start(sub.id)
    clock.advance(65)
    before = tracker.live_elapsed(sub.id)

    reloaded_ticker = FakeTicker()
    reloaded = TaskTracker(repository, ticker=reloaded_ticker, clock=clock)
    reloaded.load()

    assert reloaded.live_elapsed(sub.id) == before == 95
    assert reloaded.find(sub.id).status == TaskStatus.IN_PROGRESS
    assert reloaded_ticker.running


def test_load_without_resume_leaves_loop_stopped(repository, clock: FakeClock, ticker: FakeTicker) -> None:
    first = TaskTracker(repository, ticker=FakeTicker(), clock=clock)
    first.load()
    task = first.add_task("A").value
    first.start(task.id)

    second = TaskTracker(repository, ticker=ticker, clock=clock)
    second.load(resume=False)

    assert second.find(task.id).is_running
    assert not ticker.running


def test_load_publishes_tree_loaded(repository, clock: FakeClock, ticker: FakeTicker) -> None:
    t = TaskTracker(repository, ticker=ticker, clock=clock)
    received = []
    t.subscribe(received.append)

    t.load()

    assert isinstance(received[-1], TreeLoaded)
    assert received[-1].task_count == 0


def test_unreadable_store_loads_empty(tmp_path: Path, clock: FakeClock, ticker: FakeTicker, caplog) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("{not json", encoding="utf-8")
    t = TaskTracker(TaskTreeRepository(KeyValueStore(path)), ticker=ticker, clock=clock)

    with caplog.at_level(logging.ERROR):
        result = t.load()

    assert isinstance(result, Err)
    assert t.tasks == []
    assert "Could not load tasks" in caplog.text


@pytest.mark.parametrize("raise_on_save", [True, False])
def test_failed_save_keeps_state_consistent(raise_on_save: bool, clock: FakeClock, ticker: FakeTicker) -> None:
    repo = BrokenRepository(raise_on_save=raise_on_save)
    t = TaskTracker(repo, ticker=ticker, clock=clock)  # type: ignore[arg-type]
    t.load()
    received = []
    t.subscribe(received.append)

    task = t.add_task("A").value
    t.start(task.id)
    clock.advance(5)
    t.stop(task.id)

    assert repo.save_calls == 3
    assert task.elapsed_time == 5
    assert task.start_time is None
    assert len(received) == 3
    assert not ticker.running


def test_failing_observer_does_not_block_others(tracker: TaskTracker) -> None:
    received = []

    def broken(event) -> None:
        raise RuntimeError("boom")

    tracker.subscribe(broken)
    tracker.subscribe(received.append)

    tracker.add_task("A")

    assert len(received) == 1


def test_unsubscribe_stops_notifications(tracker: TaskTracker) -> None:
    received = []
    unsubscribe = tracker.subscribe(received.append)
    unsubscribe()

    tracker.add_task("A")

    assert received == []


def test_shutdown_stops_loop_but_keeps_timer(tracker: TaskTracker, ticker: FakeTicker) -> None:
    task = tracker.add_task("A").value
    tracker.start(task.id)

    tracker.shutdown()

    assert not ticker.running
    assert task.is_running


def test_default_tracker_uses_real_repository(tmp_path: Path) -> None:
    repo = RecordingRepository(TaskTreeRepository(KeyValueStore(tmp_path / "t.json")))
    t = TaskTracker(repo, tick_interval=0.5)  # type: ignore[arg-type]
    t.load()

    assert t.tasks == []
    assert not t.engine.loop_running


def test_load_reports_task_count(repository, clock: FakeClock, ticker: FakeTicker) -> None:
    first = TaskTracker(repository, ticker=FakeTicker(), clock=clock)
    first.load()
    parent = first.add_task("A").value
    first.add_task("B", parent.id)

    second = TaskTracker(repository, ticker=ticker, clock=clock)

    assert second.load() == Ok(2)
