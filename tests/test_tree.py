# tests/test_tree.py

from __future__ import annotations

from stint.domain.shared import Err, Ok
from stint.domain.task import Task, TaskStatus, TaskTree


def test_blank_text_creates_nothing() -> None:
    tree = TaskTree()

    assert tree.add_task("   ") == Ok(None)
    assert tree.add_task("") == Ok(None)
    assert tree.tasks == []


def test_add_top_level_task_has_initial_fields() -> None:
    tree = TaskTree()

    result = tree.add_task("  Buy milk  ")

    assert isinstance(result, Ok)
    task = result.value
    assert tree.tasks == [task]
    assert task.text == "Buy milk"
    assert task.status == TaskStatus.PENDING
    assert task.elapsed_time == 0
    assert task.start_time is None
    assert task.sub_tasks == []
    assert task.id


def test_add_sub_task_appends_to_parent() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value

    first = tree.add_task("Sub 1", parent.id).value
    second = tree.add_task("Sub 2", parent.id).value

    assert parent.sub_tasks == [first, second]
    assert len(tree.tasks) == 1
    assert tree.find_parent(first.id) is parent


def test_missing_parent_is_an_error_and_changes_nothing() -> None:
    tree = TaskTree()
    tree.add_task("Parent")
    before = tree.to_snapshot()

    result = tree.add_task("Sub X", "nope")

    assert isinstance(result, Err)
    assert "nope" in result.error
    assert tree.to_snapshot() == before


def test_sub_task_cannot_be_a_parent() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value
    sub = tree.add_task("Sub", parent.id).value

    result = tree.add_task("Grandchild", sub.id)

    assert isinstance(result, Err)
    assert sub.sub_tasks == []


def test_ids_are_unique_across_levels() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value
    for i in range(20):
        tree.add_task(f"Sub {i}", parent.id)
        tree.add_task(f"Top {i}")

    ids = [task.id for task in tree.iter_tasks()]
    assert len(ids) == len(set(ids)) == 41


def test_find_by_id_searches_both_levels() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value
    sub = tree.add_task("Sub", parent.id).value

    assert tree.find_by_id(parent.id) is parent
    assert tree.find_by_id(sub.id) is sub
    assert tree.find_by_id("unknown") is None
    assert tree.find_by_id(None) is None


def test_remove_task_from_top_level_and_sub_level() -> None:
    tree = TaskTree()
    keep = tree.add_task("Keep").value
    gone = tree.add_task("Gone").value
    sub = tree.add_task("Sub", keep.id).value

    assert tree.remove_task(gone.id) is gone
    assert tree.remove_task(sub.id) is sub
    assert tree.tasks == [keep]
    assert keep.sub_tasks == []


def test_remove_top_level_task_takes_its_sub_tasks_along() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value
    tree.add_task("Sub", parent.id)

    tree.remove_task(parent.id)

    assert len(tree) == 0


def test_remove_unknown_id_is_noop() -> None:
    tree = TaskTree()
    tree.add_task("A")

    assert tree.remove_task("unknown") is None
    assert len(tree) == 1


def test_snapshot_uses_persisted_key_names() -> None:
    tree = TaskTree()
    parent = tree.add_task("Parent").value
    tree.add_task("Sub", parent.id)

    snapshot = tree.to_snapshot()

    assert set(snapshot[0]) == {"id", "text", "status", "elapsedTime", "startTime", "subTasks"}
    assert snapshot[0]["status"] == "pending"
    assert snapshot[0]["subTasks"][0]["text"] == "Sub"


def test_from_snapshot_tolerates_empty_and_wrong_types() -> None:
    assert TaskTree.from_snapshot(None).tasks == []
    assert TaskTree.from_snapshot([]).tasks == []
    assert TaskTree.from_snapshot({"not": "a list"}).tasks == []


def test_from_snapshot_drops_malformed_duplicate_and_nested_entries() -> None:
    data = [
        {"id": "a", "text": "A", "status": "pending", "elapsedTime": 5, "startTime": None, "subTasks": [
            {"id": "a1", "text": "A1", "status": "completed", "elapsedTime": 3, "startTime": None, "subTasks": [
                {"id": "deep", "text": "Too deep", "status": "pending", "elapsedTime": 0, "startTime": None},
            ]},
            {"id": "a", "text": "Dup of parent", "status": "pending", "elapsedTime": 0, "startTime": None},
        ]},
        {"id": "b", "text": "B", "status": "bogus"},
        {"id": "a", "text": "Dup", "status": "pending"},
        "garbage",
    ]

    tree = TaskTree.from_snapshot(data)

    assert [t.id for t in tree.iter_tasks()] == ["a", "a1"]
    assert tree.find_by_id("a1").sub_tasks == []
    assert tree.find_by_id("a1").status == TaskStatus.COMPLETED


def test_from_snapshot_marks_running_task_in_progress() -> None:
    data = [{"id": "a", "text": "A", "status": "pending", "elapsedTime": 0, "startTime": 1000, "subTasks": []}]

    task = TaskTree.from_snapshot(data).find_by_id("a")

    assert task.status == TaskStatus.IN_PROGRESS
    assert task.start_time == 1000


def test_running_tasks_across_levels() -> None:
    parent = Task(id="p", text="P", sub_tasks=[
        Task(id="s", text="S", status=TaskStatus.IN_PROGRESS, start_time=1),
    ])
    tree = TaskTree([parent])

    assert [t.id for t in tree.running_tasks()] == ["s"]
    assert tree.has_running()
