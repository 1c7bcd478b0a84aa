"""Unit tests for TaskStore."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from todolist_cli.adapters import FileKeyValueStorage, MemoryKeyValueStorage
from todolist_cli.models import (
    PersistenceError,
    TaskCreate,
    TaskImportError,
    TaskNotFoundError,
    TaskUpdate,
    TaskValidationError,
)
from todolist_cli.services.persistence import TaskPersistence
from todolist_cli.services.task_store import TaskStore
from todolist_cli.utils.id_generator import next_id


def _stored(storage):
    return json.loads(storage.get_item("todo.tasks.v1"))


# ---------------------------------------------------------------------------
# create_task
# ---------------------------------------------------------------------------


class TestCreateTask:
    def test_create_single_task(self, store):
        task = store.create_task("Buy milk")

        assert len(store) == 1
        assert task.completed is False
        assert store.list_tasks()[0] == task

    def test_create_assigns_id_and_created(self, store):
        task = store.create_task("Buy milk")
        assert task.id == "task-1"
        assert task.created == 1000

    def test_newest_task_first(self, store):
        first = store.create_task("first")
        second = store.create_task("second")
        assert [t.id for t in store.list_tasks()] == [second.id, first.id]

    def test_fields_are_trimmed(self, store):
        task = store.create_task(
            "  Buy milk  ", description="  2 litres ", category=" Home ", due=" 2024-01-01 "
        )
        assert task.title == "Buy milk"
        assert task.description == "2 litres"
        assert task.category == "Home"
        assert task.due == "2024-01-01"

    def test_blank_due_is_none(self, store):
        assert store.create_task("x", due="").due is None

    def test_malformed_due_rejected(self, store, storage):
        with pytest.raises(TaskValidationError, match="YYYY-MM-DD"):
            store.create_task("x", due="tomorrow")
        assert len(store) == 0
        assert storage.get_item("todo.tasks.v1") is None

    def test_long_title_truncated(self, store):
        assert len(store.create_task("a" * 250).title) == 200

    def test_accepts_task_create_model(self, store):
        task = store.create_task(TaskCreate(title="Read", category="Books"))
        assert task.category == "Books"

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(self, store, storage, title):
        with pytest.raises(TaskValidationError):
            store.create_task(title)
        assert len(store) == 0
        assert storage.get_item("todo.tasks.v1") is None

    def test_writes_through(self, store, storage):
        task = store.create_task("Buy milk")
        assert _stored(storage)[0]["id"] == task.id

    def test_ids_are_pairwise_distinct(self, persistence):
        store = TaskStore(persistence)
        ids = [store.create_task(f"task {i}").id for i in range(200)]
        assert len(set(ids)) == len(ids)

    def test_colliding_id_factory_is_redrawn(self, persistence, clock):
        ids = iter(["dup", "dup", "fresh"])
        store = TaskStore(persistence, id_factory=lambda: next(ids), clock=clock)
        store.create_task("one")
        assert store.create_task("two").id == "fresh"


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


class TestUpdateTask:
    def test_applies_only_present_fields(self, store):
        task = store.create_task("Buy milk", category="Home", due="2024-01-01")
        updated = store.update_task(task.id, TaskUpdate(title="Buy oat milk"))

        assert updated.title == "Buy oat milk"
        assert updated.category == "Home"
        assert updated.due == "2024-01-01"
        assert updated.id == task.id
        assert updated.created == task.created

    def test_keyword_fields(self, store):
        task = store.create_task("x")
        assert store.update_task(task.id, completed=True).completed is True

    def test_clear_due(self, store):
        task = store.create_task("x", due="2024-01-01")
        assert store.update_task(task.id, due=None).due is None

    def test_malformed_due_rejected(self, store):
        task = store.create_task("x", due="2024-01-01")
        with pytest.raises(TaskValidationError):
            store.update_task(task.id, due="next week")
        assert store.get_task(task.id).due == "2024-01-01"

    def test_unknown_id_raises(self, store):
        with pytest.raises(TaskNotFoundError) as exc_info:
            store.update_task("missing", completed=True)
        assert exc_info.value.task_id == "missing"

    def test_blank_title_rejected(self, store):
        task = store.create_task("x")
        with pytest.raises(TaskValidationError):
            store.update_task(task.id, title="   ")
        assert store.get_task(task.id).title == "x"

    def test_previous_snapshot_not_mutated(self, store):
        task = store.create_task("x")
        snapshot = store.list_tasks()
        store.update_task(task.id, completed=True)
        assert snapshot[0].completed is False

    def test_writes_through(self, store, storage):
        task = store.create_task("x")
        store.update_task(task.id, completed=True)
        assert _stored(storage)[0]["completed"] is True


# ---------------------------------------------------------------------------
# delete / bulk operations
# ---------------------------------------------------------------------------


class TestDeleteAndBulk:
    def test_delete_existing(self, store, storage):
        task = store.create_task("x")
        assert store.delete_task(task.id) is True
        assert len(store) == 0
        assert _stored(storage) == []

    def test_delete_is_idempotent(self, store):
        task = store.create_task("x")
        store.delete_task(task.id)
        assert store.delete_task(task.id) is False

    def test_set_completed_for_all(self, store):
        store.create_task("a")
        b = store.create_task("b")
        store.update_task(b.id, completed=True)

        assert store.set_completed_for_all(True) == 1
        assert all(t.completed for t in store.list_tasks())
        assert store.set_completed_for_all(False) == 2
        assert not any(t.completed for t in store.list_tasks())

    def test_clear_completed(self, store, storage):
        a = store.create_task("a")
        b = store.create_task("b")
        c = store.create_task("c")
        store.update_task(a.id, completed=True)
        store.update_task(c.id, completed=True)

        assert store.clear_completed() == 2
        assert [t.id for t in store.list_tasks()] == [b.id]
        assert [t["id"] for t in _stored(storage)] == [b.id]

    def test_clear_completed_none(self, store):
        store.create_task("a")
        assert store.clear_completed() == 0


# ---------------------------------------------------------------------------
# queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_list_is_a_copy(self, store):
        store.create_task("a")
        snapshot = store.list_tasks()
        snapshot.clear()
        assert len(store) == 1

    def test_get_task_unknown(self, store):
        with pytest.raises(TaskNotFoundError):
            store.get_task("nope")

    def test_categories(self, store):
        store.create_task("a", category="Work")
        store.create_task("b", category="home")
        store.create_task("c", category="Work")
        store.create_task("d")
        assert store.categories() == ["Work", "home"]

    def test_open_loads_persisted(self, persistence):
        first = TaskStore(persistence)
        task = first.create_task("persist me")

        reopened = TaskStore.open(persistence)
        assert reopened.list_tasks() == [task]

    def test_open_recovers_from_corrupt_storage(self, storage, persistence):
        storage.set_item("todo.tasks.v1", "{not json")
        reopened = TaskStore.open(persistence)
        assert len(reopened) == 0

    def test_open_recovers_from_invalid_utf8_file(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        payload = b'[{"id":"a","title":"\xff"}]'
        (tmp_path / "todo.tasks.v1.json").write_bytes(payload)

        reopened = TaskStore.open(TaskPersistence(storage))

        assert len(reopened) == 0
        assert storage.get_item("todo.tasks.v1.corrupt") == payload

    def test_open_refuses_unreadable_backend(self):
        class Unreadable(MemoryKeyValueStorage):
            def get_item(self, key):
                raise PersistenceError("permission denied")

        kept = '[{"id":"old","title":"keep me","created":1}]'
        storage = Unreadable({"todo.tasks.v1": kept})

        with pytest.raises(PersistenceError):
            TaskStore.open(TaskPersistence(storage))
        assert storage._items == {"todo.tasks.v1": kept}


# ---------------------------------------------------------------------------
# failed writes
# ---------------------------------------------------------------------------


class TestWriteFailure:
    def test_failed_save_leaves_store_unchanged(self, store):
        store.create_task("kept")
        broken = MagicMock(spec=TaskPersistence)
        broken.save.side_effect = PersistenceError("disk full")
        store.persistence = broken

        with pytest.raises(PersistenceError):
            store.create_task("lost")
        with pytest.raises(PersistenceError):
            store.clear_completed()
        assert [t.title for t in store.list_tasks()] == ["kept"]


# ---------------------------------------------------------------------------
# import / export
# ---------------------------------------------------------------------------


class TestImportExport:
    def test_import_rejects_non_array(self, store, storage):
        store.create_task("keep me")
        before = storage.get_item("todo.tasks.v1")

        with pytest.raises(TaskImportError):
            store.import_document('{"not":"an array"}')

        assert [t.title for t in store.list_tasks()] == ["keep me"]
        assert storage.get_item("todo.tasks.v1") == before

    def test_import_coerces_and_generates_id(self, store):
        tasks = store.import_document([{"title": "x", "completed": "yes"}])

        assert len(tasks) == 1
        assert tasks[0].completed is True
        assert tasks[0].id == "task-1"

    def test_import_replaces_not_merges(self, store, storage):
        store.create_task("old")
        store.import_document('[{"id": "a", "title": "new", "created": 5}]')

        assert [t.title for t in store.list_tasks()] == ["new"]
        assert _stored(storage)[0]["id"] == "a"

    def test_export_then_import_is_identity(self, persistence):
        source = TaskStore(persistence)
        source.create_task("a", category="Work", due="2024-03-01")
        b = source.create_task("b", description="details")
        source.update_task(b.id, completed=True)
        expected = source.list_tasks()

        target = TaskStore(TaskPersistence(persistence.storage, key="other"), id_factory=next_id)
        assert target.import_document(source.export_document()) == expected
