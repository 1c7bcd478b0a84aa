"""Unit tests for TaskPersistence."""

from __future__ import annotations

import json

import pytest

from todolist_cli.adapters import FileKeyValueStorage, MemoryKeyValueStorage
from todolist_cli.models import PersistenceError, Task
from todolist_cli.services.persistence import TaskPersistence


@pytest.fixture()
def sample_tasks():
    return [
        Task(id="b", title="Second", category="Work", due="2024-02-01", created=2),
        Task(id="a", title="First", description="notes", completed=True, created=1),
    ]


class TestSaveLoad:
    def test_round_trip(self, persistence, sample_tasks):
        persistence.save(sample_tasks)
        assert persistence.load() == sample_tasks

    def test_missing_key_is_empty(self, persistence):
        assert persistence.load() == []

    def test_blank_value_is_empty(self, storage, persistence):
        storage.set_item("todo.tasks.v1", "")
        assert persistence.load() == []

    def test_storage_layout(self, storage, persistence, sample_tasks):
        persistence.save(sample_tasks)
        stored = json.loads(storage.get_item("todo.tasks.v1"))
        assert [t["id"] for t in stored] == ["b", "a"]
        assert set(stored[0]) == {
            "id", "title", "description", "category", "due", "completed", "created"
        }
        assert stored[1]["due"] is None

    def test_save_overwrites(self, persistence, sample_tasks):
        persistence.save(sample_tasks)
        persistence.save(sample_tasks[:1])
        assert persistence.load() == sample_tasks[:1]

    def test_custom_key(self, storage, sample_tasks):
        persistence = TaskPersistence(storage, key="other")
        persistence.save(sample_tasks)
        assert storage.get_item("todo.tasks.v1") is None
        assert persistence.load() == sample_tasks


class TestCorruptStorage:
    @pytest.mark.parametrize(
        "raw",
        ["{not json", '{"id": "a"}', "null", '[{"title": "no id"}]', "[1, 2]"],
    )
    def test_load_raises(self, storage, persistence, raw):
        storage.set_item("todo.tasks.v1", raw)
        with pytest.raises(PersistenceError):
            persistence.load()

    def test_load_or_empty_preserves_payload(self, storage, persistence):
        storage.set_item("todo.tasks.v1", "{not json")

        assert persistence.load_or_empty() == []
        assert storage.get_item("todo.tasks.v1.corrupt") == "{not json"

    def test_load_or_empty_reads_valid_data(self, persistence, sample_tasks):
        persistence.save(sample_tasks)
        assert persistence.load_or_empty() == sample_tasks

    def test_load_or_empty_on_unreadable_backend_raises(self):
        class Broken(MemoryKeyValueStorage):
            def get_item(self, key):
                raise PersistenceError("permission denied")

        storage = Broken({"todo.tasks.v1": "[]"})
        with pytest.raises(PersistenceError, match="permission denied"):
            TaskPersistence(storage).load_or_empty()
        assert "todo.tasks.v1.corrupt" not in storage.keys()

    def test_load_rejects_invalid_utf8(self, storage, persistence):
        storage.set_item("todo.tasks.v1", b'[{"id":"a","title":"\xff"}]')
        with pytest.raises(PersistenceError, match="UTF-8"):
            persistence.load()

    def test_load_accepts_utf8_bytes(self, storage, persistence, sample_tasks):
        storage.set_item("todo.tasks.v1", json.dumps([sample_tasks[0].model_dump()]).encode())
        assert persistence.load() == sample_tasks[:1]

    def test_load_or_empty_preserves_invalid_utf8(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        payload = b'[{"id":"a","title":"\xff"}]'
        (tmp_path / "todo.tasks.v1.json").write_bytes(payload)

        assert TaskPersistence(storage).load_or_empty() == []
        assert (tmp_path / "todo.tasks.v1.corrupt.json").read_bytes() == payload
