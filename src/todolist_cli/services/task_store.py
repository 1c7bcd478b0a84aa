"""Task store - owner of the task collection.

The store holds the authoritative ordered task list (newest first) and is the
only place it changes. Each mutation builds the new list, writes it through
the persistence layer and only then commits it in memory, so a failed write
leaves the store as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from pydantic import ValidationError

from todolist_cli.models import (
    Task,
    TaskCreate,
    TaskNotFoundError,
    TaskUpdate,
    TaskValidationError,
)
from todolist_cli.services.persistence import TaskPersistence
from todolist_cli.services.transfer_codec import export_tasks, import_tasks
from todolist_cli.services.view_projector import derive_categories
from todolist_cli.utils.id_generator import next_id, now_ms

logger = logging.getLogger(__name__)


def _validated(model, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        raise TaskValidationError(e.errors()[0]["msg"]) from e


class TaskStore:
    """In-memory task collection with write-through persistence.

    Tasks are immutable pydantic models, so the lists returned by
    ``list_tasks`` are safe snapshots.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        tasks: Iterable[Task] | None = None,
        *,
        id_factory: Callable[[], str] = next_id,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the store.

        Args:
            persistence: Where every mutation is written through
            tasks: Initial collection, usually the persisted one
            id_factory: Identifier generator for new tasks
            clock: Source of creation timestamps in epoch milliseconds
        """
        self.persistence = persistence
        self._tasks: list[Task] = list(tasks or [])
        self._id_factory = id_factory
        self._clock = clock

    @classmethod
    def open(cls, persistence: TaskPersistence, **kwargs) -> TaskStore:
        """Build a store from whatever the persistence layer holds."""
        tasks = persistence.load_or_empty()
        logger.info("task store opened key=%s total=%d", persistence.key, len(tasks))
        return cls(persistence, tasks, **kwargs)

    # ---- internals ----

    def _commit(self, tasks: list[Task]) -> None:
        self.persistence.save(tasks)
        self._tasks = tasks

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _fresh_id(self) -> str:
        taken = {t.id for t in self._tasks}
        task_id = self._id_factory()
        while task_id in taken:
            task_id = self._id_factory()
        return task_id

    # ---- queries ----

    def list_tasks(self) -> list[Task]:
        """Snapshot of all tasks in insertion order (newest first)."""
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task:
        """Get a task by id.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        return self._tasks[self._index_of(task_id)]

    def categories(self) -> list[str]:
        return derive_categories(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    # ---- mutations ----

    def create_task(self, data: TaskCreate | str, **fields) -> Task:
        """Create a task and put it at the front of the collection.

        Args:
            data: TaskCreate, or the title when passing fields as keywords
            **fields: description, category and due when ``data`` is a title

        Returns:
            The new task

        Raises:
            TaskValidationError: If the title is blank or due is not YYYY-MM-DD
        """
        if not isinstance(data, TaskCreate):
            data = _validated(TaskCreate, title=data, **fields)
        if not data.title:
            raise TaskValidationError("Title is required")

        task = Task(
            id=self._fresh_id(),
            title=data.title,
            description=data.description,
            category=data.category,
            due=data.due,
            completed=False,
            created=self._clock(),
        )
        self._commit([task, *self._tasks])
        logger.info("task created id=%s", task.id)
        return task

    def update_task(self, task_id: str, patch: TaskUpdate | None = None, **fields) -> Task:
        """Apply a partial update to one task.

        Only fields present in the patch change. ``id`` and ``created`` are
        never touched.

        Raises:
            TaskNotFoundError: If no task has this id
            TaskValidationError: If the patch blanks the title or has a bad due
        """
        if patch is None:
            patch = _validated(TaskUpdate, **fields)
        index = self._index_of(task_id)
        changes = patch.changes()
        if "title" in changes and not changes["title"]:
            raise TaskValidationError("Title is required")
        for key in ("description", "category"):
            if key in changes and changes[key] is None:
                changes[key] = ""
        if changes.get("completed") is None:
            changes.pop("completed", None)

        updated = self._tasks[index].model_copy(update=changes)
        tasks = list(self._tasks)
        tasks[index] = updated
        self._commit(tasks)
        logger.info("task updated id=%s fields=%s", task_id, sorted(changes))
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Remove a task. Deleting an unknown id is a no-op.

        Returns:
            True if a task was removed
        """
        tasks = [t for t in self._tasks if t.id != task_id]
        removed = len(tasks) != len(self._tasks)
        self._commit(tasks)
        if removed:
            logger.info("task deleted id=%s", task_id)
        return removed

    def set_completed_for_all(self, value: bool) -> int:
        """Set ``completed`` on every task.

        Returns:
            Number of tasks whose status changed
        """
        changed = sum(1 for t in self._tasks if t.completed != value)
        self._commit([t.model_copy(update={"completed": value}) for t in self._tasks])
        logger.info("bulk completed=%s changed=%d", value, changed)
        return changed

    def clear_completed(self) -> int:
        """Remove every completed task.

        Returns:
            Number of tasks removed
        """
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        self._commit(remaining)
        logger.info("cleared completed tasks removed=%d", removed)
        return removed

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """Swap in a whole new collection at once."""
        self._commit(list(tasks))
        logger.info("task collection replaced total=%d", len(self._tasks))

    # ---- import / export ----

    def export_document(self) -> str:
        """Pretty JSON dump of the whole collection."""
        return export_tasks(self._tasks)

    def import_document(self, document) -> list[Task]:
        """Replace the collection with the tasks of an import document.

        Raises:
            TaskImportError: If the document is malformed; the store is unchanged
        """
        tasks = import_tasks(document, id_factory=self._id_factory, clock=self._clock)
        self.replace_all(tasks)
        return self.list_tasks()
