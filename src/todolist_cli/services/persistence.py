"""Persistence of the task collection into a key-value slot.

The whole collection is stored as one JSON array under a fixed key. Every
save overwrites the previous value; there is no append log and no versioning
beyond the key name itself.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from todolist_cli.models import PersistenceError, Task
from todolist_cli.models.config_models import DEFAULT_STORAGE_KEY
from todolist_cli.repositories import KeyValueStorage

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[Task])

CORRUPT_SUFFIX = ".corrupt"


def dump_tasks(tasks: Iterable[Task], indent: int | None = None) -> str:
    """Serialize tasks to a JSON array using the stored field names."""
    payload = [task.model_dump(mode="json") for task in tasks]
    if indent is None:
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(payload, ensure_ascii=False, indent=indent)


class TaskPersistence:
    """Reads and writes the task collection through a KeyValueStorage."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the stored collection with ``tasks``."""
        tasks = list(tasks)
        self.storage.set_item(self.key, dump_tasks(tasks))
        logger.debug("saved %d tasks under %s", len(tasks), self.key)

    def load(self) -> list[Task]:
        """Load the stored collection.

        Returns:
            Tasks in stored order; empty when nothing has been saved yet

        Raises:
            PersistenceError: If the stored value is not a valid task array
        """
        raw = self.storage.get_item(self.key)
        return self._decode(raw)

    def load_or_empty(self) -> list[Task]:
        """Load the collection, recovering from corrupt data.

        An undecodable payload is copied to ``<key>.corrupt`` before an empty
        collection is returned, so the next save cannot destroy it. A backend
        that cannot be read at all still raises: there is no payload to keep.

        Raises:
            PersistenceError: If the storage backend cannot be read
        """
        raw = self.storage.get_item(self.key)
        try:
            return self._decode(raw)
        except PersistenceError as e:
            logger.warning("task storage corrupt, starting empty: %s", e)
            self.storage.set_item(self.key + CORRUPT_SUFFIX, raw or "")
            return []

    def _decode(self, raw: str | bytes | None) -> list[Task]:
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise PersistenceError(
                    f"Stored tasks under {self.key!r} are not valid UTF-8: {e}"
                ) from e
        if raw is None or not raw.strip():
            return []
        try:
            return _TASK_LIST.validate_json(raw)
        except ValidationError as e:
            raise PersistenceError(
                f"Stored tasks under {self.key!r} are unreadable: "
                f"{e.error_count()} error(s), first: {e.errors()[0]['msg']}"
            ) from e
