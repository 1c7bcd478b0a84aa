"""Key-value storage adapters."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from todolist_cli.models import PersistenceError
from todolist_cli.repositories import KeyValueStorage

logger = logging.getLogger(__name__)


class MemoryKeyValueStorage(KeyValueStorage):
    """Dict-backed storage; contents live as long as the instance."""

    def __init__(self, initial: dict[str, str | bytes] | None = None):
        self._items: dict[str, str | bytes] = dict(initial or {})

    def get_item(self, key: str) -> str | bytes | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str | bytes) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class FileKeyValueStorage(KeyValueStorage):
    """Storage keeping each key in its own file inside a directory.

    Key ``todo.tasks.v1`` lives at ``<data_dir>/todo.tasks.v1.json``. Writes go
    to a temporary file that replaces the target, so a reader never sees a
    half-written value. Values come back as raw bytes.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> bytes | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def set_item(self, key: str, value: str | bytes) -> None:
        path = self._path_for(key)
        data = value.encode("utf-8") if isinstance(value, str) else value
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e
        logger.debug("stored key=%s bytes=%d path=%s", key, len(data), path)

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot remove {path}: {e}") from e
