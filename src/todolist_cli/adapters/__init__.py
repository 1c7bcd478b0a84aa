"""Storage adapters for todolist-cli."""

from .storage import FileKeyValueStorage, MemoryKeyValueStorage

__all__ = ["FileKeyValueStorage", "MemoryKeyValueStorage"]
