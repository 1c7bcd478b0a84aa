"""Storage abstraction layer for todolist-cli.

The task engine persists its collection into a single slot of a key-value
store, the same shape as browser ``localStorage``. Concrete adapters decide
where the slots live (memory, files on disk).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStorage(ABC):
    """Abstract base class for key-value storage.

    Every write fully replaces the previous value of a key.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | bytes | None:
        """Read the value stored under a key.

        Args:
            key: Slot name

        Returns:
            Stored value, or None when the key is absent. Adapters backed by
            files return the raw bytes and leave decoding to the caller.

        Raises:
            PersistenceError: If the backend cannot be read
        """
        raise NotImplementedError(
            "KeyValueStorage.get_item() must be implemented by adapter"
        )

    @abstractmethod
    def set_item(self, key: str, value: str | bytes) -> None:
        """Store a value, overwriting any previous one.

        Args:
            key: Slot name
            value: Text, or raw bytes, to store

        Raises:
            PersistenceError: If the backend cannot be written
        """
        raise NotImplementedError(
            "KeyValueStorage.set_item() must be implemented by adapter"
        )

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        raise NotImplementedError(
            "KeyValueStorage.remove_item() must be implemented by adapter"
        )
