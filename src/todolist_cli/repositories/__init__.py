"""Storage ports for todolist-cli."""

from .repository import KeyValueStorage

__all__ = ["KeyValueStorage"]
