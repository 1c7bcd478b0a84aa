"""todolist-cli: a single-user task list with JSON persistence."""

__version__ = "0.1.0"
