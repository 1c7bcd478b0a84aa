"""todolist-cli domain models.

Pydantic models for tasks, projection queries and configuration, plus the
domain exception hierarchy.
"""

from .config_models import AppConfig, OutputConfig, StorageConfig, ViewConfig
from .exceptions import (
    PersistenceError,
    TaskImportError,
    TaskNotFoundError,
    TaskValidationError,
    TodoListError,
)
from .task import (
    TITLE_MAX_LENGTH,
    SortMode,
    StatusFilter,
    Task,
    TaskCounts,
    TaskCreate,
    TaskQuery,
    TaskUpdate,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskQuery",
    "TaskCounts",
    "StatusFilter",
    "SortMode",
    "TITLE_MAX_LENGTH",
    # Config models
    "AppConfig",
    "StorageConfig",
    "OutputConfig",
    "ViewConfig",
    # Errors
    "TodoListError",
    "TaskValidationError",
    "TaskNotFoundError",
    "PersistenceError",
    "TaskImportError",
]
