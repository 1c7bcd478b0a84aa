"""Domain exceptions for the task list engine."""


class TodoListError(Exception):
    """Base exception for all task list errors."""


class TaskValidationError(TodoListError):
    """Raised when a required task field is missing or blank."""


class TaskNotFoundError(TodoListError):
    """Raised when an operation targets an unknown task id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class PersistenceError(TodoListError):
    """Raised when stored task data cannot be read, decoded or written."""


class TaskImportError(TodoListError):
    """Raised when an import document is malformed."""
