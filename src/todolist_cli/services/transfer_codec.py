"""Import and export of the full task collection as portable JSON.

Export is a full-fidelity dump. Import is deliberately forgiving: every
element of the document is coerced field by field into a valid Task, and only
a document that is not an array of objects is rejected.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterable
from typing import Any

from todolist_cli.models import TITLE_MAX_LENGTH, Task, TaskImportError
from todolist_cli.services.persistence import dump_tasks
from todolist_cli.utils.id_generator import next_id, now_ms

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "tasks-backup.json"
EXPORT_INDENT = 2
DUE_LENGTH = 10


def export_tasks(tasks: Iterable[Task]) -> str:
    """Render tasks as a pretty-printed JSON array (2-space indent)."""
    return dump_tasks(tasks, indent=EXPORT_INDENT)


def _truthy(value: Any) -> bool:
    """Truthiness as a JSON document author would expect it.

    Empty arrays and objects count as present; NaN counts as absent.
    """
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _as_text(value: Any) -> str:
    if not _truthy(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _as_timestamp(value: Any, clock: Callable[[], int]) -> int:
    if isinstance(value, bool) or not _truthy(value):
        return clock()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return clock()
    if not math.isfinite(number):
        return clock()
    return int(number)


def sanitize_task(
    raw: dict[str, Any],
    *,
    id_factory: Callable[[], str] = next_id,
    clock: Callable[[], int] = now_ms,
) -> Task:
    """Coerce one imported element into a Task.

    Missing id gets a fresh one, title is cut to 200 characters (and may be
    empty), due is cut to 10 characters, created falls back to now.
    """
    due = raw.get("due")
    return Task(
        id=_as_text(raw.get("id")) or id_factory(),
        title=_as_text(raw.get("title"))[:TITLE_MAX_LENGTH],
        description=_as_text(raw.get("description")),
        category=_as_text(raw.get("category")),
        due=_as_text(due)[:DUE_LENGTH] if _truthy(due) else None,
        completed=_truthy(raw.get("completed")),
        created=_as_timestamp(raw.get("created"), clock),
    )


def decode_document(document: str | bytes | Any) -> list[Any]:
    """Parse an import document and check that it is an array."""
    if isinstance(document, (str, bytes, bytearray)):
        try:
            document = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TaskImportError(f"Invalid JSON: {e}") from e
    if not isinstance(document, list):
        raise TaskImportError("Invalid file: expected a JSON array of tasks")
    return document


def import_tasks(
    document: str | bytes | Any,
    *,
    id_factory: Callable[[], str] = next_id,
    clock: Callable[[], int] = now_ms,
) -> list[Task]:
    """Turn an import document into a clean task list.

    Args:
        document: JSON text, or an already decoded value
        id_factory: Source of ids for elements without one
        clock: Source of the fallback creation time

    Returns:
        Sanitized tasks in document order

    Raises:
        TaskImportError: If the document is not a JSON array of objects
    """
    elements = decode_document(document)
    tasks: list[Task] = []
    seen: set[str] = set()
    for index, raw in enumerate(elements):
        if not isinstance(raw, dict):
            raise TaskImportError(
                f"Invalid file: item {index} is {type(raw).__name__}, expected an object"
            )
        task = sanitize_task(raw, id_factory=id_factory, clock=clock)
        while task.id in seen:
            fresh = id_factory()
            logger.info("import: duplicate id %s at item %d, using %s", task.id, index, fresh)
            task = task.model_copy(update={"id": fresh})
        seen.add(task.id)
        tasks.append(task)
    logger.debug("import: sanitized %d tasks", len(tasks))
    return tasks
