"""Read-only projections of the task collection.

Everything here is a pure function of its arguments: the input sequence is
never modified and a new list is always returned.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from todolist_cli.models import SortMode, StatusFilter, Task, TaskCounts, TaskQuery


def _normalize(text: str | None) -> str:
    return (text or "").lower()


def _matches(task: Task, query: TaskQuery, search: str, category: str) -> bool:
    if query.status == StatusFilter.ACTIVE and task.completed:
        return False
    if query.status == StatusFilter.COMPLETED and not task.completed:
        return False
    if category and _normalize(task.category) != category:
        return False
    if search and not (
        search in _normalize(task.title) or search in _normalize(task.description)
    ):
        return False
    return True


def _sorted(tasks: list[Task], mode: SortMode) -> list[Task]:
    # sorted() is stable, also with reverse=True, so ties keep input order.
    if mode == SortMode.CREATED_ASC:
        return sorted(tasks, key=lambda t: t.created)
    if mode == SortMode.DUE_ASC:
        return sorted(tasks, key=lambda t: (t.due is None, t.due or ""))
    if mode == SortMode.DUE_DESC:
        # Dated tasks first (True sorts above False when reversed).
        return sorted(tasks, key=lambda t: (t.due is not None, t.due or ""), reverse=True)
    return sorted(tasks, key=lambda t: t.created, reverse=True)


def project(tasks: Iterable[Task], query: TaskQuery | None = None) -> list[Task]:
    """Filter, search and sort tasks for display.

    Predicates are ANDed: status, then category (case-insensitive equality),
    then search text (case-insensitive substring of title or description).
    Undated tasks always sort last under both due-date orders.

    Args:
        tasks: Task collection in insertion order
        query: Projection parameters; defaults to all tasks, newest first

    Returns:
        New list of the matching tasks
    """
    query = query or TaskQuery()
    search = _normalize(query.search)
    category = _normalize(query.category)
    kept = [t for t in tasks if _matches(t, query, search, category)]
    return _sorted(kept, query.sort)


def derive_categories(tasks: Iterable[Task]) -> list[str]:
    """Distinct non-empty categories, compared case-sensitively, sorted."""
    return sorted({t.category for t in tasks if t.category})


def _today_iso(today: date | str | None) -> str:
    if today is None:
        return date.today().isoformat()
    if isinstance(today, date):
        return today.isoformat()
    return today


def is_overdue(task: Task, today: date | str | None = None) -> bool:
    """Whether an incomplete task's due date lies before ``today``.

    ``YYYY-MM-DD`` strings compare chronologically as plain strings.
    """
    if not task.due or task.completed:
        return False
    return task.due < _today_iso(today)


def summarize(tasks: Iterable[Task]) -> TaskCounts:
    """Count all, pending and completed tasks."""
    total = completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return TaskCounts(total=total, pending=total - completed, completed=completed)
