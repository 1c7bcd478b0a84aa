"""Task commands: add, edit, done, undo, delete, list and bulk actions."""

from datetime import datetime

import typer
from rich.prompt import Confirm

from todolist_cli.models import SortMode, StatusFilter, TaskQuery, TaskUpdate
from todolist_cli.services.config_service import get_config_service, get_task_store
from todolist_cli.services.view_projector import project, summarize
from todolist_cli.utils import exit_codes
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_info,
    format_output,
    format_success,
    format_warning,
)

from .decorators import AppError, command_wrapper

DATE_FORMATS = ["%Y-%m-%d"]


def _iso_date(value: datetime | None) -> str | None:
    return value.date().isoformat() if value is not None else None


@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Details"),
    category: str = typer.Option("", "--category", "-c", help="Category name"),
    due: datetime | None = typer.Option(
        None, "--due", formats=DATE_FORMATS, help="Deadline (YYYY-MM-DD)"
    ),
) -> None:
    """Create a new task."""
    store = get_task_store()
    task = store.create_task(
        title, description=description, category=category, due=_iso_date(due)
    )
    format_success(f"Task added: {task.title} [{task.id}]")


@command_wrapper
def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New details"
    ),
    category: str | None = typer.Option(None, "--category", "-c", help="New category"),
    due: datetime | None = typer.Option(
        None, "--due", formats=DATE_FORMATS, help="New deadline (YYYY-MM-DD)"
    ),
    no_due: bool = typer.Option(False, "--no-due", help="Remove the deadline"),
) -> None:
    """Edit fields of an existing task."""
    if due is not None and no_due:
        raise AppError("Use either --due or --no-due", exit_codes.ERROR_INVALID_ARGS)

    fields: dict = {
        name: value
        for name, value in (
            ("title", title),
            ("description", description),
            ("category", category),
            ("due", _iso_date(due)),
        )
        if value is not None
    }
    if no_due:
        fields["due"] = None
    if not fields:
        raise AppError("Nothing to update", exit_codes.ERROR_INVALID_ARGS)

    task = get_task_store().update_task(task_id, TaskUpdate(**fields))
    format_success(f"Task updated: {task.title}")


@command_wrapper
def complete_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task as completed."""
    task = get_task_store().update_task(task_id, completed=True)
    format_success(f"Completed: {task.title}")


@command_wrapper
def reopen_task(task_id: str = typer.Argument(..., help="Task ID")) -> None:
    """Mark a completed task as active again."""
    task = get_task_store().update_task(task_id, completed=False)
    format_success(f"Reopened: {task.title}")


@command_wrapper
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    if not yes and not Confirm.ask("Delete this task?", default=False):
        format_info("Cancelled")
        return
    if get_task_store().delete_task(task_id):
        format_success(f"Task deleted: {task_id}")
    else:
        format_warning(f"No task with ID {task_id}")


@command_wrapper
def list_tasks(
    status: StatusFilter | None = typer.Option(
        None, "--status", "-s", case_sensitive=False, help="Completion filter"
    ),
    search: str = typer.Option("", "--search", "-q", help="Text in title or description"),
    category: str = typer.Option("", "--category", "-c", help="Category (any case)"),
    sort: SortMode | None = typer.Option(
        None, "--sort", case_sensitive=False, help="Sort order"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help=f"Output format: {', '.join(OUTPUT_FORMATS)}"
    ),
) -> None:
    """List tasks with filters, search and sorting."""
    config = get_config_service().config
    output_format = output or config.output.format
    if output_format not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format: {output_format}", exit_codes.ERROR_INVALID_ARGS
        )

    query = TaskQuery(
        status=status or config.view.default_status,
        search=search,
        category=category,
        sort=sort or config.view.default_sort,
    )
    tasks = get_task_store().list_tasks()
    format_output(project(tasks, query), summarize(tasks), output_format)


@command_wrapper
def complete_all() -> None:
    """Mark every task as completed."""
    changed = get_task_store().set_completed_for_all(True)
    format_success(f"Marked {changed} task(s) as completed")


@command_wrapper
def reopen_all() -> None:
    """Mark every task as active."""
    changed = get_task_store().set_completed_for_all(False)
    format_success(f"Reopened {changed} task(s)")


@command_wrapper
def clear_completed(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove all completed tasks."""
    store = get_task_store()
    if not any(t.completed for t in store):
        format_info("No completed tasks")
        return
    if not yes and not Confirm.ask("Clear all completed tasks?", default=False):
        format_info("Cancelled")
        return
    removed = store.clear_completed()
    format_success(f"Removed {removed} completed task(s)")


@command_wrapper
def list_categories() -> None:
    """Show the categories in use."""
    categories = get_task_store().categories()
    console = get_console()
    if not categories:
        console.print("[yellow]No categories[/yellow]")
        return
    for name in categories:
        console.print(name, markup=False)
