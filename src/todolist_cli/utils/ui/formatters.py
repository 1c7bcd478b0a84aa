"""Output formatters for task lists."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todolist_cli.models import Task, TaskCounts
from todolist_cli.services.view_projector import is_overdue

from .console import get_console

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def due_badge(task: Task, today: date | str | None = None) -> Text | None:
    """Badge for a task's deadline, red when overdue."""
    if not task.due:
        return None
    if is_overdue(task, today):
        return Text(f"Overdue: {task.due}", style="bold red")
    return Text(f"Due: {task.due}", style="cyan")


def format_task_item(task: Task, today: date | str | None = None) -> Text:
    """Render one task as a single line."""
    icon = STATUS_ICONS["completed" if task.completed else "open"]
    line = Text(f"{icon} ")
    line.append(task.title or "(untitled)", style="dim strike" if task.completed else "bold")
    if task.category:
        line.append(f" #{task.category}", style="blue")
    badge = due_badge(task, today)
    if badge is not None:
        line.append(" • ")
        line.append_text(badge)
    line.append(f"  [{task.id}]", style="dim")
    return line


def format_tasks_pretty(
    tasks: Sequence[Task], counts: TaskCounts, today: date | str | None = None
) -> None:
    """Print tasks as an icon list followed by the counts footer."""
    console = get_console()
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
    for task in tasks:
        console.print(format_task_item(task, today))
        if task.description:
            console.print(Text(f"    {task.description}", style="dim"))
    console.print()
    console.print(Text(counts.label(), style="dim"))


def format_tasks_table(
    tasks: Sequence[Task], counts: TaskCounts, today: date | str | None = None
) -> None:
    """Print tasks as a Rich table."""
    console = get_console()
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        console.print(Text(counts.label(), style="dim"))
        return

    table = Table(show_header=True, header_style="bold magenta", caption=counts.label())
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Done", justify="center")
    table.add_column("Title")
    table.add_column("Category", style="blue")
    table.add_column("Due")
    for task in tasks:
        table.add_row(
            task.id,
            "✓" if task.completed else "",
            task.title,
            task.category,
            due_badge(task, today) or "",
        )
    console.print(table)


def format_output(
    tasks: Sequence[Task],
    counts: TaskCounts,
    output_format: str = "pretty",
    today: date | str | None = None,
) -> None:
    """Format and display a projection in the requested format."""
    if output_format == "json":
        print(json.dumps([t.model_dump(mode="json") for t in tasks], indent=2, ensure_ascii=False))
    elif output_format == "yaml":
        print(
            yaml.safe_dump(
                [t.model_dump(mode="json") for t in tasks],
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            ),
            end="",
        )
    elif output_format == "table":
        format_tasks_table(tasks, counts, today)
    else:
        format_tasks_pretty(tasks, counts, today)
