"""Data management commands (export, import)."""

from pathlib import Path

import typer
from rich.prompt import Confirm

from todolist_cli.services.config_service import get_task_store
from todolist_cli.services.transfer_codec import EXPORT_FILENAME
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.formatters import format_info, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Data management commands")


@app.command("export")
@command_wrapper
def export_data(
    output: str = typer.Option(
        EXPORT_FILENAME,
        "--output",
        "-o",
        help="Output file path, or - for standard output",
    ),
) -> None:
    """
    Export all tasks to a JSON backup.

    Examples:
        todolist data export
        todolist data export --output backup.json
        todolist data export -o - > backup.json
    """
    store = get_task_store()
    document = store.export_document()

    if output == "-":
        print(document)
        return

    output_path = Path(output)
    try:
        output_path.write_text(document + "\n", encoding="utf-8")
    except OSError as e:
        raise AppError(f"Cannot write {output_path}: {e}") from e
    format_success(f"Exported {len(store)} task(s) to {output_path}")


@app.command("import")
@command_wrapper
def import_data(
    input_file: Path = typer.Argument(..., help="JSON backup to import"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Replace all tasks with the contents of a JSON backup.

    Missing fields are filled in: tasks without an id get a new one, titles
    are cut to 200 characters and missing creation times become now.
    """
    try:
        document = input_file.read_bytes()
    except OSError as e:
        raise AppError(f"Cannot read {input_file}: {e}") from e

    store = get_task_store()
    if (
        len(store)
        and not yes
        and not Confirm.ask(f"Replace {len(store)} existing task(s)?", default=False)
    ):
        format_info("Cancelled")
        return

    tasks = store.import_document(document)
    format_success(f"Import successful: {len(tasks)} task(s)")
