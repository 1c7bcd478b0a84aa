"""Main entry point for todolist-cli."""

import typer

from todolist_cli import __version__
from todolist_cli.commands import config_command, data_command, tasks_command
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import get_console

app = typer.Typer(
    name="todolist",
    cls=SuggestingGroup,
    help="Manage a personal task list from the command line",
    no_args_is_help=True,
)

# Task commands (verb-first)
app.command("add")(tasks_command.add_task)
app.command("edit")(tasks_command.edit_task)
app.command("done")(tasks_command.complete_task)
app.command("undo")(tasks_command.reopen_task)
app.command("delete")(tasks_command.delete_task)
app.command("list")(tasks_command.list_tasks)
app.command("complete-all")(tasks_command.complete_all)
app.command("reopen-all")(tasks_command.reopen_all)
app.command("clear-completed")(tasks_command.clear_completed)
app.command("categories")(tasks_command.list_categories)

# Subcommand groups
app.add_typer(data_command.app, name="data", help="Data management (export, import)")
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]todolist-cli[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
