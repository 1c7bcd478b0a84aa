"""Configuration commands."""

import json

import typer
from pydantic import BaseModel

from todolist_cli.services.config_service import get_config_service
from todolist_cli.utils import exit_codes
from todolist_cli.utils.typer_helpers import SuggestingGroup
from todolist_cli.utils.ui.console import get_console
from todolist_cli.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")


def _parse_value(raw: str):
    """Interpret JSON literals (true, 3, null); anything else stays a string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the full configuration."""
    svc = get_config_service()
    get_console().print_json(json.dumps(svc.config.model_dump(mode="json")))


@app.command("get")
@command_wrapper
def get_value(key: str = typer.Argument(..., help="Dotted key, e.g. output.format")) -> None:
    """Show one configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    if isinstance(value, BaseModel):
        get_console().print_json(json.dumps(value.model_dump(mode="json")))
    else:
        get_console().print(str(value), markup=False)


@app.command("set")
@command_wrapper
def set_value(
    key: str = typer.Argument(..., help="Dotted key, e.g. view.default_sort"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set one configuration value."""
    try:
        get_config_service().set(key, _parse_value(value))
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"{key} = {value}")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (default: everything)"),
) -> None:
    """Reset configuration to defaults."""
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"Reset {key or 'configuration'} to defaults")
