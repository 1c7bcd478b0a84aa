"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from todolist_cli.models import (
    PersistenceError,
    TaskImportError,
    TaskNotFoundError,
    TaskValidationError,
)
from todolist_cli.utils import exit_codes
from todolist_cli.utils.logger import get_logger
from todolist_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


_ERROR_MAP: list[tuple[type[Exception], str, int]] = [
    (TaskValidationError, "{}", exit_codes.ERROR_INVALID_ARGS),
    (TaskNotFoundError, "{}", exit_codes.ERROR_NOT_FOUND),
    (TaskImportError, "Import failed: {}", exit_codes.ERROR_IMPORT),
    (PersistenceError, "Storage error: {}", exit_codes.ERROR_PERSISTENCE),
    (AppError, "{}", exit_codes.ERROR_GENERAL),
]


def _classify(error: Exception) -> tuple[str, int] | None:
    for error_type, template, code in _ERROR_MAP:
        if isinstance(error, error_type):
            exit_code = getattr(error, "exit_code", code)
            return template.format(error), exit_code
    return None


def command_wrapper(func: Callable):
    """Wrap a command with logging and mapping of domain errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except typer.Exit:
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            known = _classify(e)
            if known is None:
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s\n%s",
                    cmd,
                    elapsed,
                    exit_codes.get_exit_code_name(exit_codes.ERROR_GENERAL),
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

            message, code = known
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                exit_codes.get_exit_code_name(code),
                message,
            )
            format_error(message)
            raise typer.Exit(code=code) from e

    return wrapper
