"""Error handling for CLI commands."""

import sys
import traceback
from contextlib import contextmanager
from typing import Iterator, Optional

import click
from pydantic import ValidationError

from transport_billing.cli.utils.formatters import format_error, format_warning
from transport_billing.stores.record_store import RecordNotFoundError, StoreError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    exit_code = 255
    title = "Error"

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    exit_code = 1
    title = "Configuration Error"


class DataValidationError(CLIError):
    """A memo or invoice failed validation and was not saved."""

    exit_code = 4
    title = "Data Validation Error"


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an error to the user and choose the exit code.

    Exit codes:
        1: configuration, 2: store failure, 3: record not found,
        4: invalid input or validation failure, 130: cancelled,
        255: unexpected

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code
    """
    if isinstance(error, CLIError):
        click.echo(format_error(f"{error.title}: {error.message}"))
        if error.recovery_hint:
            click.echo(format_warning(f"Hint: {error.recovery_hint}"))
        return error.exit_code

    # RecordNotFoundError is a StoreError; check it first
    if isinstance(error, RecordNotFoundError):
        click.echo(format_error(f"Not Found: {error}"))
        click.echo(
            format_warning("Hint: The record may have changed; list it again and retry")
        )
        return 3

    if isinstance(error, StoreError):
        click.echo(format_error(f"Store Error: {error}"))
        return 2

    if isinstance(error, (ValidationError, ValueError, KeyError)):
        message = error.args[0] if isinstance(error, KeyError) else str(error)
        click.echo(format_error(f"Invalid Input: {message}"))
        return 4

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))
    if debug:
        click.echo("\nFull stack trace:")
        click.echo(traceback.format_exc())
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return 255


@contextmanager
def error_handling(debug: bool = False) -> Iterator[None]:
    """
    Turn exceptions raised by a command into a message and an exit code.

    Example:
        with error_handling(app.debug):
            app.memo_workflow().delete(memo_no)
    """
    try:
        yield
    except (click.exceptions.Exit, click.ClickException):
        raise
    except Exception as e:
        sys.exit(handle_cli_error(e, debug))
