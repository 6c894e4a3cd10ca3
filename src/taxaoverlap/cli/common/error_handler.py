"""
CLI Error Handling Utilities

Consistent error handling for all CLI commands: every failure becomes
one red line on stderr (or one JSON document with --json) and an exit
code.
"""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from taxaoverlap.cli.json_formatter import format_json_output
from taxaoverlap.shared.errors import (
    CliError,
    ErrorContext,
    TaxaOverlapError,
    create_cli_error,
)

logger = logging.getLogger(__name__)

# Exit code used when the user interrupts a command
EXIT_INTERRUPTED = 130


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: Exception,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: Exception,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    # Domain messages are already written for the user
    if isinstance(error, TaxaOverlapError):
        error_context["error_code"] = error.code.value
        return CliError(
            error.code,
            error.message,
            ErrorContext(operation=command, additional_data={"command": command}),
            error,
            command,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            original_error=error,
            exit_code=EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error,
    )


def _log_error(
    error: Exception,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, TaxaOverlapError):
        # Already logged where it was raised
        logger.debug(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"error_code": cli_error.code.name, "context": error_context},
        )
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: Exception,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        error_output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
        typer.echo(error_output.decode("utf-8"))
    else:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(cli_error.message)}")
