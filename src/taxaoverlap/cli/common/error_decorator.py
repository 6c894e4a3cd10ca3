"""CLI error handling decorator.

Wraps Typer command functions so each one reports failures through
``handle_cli_error`` instead of repeating try/except blocks.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import click
import typer

from taxaoverlap.cli.common.context import get_cli_context
from taxaoverlap.cli.common.error_handler import handle_cli_error

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(command: str) -> Callable[[F], F]:
    """Decorator for standardized CLI error handling.

    Args:
        command: Command name used in messages and JSON output

    Returns:
        Decorated function exiting with the mapped exit code on failure

    Example:
        >>> @handle_cli_errors("search")
        ... def search_command(query: str) -> None:
        ...     service.search(query)  # No try-except needed!
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            # Exit and usage errors belong to Typer/Click
            except (click.exceptions.Exit, click.ClickException):
                raise
            except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
                exit_code = handle_cli_error(
                    e,
                    command,
                    json_output=get_cli_context().is_json_output_enabled(),
                )
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
