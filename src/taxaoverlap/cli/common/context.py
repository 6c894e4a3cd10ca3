"""
CLI Context Management Module

Global CLI state as a Pydantic model held in a ContextVar, so every
Typer command reads the parsed global options the same way.

The context includes:
- log_level: Logging level override (enum-based, optional)
- json_output: JSON output mode (bool)
- config_path: Explicit configuration file (optional)
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        log_level: Logging level; None defers to the configuration
        json_output: Whether to output in JSON format
        config_path: Configuration file given on the command line
    """

    log_level: LogLevel | None = Field(
        default=None,
        description="Logging level override",
    )

    json_output: bool = Field(
        default=False,
        description="Whether to output in JSON format",
    )

    config_path: str | None = Field(
        default=None,
        description="Explicit TOML configuration file",
    )

    def get_effective_log_level(self, configured: str) -> str:
        """Log level from the command line, else the configured one."""
        if self.log_level is not None:
            return self.log_level.value
        return configured

    def is_json_output_enabled(self) -> bool:
        """Check if JSON output is enabled."""
        return self.json_output


# Global context variable for thread-safe access
cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Returns:
        CliContext: Current CLI context, a default one when unset
    """
    context = cli_context_var.get()
    if context is None:
        return CliContext()
    return context


def set_cli_context(context: CliContext) -> None:
    """Set the current CLI context."""
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Clear the current CLI context."""
    cli_context_var.set(None)
