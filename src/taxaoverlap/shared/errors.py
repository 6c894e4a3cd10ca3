"""TAXA-overlap Error Handling Module

This module defines the error handling system for TAXA-overlap, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- User-friendly Messages: Every error renders as a single displayable line
- Proper Exception Chaining: Original exceptions are preserved

Malformed provider payloads never raise: missing fields are defaulted and
broken entries are skipped by the parsers, so there is no parsing error here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for TAXA-overlap.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Credential errors
    NO_CREDENTIAL = "NO_CREDENTIAL"

    # Provider (TMDB) errors
    PROVIDER_HTTP_ERROR = "PROVIDER_HTTP_ERROR"
    PROVIDER_NETWORK_ERROR = "PROVIDER_NETWORK_ERROR"
    INVALID_MEDIA_KIND = "INVALID_MEDIA_KIND"
    INVALID_SORT_MODE = "INVALID_SORT_MODE"

    # Storage errors
    STORAGE_ERROR = "STORAGE_ERROR"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"

    # CLI errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so contexts can be logged as JSON without leaking
    arbitrary objects such as sessions or credentials.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict, always including an additional_data key."""
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class TaxaOverlapError(Exception):
    """Base exception class for all TAXA-overlap errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize TaxaOverlapError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(TaxaOverlapError):
    """Domain-specific errors.

    Raised when a caller violates a rule of the overlap domain, for
    example by asking for an unknown media kind or sort mode.
    """


class InfrastructureError(TaxaOverlapError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems
    like the TMDB API or the local key-value store.
    """


class ApplicationError(TaxaOverlapError):
    """Application-level errors (configuration, command handling)."""


class SecurityError(TaxaOverlapError):
    """Security-related errors such as a missing credential."""


class NoCredentialError(SecurityError):
    """Raised when an operation needs a TMDB credential and none is set.

    The operation is aborted before any network call is made.
    """

    def __init__(self, operation: str | None = None) -> None:
        super().__init__(
            ErrorCode.NO_CREDENTIAL,
            "Enter your TMDB API key or Bearer token first.",
            ErrorContext(operation=operation),
        )


class ProviderHttpError(InfrastructureError):
    """Raised for any non-2xx response from TMDB.

    The raw response body is kept verbatim in the message so it can be
    shown to the user as-is. No retry is attempted.

    Attributes:
        status: HTTP status code
        body: Raw response body text
    """

    def __init__(self, status: int, body: str, endpoint: str | None = None) -> None:
        additional_data: dict[str, PrimitiveContextValue] = {"status": status}
        if endpoint:
            additional_data["endpoint"] = endpoint
        super().__init__(
            ErrorCode.PROVIDER_HTTP_ERROR,
            f"TMDB error {status}: {body}",
            ErrorContext(operation="get_json", additional_data=additional_data),
        )
        self.status = status
        self.body = body


class ProviderNetworkError(InfrastructureError):
    """Raised when a request to TMDB fails before an HTTP status is received."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        original_error: Exception | None = None,
        reason: str | None = None,
    ) -> None:
        additional_data: dict[str, PrimitiveContextValue] = {}
        if endpoint:
            additional_data["endpoint"] = endpoint
        if reason:
            additional_data["reason"] = reason
        super().__init__(
            ErrorCode.PROVIDER_NETWORK_ERROR,
            message,
            ErrorContext(operation="get_json", additional_data=additional_data or None),
            original_error,
        )


class CliError(ApplicationError):
    """CLI-specific error with an exit code for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        message,
        context,
        original_error,
        command,
        exit_code,
    )
