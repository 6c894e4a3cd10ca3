"""
Structured logging for TAXA-overlap.

Console output goes through Rich; the optional log file (and the plain
console mode) gets one JSON object per record so errors keep their code
and context.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from taxaoverlap.shared.errors import ErrorContext, TaxaOverlapError

# Query parameters that must never reach a log line
REDACTED_QUERY_PARAMS: frozenset[str] = frozenset({"api_key"})

_REDACTED_PARAM_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(REDACTED_QUERY_PARAMS)) + r")=[^&\s'\"]+"
)


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders log records as JSON objects.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as a JSON string.

        Args:
            record: The log record

        Returns:
            JSON encoded log entry
        """
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("error_code", "context", "operation", "duration_ms", "result_info"):
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def formatException(self, ei: Any) -> str:
        return redact_text(super().formatException(ei))


def _create_rich_console() -> Console:
    """
    Create the Rich console used for log output.

    Returns:
        Console with the project log theme
    """
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_structured_logger(
    name: str = "taxaoverlap",
    level: str = "INFO",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        name: Logger name (default: "taxaoverlap")
        level: Log level name (default: "INFO")
        log_file: Optional path of a JSON log file
        use_rich_console: Use Rich for console output instead of JSON lines

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        logger.handlers.clear()

    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if use_rich_console:
        handler: logging.Handler = RichHandler(
            console=_create_rich_console(),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format="[%H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    handler.setLevel(log_level)
    logger.addHandler(handler)

    # Log files are always JSON
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: TaxaOverlapError,
    operation: str | None = None,
    additional_context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Log a TaxaOverlapError with its code and context.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name, defaults to the one in the error context
        additional_context: Extra context merged over the error's own
    """
    context_dict = error.context.safe_dict()
    context_dict.update(_context_to_dict(additional_context))

    logger.error(
        error.message,
        extra={
            "error_code": error.code.name,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error is not None,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Log successful completion of an operation.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Elapsed time in milliseconds
        result_info: Summary of the result
        context: Context information
    """
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """
    Log the start of an operation.

    Args:
        logger: Logger instance
        operation: Operation name
        context: Context information
    """
    logger.debug(
        "Starting operation '%s'",
        operation,
        extra={
            "operation": operation,
            "context": context or {},
        },
    )


def redact_url(url: str) -> str:
    """Return the URL with credential query parameters masked."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, "***" if key in REDACTED_QUERY_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


def redact_text(text: str) -> str:
    """Mask credential query parameters anywhere in free text."""
    return _REDACTED_PARAM_PATTERN.sub(r"\1=***", text)


def log_api_call(
    logger: logging.Logger,
    url: str,
    method: str = "GET",
    status_code: int | None = None,
    duration_ms: float | None = None,
) -> None:
    """
    Log a TMDB API call. The URL is redacted before it is logged.

    Args:
        logger: Logger instance
        url: Request URL
        method: HTTP method (default: "GET")
        status_code: HTTP status code, if a response was received
        duration_ms: Elapsed time in milliseconds
    """
    endpoint = redact_url(url)
    api_context: dict[str, Any] = {"endpoint": endpoint, "method": method}
    if status_code is not None:
        api_context["status_code"] = status_code
    if duration_ms is not None:
        api_context["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO
    message = f"API call to {endpoint}"
    if status_code is not None:
        if status_code >= 400:
            level = logging.ERROR
            message += f" failed with status {status_code}"
        else:
            message += f" succeeded with status {status_code}"

    logger.log(
        level,
        message,
        extra={
            "operation": "api_call",
            "context": api_context,
        },
    )
