"""
JSON Output Formatter for the TAXA-overlap CLI

Produces the machine-readable output used by every command when the
--json flag is given.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "search", "check")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(
        ...     success=True,
        ...     command="pool status",
        ...     data={"people": 120, "language": "da-DK"}
        ... )
    """
    if errors is None:
        errors = []
    if warnings is None:
        warnings = []

    # If there are errors, success should be False
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": safe_json_serialize(data),
        "errors": errors,
        "warnings": warnings,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )
    except TypeError as e:
        # If serialization fails, return an error response
        error_data = {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "data": None,
            "errors": [f"JSON serialization failed: {e!s}"],
            "warnings": [],
        }
        return orjson.dumps(
            error_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )


def safe_json_serialize(obj: Any) -> Any:  # noqa: PLR0911
    """
    Convert an object into JSON-serializable data.

    Dataclasses (domain models) become dicts without their raw payloads,
    enums become their values.
    """
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [safe_json_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): safe_json_serialize(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: safe_json_serialize(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
            if f.repr
        }
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    return str(obj)
