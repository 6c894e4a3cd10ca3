"""Logging and storage configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from taxaoverlap.shared.constants import Application


def _default_store_path() -> str:
    return str(Path.home() / Application.HOME_DIR / "store.db")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    console_output: bool = Field(
        default=True,
        description="Use Rich console output (JSON lines when disabled)",
    )


class StorageSettings(BaseModel):
    """Local key-value store configuration."""

    path: str = Field(
        default_factory=_default_store_path,
        description="SQLite file holding credential, language and pool",
    )


__all__ = [
    "LoggingSettings",
    "StorageSettings",
]
