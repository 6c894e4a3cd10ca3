"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings, TMDBSettings
from .app_settings import LoggingSettings, StorageSettings
from .cache_settings import CacheSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "TMDBSettings",
]
