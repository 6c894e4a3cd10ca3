"""TAXA-overlap Configuration Module

Unified access to configuration models and the settings loader:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, cache, storage and logging settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import (
    APISettings,
    CacheSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    TMDBSettings,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "TMDBSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
