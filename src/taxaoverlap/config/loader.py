"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from an optional .env file
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from taxaoverlap.config.models.settings import Settings
from taxaoverlap.shared.constants import Application
from taxaoverlap.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    create_config_error,
)

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance (thread-safe).

        Returns:
            The global Settings instance, loading it if necessary.
        """
        # First check (without lock for performance)
        if self._instance is None:
            # Second check (with lock for thread-safety)
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files.

        Args:
            config_path: Optional explicit TOML file to load

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file if one exists.

    A missing file is fine: the TMDB credential is supplied at runtime,
    so nothing in the environment is mandatory.
    """
    if not env_file.exists():
        return
    load_dotenv(env_file, override=False)
    logger.debug("Loaded environment from %s", env_file)


def default_config_paths() -> list[Path]:
    """Locations searched for a TOML configuration file, in order."""
    return [
        Path("config/config.toml"),
        Path("config.toml"),
        Path.home() / Application.HOME_DIR / "config.toml",
    ]


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from TOML configuration file or environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, tries
            the default locations and falls back to environment variables.

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ApplicationError: If the configuration file is missing, unreadable
            or holds invalid values
    """
    _load_env_file()

    if config_path is None:
        config_path = next((p for p in default_config_paths() if p.exists()), None)

    try:
        if config_path is None:
            return Settings()
        return Settings.from_toml_file(config_path)
    except FileNotFoundError as e:
        raise ApplicationError(
            ErrorCode.CONFIG_MISSING,
            str(e),
            ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(config_path)},
            ),
            e,
        ) from e
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Invalid TOML in {config_path}: {e}",
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise create_config_error(
            f"Invalid configuration value for '{key}': {first['msg']}",
            config_key=key,
            operation="load_settings",
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config(config_path)


__all__ = [
    "SettingsLoader",
    "default_config_paths",
    "get_config",
    "load_settings",
    "reload_config",
]
