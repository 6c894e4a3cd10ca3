"""Tests for settings models and loading."""

import os

import pytest

from taxaoverlap.config import Settings, TMDBSettings, get_config, load_settings, reload_config
from taxaoverlap.shared.errors import ApplicationError, ErrorCode


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run in an empty directory with an empty home and no TAXA_ variables."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in list(os.environ):
        if name.startswith("TAXA_"):
            monkeypatch.delenv(name)
    return tmp_path


class TestSettingsModels:
    """Test defaults and validation of the settings models."""

    def test_defaults(self, isolated):
        """Test the built-in defaults."""
        settings = Settings()

        assert settings.api.tmdb.base_url == "https://api.themoviedb.org/3"
        assert settings.api.tmdb.reference_title_id == 51261
        assert settings.api.tmdb.default_language == "da-DK"
        assert settings.cache.max_age_days == 30
        assert settings.cache.max_age_ms == 30 * 24 * 60 * 60 * 1000
        assert settings.logging.level == "WARNING"
        assert settings.storage.path.endswith("store.db")

    def test_trailing_slash_is_stripped(self):
        """Test that base URLs are normalized."""
        assert TMDBSettings(base_url="https://example.org/3/").base_url == "https://example.org/3"

    def test_environment_override(self, isolated, monkeypatch):
        """Test nested environment variables."""
        monkeypatch.setenv("TAXA_API__TMDB__TIMEOUT", "20")
        monkeypatch.setenv("TAXA_CACHE__MAX_AGE_DAYS", "7")

        settings = Settings()

        assert settings.api.tmdb.timeout == 20
        assert settings.cache.max_age_days == 7

    def test_toml_round_trip(self, isolated):
        """Test saving and loading a TOML file."""
        path = isolated / "out" / "config.toml"
        settings = Settings()
        settings.cache.max_age_days = 3
        settings.to_toml_file(path)

        loaded = Settings.from_toml_file(path)

        assert loaded.cache.max_age_days == 3


class TestLoadSettings:
    """Test load_settings."""

    def test_without_file(self, isolated):
        """Test that defaults are used when no file exists."""
        assert load_settings().api.tmdb.reference_title_id == 51261

    def test_default_location(self, isolated):
        """Test that ./config.toml is picked up."""
        (isolated / "config.toml").write_text("[cache]\nmax_age_days = 2\n", encoding="utf-8")

        assert load_settings().cache.max_age_days == 2

    def test_explicit_missing_file(self, isolated):
        """Test that an explicit but missing file is an error."""
        with pytest.raises(ApplicationError) as exc_info:
            load_settings(isolated / "nope.toml")

        assert exc_info.value.code is ErrorCode.CONFIG_MISSING

    def test_invalid_toml(self, isolated):
        """Test that a syntax error is reported as a configuration error."""
        path = isolated / "bad.toml"
        path.write_text("[cache\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.code is ErrorCode.CONFIG_ERROR

    def test_invalid_value(self, isolated):
        """Test that a validation error names the offending key."""
        path = isolated / "bad.toml"
        path.write_text("[cache]\nmax_age_days = 0\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(path)

        assert exc_info.value.context.additional_data == {"config_key": "cache.max_age_days"}

    def test_dotenv_is_loaded(self, isolated, monkeypatch):
        """Test that a .env file in the working directory feeds settings."""
        (isolated / ".env").write_text("TAXA_LOGGING__LEVEL=DEBUG\n", encoding="utf-8")

        try:
            assert load_settings().logging.level == "DEBUG"
        finally:
            os.environ.pop("TAXA_LOGGING__LEVEL", None)


class TestSettingsLoader:
    """Test the cached settings instance."""

    def test_get_config_is_cached(self, isolated):
        """Test that get_config returns the same instance."""
        assert get_config() is get_config()

    def test_reload_config(self, isolated):
        """Test that reload_config replaces the cached instance."""
        path = isolated / "custom.toml"
        path.write_text('[api.tmdb]\ndefault_language = "en-US"\n', encoding="utf-8")
        first = get_config()

        reloaded = reload_config(path)

        assert reloaded is not first
        assert get_config() is reloaded
        assert reloaded.api.tmdb.default_language == "en-US"
