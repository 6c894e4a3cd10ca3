"""API configuration models (TMDB).

This module contains configuration models for the TMDB API: where it
lives, which title is the reference pool and which languages are offered.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from taxaoverlap.shared.constants import TMDB


class TMDBSettings(BaseModel):
    """TMDB API configuration.

    The credential is not part of the configuration: it is supplied by the
    user at runtime and kept in the local key-value store.
    """

    base_url: str = Field(
        default=TMDB.API_BASE_URL,
        description="Base URL of the TMDB v3 API",
    )
    image_base_url: str = Field(
        default=TMDB.IMAGE_BASE_URL,
        description="Base URL of the TMDB image CDN",
    )
    timeout: int = Field(
        default=TMDB.REQUEST_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    reference_title_id: int = Field(
        default=TMDB.REFERENCE_TITLE_ID,
        gt=0,
        description="TMDB series id whose cast is the reference pool",
    )
    default_language: str = Field(
        default=TMDB.DEFAULT_LANGUAGE,
        description="Language used until the user picks one",
    )
    supported_languages: list[str] = Field(
        default_factory=lambda: list(TMDB.SUPPORTED_LANGUAGES),
        description="Languages offered for titles",
    )

    @field_validator("base_url", "image_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class APISettings(BaseModel):
    """API configuration container."""

    tmdb: TMDBSettings = Field(
        default_factory=TMDBSettings,
        description="TMDB API configuration",
    )


__all__ = [
    "APISettings",
    "TMDBSettings",
]
