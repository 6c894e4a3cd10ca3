"""Cache configuration model.

Governs how long the fetched reference pool is trusted before an
automatic refresh goes back to TMDB.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from taxaoverlap.shared.constants import Cache


class CacheSettings(BaseModel):
    """Reference pool cache configuration."""

    max_age_days: int = Field(
        default=Cache.MAX_AGE_DAYS,
        gt=0,
        description="Days a cached reference pool stays fresh",
    )

    @property
    def max_age_ms(self) -> int:
        """Maximum pool age in milliseconds."""
        return self.max_age_days * Cache.MS_PER_DAY


__all__ = ["CacheSettings"]
