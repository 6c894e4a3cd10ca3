"""Media kind strategies.

Series and movies differ in where their cast comes from and in what a
cast entry carries: series credits are aggregated across episodes and
expose episode counts, movie credits carry a billing order instead.
Each kind gets one strategy object so neither field leaks into the
other kind's logic.

Design:
- MediaStrategy (ABC): interface used by the client, matcher and ranker
- SeriesStrategy: /tv endpoints, episode counts
- MovieStrategy: /movie endpoints, billing order
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Any

from taxaoverlap.services.reference_pool import (
    character_of,
    coerce_count,
    episodes_field,
    optional_count,
    raw_roles,
    role_from_raw,
    tmdb_id_of,
)
from taxaoverlap.shared.constants import (
    Ranking,
    TMDBCreditKeys,
    TMDBMediaTypes,
    TMDBResponseKeys,
)
from taxaoverlap.shared.errors import DomainError, ErrorCode, ErrorContext
from taxaoverlap.shared.models import MatchEntry, MediaKind, Role, TitleSummary

logger = logging.getLogger(__name__)


class MediaStrategy(ABC):
    """Behaviour that depends on the kind of title being checked.

    Subclasses must implement:
        - here_roles(): roles of a cast entry of the checked title
        - here_stats(): (here_episodes, here_order) of a cast entry
        - here_sort_key(): ascending sort key of the title-side statistic
    """

    kind: MediaKind
    media_type: str
    _title_keys: tuple[str, str]
    _date_key: str

    def search_path(self) -> str:
        """Path of the TMDB search endpoint for this kind."""
        return f"/search/{self.media_type}"

    @abstractmethod
    def credits_path(self, title_id: int) -> str:
        """Path of the credits endpoint of a title."""
        ...

    @abstractmethod
    def here_roles(self, raw_person: dict[str, Any]) -> tuple[Role, ...]:
        """Roles a cast entry played in the checked title."""
        ...

    @abstractmethod
    def here_stats(self, raw_person: dict[str, Any]) -> tuple[int, int | None]:
        """Return (here_episodes, here_order) for a cast entry."""
        ...

    @abstractmethod
    def here_sort_key(self, match: MatchEntry) -> int:
        """Ascending sort key for the checked-title statistic of a match."""
        ...

    def title_summary(self, raw_result: Any) -> TitleSummary | None:
        """Convert one raw search result into a TitleSummary.

        Args:
            raw_result: Entry of a search response's ``results`` array

        Returns:
            TitleSummary, or None when the entry has no usable id
        """
        title_id = tmdb_id_of(raw_result)
        if title_id is None:
            logger.debug("Skipping %s search result without id", self.kind.value)
            return None

        primary, fallback = self._title_keys
        title = raw_result.get(primary) or raw_result.get(fallback) or ""
        date = raw_result.get(self._date_key)
        year = str(date)[:4] if date else ""

        return TitleSummary(
            id=title_id,
            title=str(title),
            year=year,
            poster_path=raw_result.get(TMDBResponseKeys.POSTER_PATH) or None,
            number_of_episodes=self._episode_total(raw_result),
            payload=raw_result,
        )

    def _episode_total(self, raw_result: dict[str, Any]) -> int | None:
        return None


class SeriesStrategy(MediaStrategy):
    """Strategy for series (TMDB ``tv``)."""

    kind = MediaKind.SERIES
    media_type = TMDBMediaTypes.TV
    _title_keys = (TMDBResponseKeys.NAME, TMDBResponseKeys.ORIGINAL_NAME)
    _date_key = TMDBResponseKeys.FIRST_AIR_DATE

    def credits_path(self, title_id: int) -> str:
        return f"/tv/{title_id}/aggregate_credits"

    def here_roles(self, raw_person: dict[str, Any]) -> tuple[Role, ...]:
        roles = raw_roles(raw_person)
        if not roles and raw_person.get(TMDBCreditKeys.CHARACTER):
            return (
                Role(
                    character=character_of(raw_person),
                    episodes=optional_count(raw_person.get(TMDBCreditKeys.EPISODE_COUNT)),
                ),
            )
        return tuple(role_from_raw(r) for r in roles)

    def here_stats(self, raw_person: dict[str, Any]) -> tuple[int, int | None]:
        # Counted from the nested roles only
        episodes = sum(
            coerce_count(episodes_field(r)) for r in raw_roles(raw_person) if isinstance(r, dict)
        )
        return episodes, None

    def here_sort_key(self, match: MatchEntry) -> int:
        return -(match.here_episodes or 0)

    def _episode_total(self, raw_result: dict[str, Any]) -> int | None:
        return optional_count(raw_result.get(TMDBResponseKeys.NUMBER_OF_EPISODES)) or None


class MovieStrategy(MediaStrategy):
    """Strategy for movies."""

    kind = MediaKind.MOVIE
    media_type = TMDBMediaTypes.MOVIE
    _title_keys = (TMDBResponseKeys.TITLE, TMDBResponseKeys.ORIGINAL_TITLE)
    _date_key = TMDBResponseKeys.RELEASE_DATE

    def credits_path(self, title_id: int) -> str:
        return f"/movie/{title_id}/credits"

    def here_roles(self, raw_person: dict[str, Any]) -> tuple[Role, ...]:
        character = raw_person.get(TMDBCreditKeys.CHARACTER)
        if not character:
            roles = raw_roles(raw_person)
            if roles and isinstance(roles[0], dict):
                character = roles[0].get(TMDBCreditKeys.CHARACTER)
        return (Role(character=str(character or Ranking.UNKNOWN_CHARACTER)),)

    def here_stats(self, raw_person: dict[str, Any]) -> tuple[int, int | None]:
        order = raw_person.get(TMDBCreditKeys.ORDER)
        if isinstance(order, (int, float)) and not isinstance(order, bool) and math.isfinite(order):
            return 0, int(order)
        return 0, Ranking.UNKNOWN_ORDER

    def here_sort_key(self, match: MatchEntry) -> int:
        # None and 0 both count as unknown billing and sort last
        return match.here_order or Ranking.UNKNOWN_ORDER


_STRATEGIES: dict[MediaKind, MediaStrategy] = {
    MediaKind.SERIES: SeriesStrategy(),
    MediaKind.MOVIE: MovieStrategy(),
}


def get_strategy(kind: MediaKind | str) -> MediaStrategy:
    """Return the strategy for a media kind.

    Raises:
        DomainError: If the kind is not "series" or "movie"
    """
    try:
        return _STRATEGIES[MediaKind(kind)]
    except ValueError as e:
        raise DomainError(
            ErrorCode.INVALID_MEDIA_KIND,
            f"Unknown media kind: {kind!r}",
            ErrorContext(
                operation="get_strategy",
                additional_data={"media_kind": str(kind)},
            ),
            e,
        ) from e


__all__ = [
    "MediaStrategy",
    "MovieStrategy",
    "SeriesStrategy",
    "get_strategy",
]
