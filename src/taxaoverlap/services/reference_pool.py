"""Reference pool index.

Turns the raw aggregate_credits payload of the reference series into a
lookup keyed by TMDB person id. Payloads are read leniently: anything
malformed is skipped or defaulted, never raised.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from taxaoverlap.shared.constants import Ranking, TMDBCreditKeys, TMDBResponseKeys
from taxaoverlap.shared.models import PersonEntry, Role

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_number(value: Any) -> float | None:
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not _is_number(value) or not math.isfinite(value):
        return None
    return value


def coerce_count(value: Any) -> int:
    """Read an episode count, treating missing or non-numeric values as 0."""
    number = _parse_number(value)
    return int(number) if number is not None else 0


def optional_count(value: Any) -> int | None:
    """Read an episode count, keeping "unknown" as None."""
    number = _parse_number(value)
    return int(number) if number is not None else None


def episodes_field(raw_role: dict[str, Any]) -> Any:
    """Raw episode count of a role: episode_count, then total_episode_count."""
    value = raw_role.get(TMDBCreditKeys.EPISODE_COUNT)
    if value is None:
        value = raw_role.get(TMDBCreditKeys.TOTAL_EPISODE_COUNT)
    return value


def character_of(raw: dict[str, Any]) -> str:
    return str(raw.get(TMDBCreditKeys.CHARACTER) or Ranking.UNKNOWN_CHARACTER)


def role_from_raw(raw_role: Any) -> Role:
    """Build a Role from one entry of a ``roles`` array."""
    if not isinstance(raw_role, dict):
        return Role(character=Ranking.UNKNOWN_CHARACTER)
    return Role(
        character=character_of(raw_role),
        episodes=optional_count(episodes_field(raw_role)),
    )


def raw_roles(raw_person: dict[str, Any]) -> list[Any]:
    roles = raw_person.get(TMDBCreditKeys.ROLES)
    return roles if isinstance(roles, list) else []


def raw_cast(payload: Any) -> list[Any]:
    """The ``cast`` array of a credits payload, or [] when absent."""
    if not isinstance(payload, dict):
        return []
    cast = payload.get(TMDBCreditKeys.CAST)
    return cast if isinstance(cast, list) else []


def tmdb_id_of(raw_entry: Any) -> int | None:
    """TMDB id of a payload entry, None when missing or unusable."""
    if not isinstance(raw_entry, dict):
        return None
    tmdb_id = raw_entry.get(TMDBResponseKeys.ID)
    # 0 is not a valid TMDB id
    if not _is_number(tmdb_id) or not tmdb_id:
        return None
    return int(tmdb_id)


def build_reference_index(raw_aggregate: Any) -> dict[int, PersonEntry]:
    """Index the reference series cast by person id.

    Args:
        raw_aggregate: Raw ``/tv/{id}/aggregate_credits`` response

    Returns:
        Mapping person id -> PersonEntry; empty for absent or malformed input
    """
    index: dict[int, PersonEntry] = {}
    skipped = 0

    for raw_person in raw_cast(raw_aggregate):
        person_id = tmdb_id_of(raw_person)
        if person_id is None:
            skipped += 1
            continue

        roles = tuple(role_from_raw(r) for r in raw_roles(raw_person))
        index[person_id] = PersonEntry(
            person_id=person_id,
            name=raw_person.get(TMDBResponseKeys.NAME) or Ranking.UNKNOWN_NAME,
            roles=roles,
            total_episodes=sum(role.episodes or 0 for role in roles),
            image_path=raw_person.get(TMDBResponseKeys.PROFILE_PATH) or None,
        )

    if skipped:
        logger.debug("Skipped %d reference cast entries without an id", skipped)

    return index


__all__ = [
    "build_reference_index",
    "character_of",
    "coerce_count",
    "episodes_field",
    "optional_count",
    "raw_cast",
    "raw_roles",
    "role_from_raw",
    "tmdb_id_of",
]
