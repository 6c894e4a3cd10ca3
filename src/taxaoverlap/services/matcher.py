"""Overlap matching.

A cast member of the checked title overlaps when their TMDB person id is
a key of the reference index. Matching never invents entries: a title
whose cast shares no id with the pool yields an empty list.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from taxaoverlap.services.media_strategies import get_strategy
from taxaoverlap.services.reference_pool import raw_cast, tmdb_id_of
from taxaoverlap.shared.constants import TMDBResponseKeys
from taxaoverlap.shared.models import MatchEntry, MediaKind, PersonEntry

logger = logging.getLogger(__name__)


def match_overlap(
    target_cast: list[Any],
    index: Mapping[int, PersonEntry],
    media_kind: MediaKind | str,
) -> list[MatchEntry]:
    """Find the cast members of a title that are also in the reference pool.

    Args:
        target_cast: Raw ``cast`` array of the checked title
        index: Reference pool index (read-only snapshot)
        media_kind: Kind of the checked title

    Returns:
        MatchEntry list in the order of ``target_cast``
    """
    strategy = get_strategy(media_kind)
    matches: list[MatchEntry] = []

    for raw_person in target_cast:
        person_id = tmdb_id_of(raw_person)
        if person_id is None:
            continue
        reference = index.get(person_id)
        if reference is None:
            continue

        here_episodes, here_order = strategy.here_stats(raw_person)
        matches.append(
            MatchEntry(
                person_id=person_id,
                name=str(raw_person.get(TMDBResponseKeys.NAME) or reference.name),
                here_roles=strategy.here_roles(raw_person),
                here_episodes=here_episodes,
                here_order=here_order,
                reference_roles=reference.roles,
                reference_episodes=reference.total_episodes,
                image_path=raw_person.get(TMDBResponseKeys.PROFILE_PATH) or reference.image_path,
            )
        )

    logger.debug(
        "Matched %d of %d cast entries against %d reference people",
        len(matches),
        len(target_cast),
        len(index),
    )
    return matches


def match_credits(
    credits_payload: Any,
    index: Mapping[int, PersonEntry],
    media_kind: MediaKind | str,
) -> list[MatchEntry]:
    """Match the ``cast`` array of a raw credits response."""
    return match_overlap(raw_cast(credits_payload), index, media_kind)


__all__ = ["match_credits", "match_overlap"]
