"""Ranking of overlap lists.

Ranking is a separate stage from matching: changing the sort mode
re-orders an existing match list and never re-matches. Every mode ends
with the name, so equal statistics still give a deterministic order, and
``sorted`` is stable, so re-ranking a ranked list is a no-op.

Sort modes:
- reference: most reference-pool episodes first, then the checked-title
  statistic (episodes for series, billing order for movies), then name
- here: checked-title statistic first, then reference episodes, then name
- name: Danish alphabetical order
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable, Iterable

from taxaoverlap.services.media_strategies import MediaStrategy, get_strategy
from taxaoverlap.shared.errors import DomainError, ErrorCode, ErrorContext
from taxaoverlap.shared.models import MatchEntry, MediaKind, SortMode

logger = logging.getLogger(__name__)

# Danish letters sort after z in the order æ, ø, å. Private-use code
# points stand in for them in the primary key.
_AE = "\ue000"
_OE = "\ue001"
_AA = "\ue002"

_PRIMARY_LETTERS = {
    "æ": _AE,
    "ä": _AE,
    "ø": _OE,
    "ö": _OE,
    "ő": _OE,
    "å": _AA,
    "ü": "y",
    "ű": "y",
    "œ": "oe",
    "ð": "d",
    "đ": "d",
    "ß": "ss",
}


def _strip_marks(char: str) -> str:
    decomposed = unicodedata.normalize("NFD", char)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def danish_collation_key(text: str) -> tuple[str, str, tuple[int, ...], str]:
    """Sort key approximating Danish collation.

    Levels compared in order: base letters (with æ, ø, å after z and
    "aa" read as å), accents, case with upper case first, and the raw
    string as the last tiebreak.
    """
    normalized = unicodedata.normalize("NFC", text or "")
    folded = normalized.casefold().replace("aa", "å")

    primary = "".join(_PRIMARY_LETTERS.get(ch) or _strip_marks(ch) for ch in folded)
    secondary = unicodedata.normalize("NFD", folded)
    tertiary = tuple(0 if ch.isupper() else 1 for ch in normalized)

    return primary, secondary, tertiary, normalized


def _name_key(match: MatchEntry) -> tuple[str, str, tuple[int, ...], str]:
    return danish_collation_key(match.name)


def sort_key_for(
    media_kind: MediaKind | str,
    sort_mode: SortMode | str,
) -> Callable[[MatchEntry], tuple]:
    """Build the sort key function of a ranking mode.

    Raises:
        DomainError: If the media kind or sort mode is unknown
    """
    strategy: MediaStrategy = get_strategy(media_kind)
    mode = coerce_sort_mode(sort_mode)

    if mode is SortMode.NAME:
        return lambda m: (_name_key(m),)

    if mode is SortMode.HERE:
        return lambda m: (
            strategy.here_sort_key(m),
            -(m.reference_episodes or 0),
            _name_key(m),
        )

    return lambda m: (
        -(m.reference_episodes or 0),
        strategy.here_sort_key(m),
        _name_key(m),
    )


def coerce_sort_mode(sort_mode: SortMode | str) -> SortMode:
    """Parse a sort mode.

    Raises:
        DomainError: If the value is not a known sort mode
    """
    try:
        return SortMode(sort_mode)
    except ValueError as e:
        raise DomainError(
            ErrorCode.INVALID_SORT_MODE,
            f"Unknown sort mode: {sort_mode!r}",
            ErrorContext(
                operation="rank",
                additional_data={"sort_mode": str(sort_mode)},
            ),
            e,
        ) from e


def rank(
    matches: Iterable[MatchEntry],
    media_kind: MediaKind | str,
    sort_mode: SortMode | str = SortMode.REFERENCE,
) -> list[MatchEntry]:
    """Order a match list.

    Args:
        matches: Matches to order; the input is not modified
        media_kind: Kind of the checked title
        sort_mode: Ranking mode (default: reference)

    Returns:
        New list with the same entries in ranked order
    """
    ranked = sorted(matches, key=sort_key_for(media_kind, sort_mode))
    logger.debug("Ranked %d matches by %s", len(ranked), SortMode(sort_mode).value)
    return ranked


__all__ = [
    "coerce_sort_mode",
    "danish_collation_key",
    "rank",
    "sort_key_for",
]
