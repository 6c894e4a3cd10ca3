"""Domain types of the overlap engine.

All types are frozen dataclasses: entities are created from provider
payloads on demand and never mutated afterwards. Re-ranking produces a
new ordering of the same MatchEntry objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MediaKind(str, Enum):
    """Kind of title being checked against the reference pool."""

    SERIES = "series"
    MOVIE = "movie"


class SortMode(str, Enum):
    """Ordering policy for a match list."""

    REFERENCE = "reference"
    HERE = "here"
    NAME = "name"


@dataclass(frozen=True)
class Role:
    """One named part a person played within a title.

    Attributes:
        character: Character name, "(unknown)" when the provider gave none
        episodes: Episode count for series roles, None when unknown or for movies
    """

    character: str
    episodes: int | None = None

    def label(self) -> str:
        """Render the role as shown in listings."""
        if self.episodes:
            return f"{self.character} • {self.episodes} eps"
        return self.character


@dataclass(frozen=True)
class PersonEntry:
    """A member of the reference pool with all of their roles in it."""

    person_id: int
    name: str
    roles: tuple[Role, ...] = ()
    total_episodes: int = 0
    image_path: str | None = None


@dataclass(frozen=True)
class MatchEntry:
    """A person found both in the checked title and in the reference pool.

    here_episodes only carries meaning for series and here_order only for
    movies; the unused one keeps its neutral default.
    """

    person_id: int
    name: str
    here_roles: tuple[Role, ...] = ()
    here_episodes: int = 0
    here_order: int | None = None
    reference_roles: tuple[Role, ...] = ()
    reference_episodes: int = 0
    image_path: str | None = None


@dataclass(frozen=True)
class TitleSummary:
    """A search hit, reduced to what is needed to pick a title."""

    id: int
    title: str
    year: str = ""
    poster_path: str | None = None
    number_of_episodes: int | None = None
    payload: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class PoolMeta:
    """Metadata stored next to the cached reference pool.

    Attributes:
        saved_at: Epoch milliseconds of the successful fetch
        language: Language the pool was fetched in
    """

    saved_at: int
    language: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the persisted key names."""
        return {"savedAt": self.saved_at, "language": self.language}
