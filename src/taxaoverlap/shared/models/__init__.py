"""Domain models shared across services, workflow and command line."""

from .overlap import (
    MatchEntry,
    MediaKind,
    PersonEntry,
    PoolMeta,
    Role,
    SortMode,
    TitleSummary,
)

__all__ = [
    "MatchEntry",
    "MediaKind",
    "PersonEntry",
    "PoolMeta",
    "Role",
    "SortMode",
    "TitleSummary",
]
