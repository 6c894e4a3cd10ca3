"""Session state of one user.

Everything the workflow mutates lives on an explicit OverlapSession
object instead of module globals. The reference pool is held as an
immutable PoolSnapshot that is swapped wholesale on refresh, so a match
in progress keeps reading the snapshot it started with.

Each action (search, title check, pool refresh) draws a generation
token when it starts. Only the completion holding the latest token of
its action may write results back; older completions are stale.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from taxaoverlap.services.credentials import ClassifiedCredential, classify
from taxaoverlap.services.reference_pool import build_reference_index
from taxaoverlap.shared.constants import TMDB
from taxaoverlap.shared.models import (
    MatchEntry,
    MediaKind,
    PersonEntry,
    PoolMeta,
    SortMode,
    TitleSummary,
)


class Action(str, Enum):
    """User actions that perform a network request."""

    SEARCH = "search"
    CHECK = "check"
    POOL = "pool"


@dataclass(frozen=True)
class PoolSnapshot:
    """Reference pool as loaded at one point in time."""

    raw: Any = None
    index: Mapping[int, PersonEntry] = field(default_factory=lambda: MappingProxyType({}))
    meta: PoolMeta | None = None

    @classmethod
    def from_raw(cls, raw: Any, meta: PoolMeta | None = None) -> PoolSnapshot:
        """Build a snapshot with a freshly built index."""
        return cls(raw=raw, index=MappingProxyType(build_reference_index(raw)), meta=meta)

    @property
    def is_loaded(self) -> bool:
        return self.raw is not None

    @property
    def size(self) -> int:
        return len(self.index)


EMPTY_POOL = PoolSnapshot()


@dataclass
class OverlapSession:
    """Mutable state of the current user session."""

    credential: str = ""
    language: str = TMDB.DEFAULT_LANGUAGE
    media_kind: MediaKind = MediaKind.SERIES
    sort_mode: SortMode = SortMode.REFERENCE
    pool: PoolSnapshot = EMPTY_POOL
    query: str = ""
    results: list[TitleSummary] = field(default_factory=list)
    selected: TitleSummary | None = None
    # Kind of the selected title; ranking keeps using it after media_kind changes
    match_kind: MediaKind | None = None
    matches: list[MatchEntry] = field(default_factory=list)
    error: str = ""
    _generations: dict[Action, int] = field(
        default_factory=lambda: dict.fromkeys(Action, 0), init=False, repr=False
    )
    _busy: dict[Action, bool] = field(
        default_factory=lambda: dict.fromkeys(Action, False), init=False, repr=False
    )

    @property
    def classified_credential(self) -> ClassifiedCredential:
        return classify(self.credential)

    def begin(self, action: Action) -> int:
        """Start an action and return its generation token."""
        self._generations[action] += 1
        self._busy[action] = True
        return self._generations[action]

    def is_current(self, action: Action, token: int) -> bool:
        """True while no newer run of the same action has started."""
        return self._generations[action] == token

    def finish(self, action: Action, token: int) -> None:
        """End an action; only the latest run clears the busy flag."""
        if self.is_current(action, token):
            self._busy[action] = False

    def is_busy(self, action: Action) -> bool:
        return self._busy[action]

    def clear_results(self) -> None:
        self.results = []
        self.selected = None
        self.match_kind = None
        self.matches = []


__all__ = ["EMPTY_POOL", "Action", "OverlapSession", "PoolSnapshot"]
