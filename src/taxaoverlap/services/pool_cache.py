"""Reference pool caching.

The aggregate credits of the reference series are fetched once and kept
in the local store together with ``{savedAt, language}`` metadata. An
automatic refresh is skipped while the cached copy is younger than the
configured maximum age; an explicit refresh always refetches.

Reads are best-effort: a missing, unreadable or corrupt entry is
reported as absent, which amounts to a cold start.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import orjson

from taxaoverlap.services.storage import KeyValueStore
from taxaoverlap.shared.constants import Cache, StorageKeys
from taxaoverlap.shared.errors import InfrastructureError
from taxaoverlap.shared.models import PoolMeta

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def is_fresh(
    meta: PoolMeta | None,
    max_age_ms: int = Cache.DEFAULT_MAX_AGE_MS,
    now: int | None = None,
    force_refresh: bool = False,
    pool_present: bool = True,
) -> bool:
    """Decide whether the held reference pool can be kept.

    Args:
        meta: Metadata of the cached pool, None when there is none
        max_age_ms: Maximum age in milliseconds
        now: Current epoch milliseconds (default: wall clock)
        force_refresh: True for an explicit user refresh
        pool_present: Whether a pool is currently held in memory

    Returns:
        True when no refetch is needed
    """
    if force_refresh or meta is None or not pool_present:
        return False
    current = now_ms() if now is None else now
    return (current - meta.saved_at) < max_age_ms


@dataclass(frozen=True)
class CachedPool:
    """Raw reference pool response with its metadata."""

    pool: Any
    meta: PoolMeta


def _parse_meta(data: Any) -> PoolMeta | None:
    if not isinstance(data, dict):
        return None
    saved_at = data.get("savedAt")
    if not isinstance(saved_at, (int, float)) or isinstance(saved_at, bool):
        return None
    return PoolMeta(saved_at=int(saved_at), language=str(data.get("language") or ""))


class PoolCache:
    """Persists the reference pool and its metadata in a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _try_load_json(self, key: str) -> Any | None:
        try:
            raw = self.store.get(key)
        except InfrastructureError as e:
            logger.debug("Could not read %s: %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            logger.debug("Ignoring corrupt %s: %s", key, e)
            return None

    def try_load_pool(self) -> Any | None:
        """Return the cached raw pool, or None when absent or corrupt."""
        return self._try_load_json(StorageKeys.POOL)

    def try_load_meta(self) -> PoolMeta | None:
        """Return the cached pool metadata, or None when absent or corrupt."""
        return _parse_meta(self._try_load_json(StorageKeys.POOL_META))

    def save(self, pool: Any, language: str, saved_at: int | None = None) -> CachedPool:
        """Write pool and metadata together.

        Raises:
            InfrastructureError: If the store rejects the write
        """
        meta = PoolMeta(saved_at=now_ms() if saved_at is None else saved_at, language=language)
        self.store.set_many(
            {
                StorageKeys.POOL: orjson.dumps(pool).decode("utf-8"),
                StorageKeys.POOL_META: orjson.dumps(meta.to_dict()).decode("utf-8"),
            }
        )
        logger.debug("Saved reference pool (language=%s)", language)
        return CachedPool(pool=pool, meta=meta)

    def clear(self) -> None:
        """Remove pool and metadata."""
        self.store.remove_many([StorageKeys.POOL, StorageKeys.POOL_META])


__all__ = ["CachedPool", "PoolCache", "is_fresh", "now_ms"]
