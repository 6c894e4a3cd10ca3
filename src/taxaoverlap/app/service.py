"""Overlap workflow.

OverlapService drives one OverlapSession: it restores and persists the
session's saved state, keeps the reference pool fresh, searches titles
and checks a title's cast against the pool.

Failures are recorded on the session as one user-facing message and
re-raised; the state that existed before the failing action (pool,
results, matches) is left in place. Results of a stale action, one that
was overtaken by a newer run of the same action, are dropped.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from taxaoverlap.app.session import EMPTY_POOL, Action, OverlapSession, PoolSnapshot
from taxaoverlap.services.matcher import match_credits
from taxaoverlap.services.media_strategies import get_strategy
from taxaoverlap.services.pool_cache import PoolCache, is_fresh, now_ms
from taxaoverlap.services.ranking import coerce_sort_mode, rank
from taxaoverlap.services.storage import KeyValueStore
from taxaoverlap.services.tmdb_client import TMDBClient
from taxaoverlap.shared.constants import Cache, StorageKeys
from taxaoverlap.shared.errors import (
    InfrastructureError,
    NoCredentialError,
    TaxaOverlapError,
)
from taxaoverlap.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)
from taxaoverlap.shared.models import MatchEntry, MediaKind, SortMode, TitleSummary

logger = logging.getLogger(__name__)


class OverlapService:
    """Runs the overlap workflow on a session.

    Args:
        session: Session state to read and update
        client: TMDB client
        store: Key-value store for credential, language and pool
        max_age_ms: Age after which the cached pool is refetched
        clock: Source of epoch milliseconds
    """

    def __init__(
        self,
        session: OverlapSession,
        client: TMDBClient,
        store: KeyValueStore,
        max_age_ms: int = Cache.DEFAULT_MAX_AGE_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.session = session
        self.client = client
        self.store = store
        self.pool_cache = PoolCache(store)
        self.max_age_ms = max_age_ms
        self.clock = clock

    # Saved state

    def _try_get(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except InfrastructureError as e:
            logger.debug("Could not read %s: %s", key, e)
            return None

    def load_saved_state(self) -> None:
        """Restore credential, language and pool snapshot from the store.

        Anything missing or unreadable is left at its default.
        """
        session = self.session

        saved_credential = self._try_get(StorageKeys.CREDENTIAL)
        if saved_credential:
            session.credential = saved_credential

        saved_language = self._try_get(StorageKeys.LANGUAGE)
        if saved_language:
            session.language = saved_language

        raw_pool = self.pool_cache.try_load_pool()
        if raw_pool is not None:
            session.pool = PoolSnapshot.from_raw(raw_pool, self.pool_cache.try_load_meta())

        logger.debug(
            "Loaded saved state: credential=%s language=%s pool=%d people",
            session.classified_credential.kind.value,
            session.language,
            session.pool.size,
        )

    def set_credential(self, credential: str) -> None:
        """Replace the credential in memory without saving it."""
        self.session.credential = credential or ""

    def save_credential(self) -> bool:
        """Persist the trimmed credential.

        Returns:
            False when the credential is blank and nothing was saved
        """
        credential = self.session.credential.strip()
        if not credential:
            return False
        self.store.set(StorageKeys.CREDENTIAL, credential)
        self.session.credential = credential
        logger.info("Saved %s credential", self.session.classified_credential.kind.value)
        return True

    def has_unsaved_credential(self) -> bool:
        """True when the current credential differs from the saved one."""
        credential = self.session.credential
        return bool(credential) and credential != (self._try_get(StorageKeys.CREDENTIAL) or "")

    def clear_credential(self) -> None:
        """Forget the saved credential; the in-memory one is cleared too."""
        self.store.remove(StorageKeys.CREDENTIAL)
        self.session.credential = ""

    def logout(self) -> None:
        """Remove credential and reference pool, and reset the session."""
        self.store.remove_many(
            [StorageKeys.CREDENTIAL, StorageKeys.POOL, StorageKeys.POOL_META]
        )
        session = self.session
        session.credential = ""
        session.pool = EMPTY_POOL
        session.clear_results()
        session.error = ""
        logger.info("Logged out")

    def set_language(self, language: str) -> None:
        """Switch the language used for titles; saved immediately."""
        if not language:
            return
        self.session.language = language
        self.store.set(StorageKeys.LANGUAGE, language)

    def set_media_kind(self, media_kind: MediaKind | str) -> None:
        self.session.media_kind = get_strategy(media_kind).kind

    # Reference pool

    def _require_credential(self, operation: str) -> None:
        if not self.session.classified_credential.is_present:
            error = NoCredentialError(operation)
            self.session.error = error.message
            raise error

    def _fail(self, error: TaxaOverlapError, operation: str) -> None:
        self.session.error = error.message
        log_operation_error(logger, error, operation)

    def refresh_pool(self, force: bool = False) -> bool:
        """Fetch the reference pool unless the held copy is still fresh.

        Args:
            force: Refetch regardless of age

        Returns:
            True when a new pool was fetched and installed

        Raises:
            NoCredentialError: If no credential is set
            TaxaOverlapError: If the fetch or the write fails
        """
        session = self.session
        self._require_credential("refresh_pool")
        session.error = ""

        token = session.begin(Action.POOL)
        start = time.perf_counter()
        log_operation_start(logger, "refresh_pool", {"force": force})
        try:
            meta = self.pool_cache.try_load_meta()
            if is_fresh(
                meta,
                self.max_age_ms,
                now=self.clock(),
                force_refresh=force,
                pool_present=session.pool.is_loaded,
            ):
                logger.debug("Reference pool is fresh, skipping fetch")
                return False

            language = session.language
            raw = self.client.get_reference_credits(language, session.classified_credential)
            if not session.is_current(Action.POOL, token):
                logger.info("Discarding stale reference pool response")
                return False

            cached = self.pool_cache.save(raw, language, saved_at=self.clock())
            session.pool = PoolSnapshot.from_raw(raw, cached.meta)
        except TaxaOverlapError as e:
            if session.is_current(Action.POOL, token):
                self._fail(e, "refresh_pool")
                raise
            logger.info("Ignoring failure of a stale pool refresh: %s", e)
            return False
        finally:
            session.finish(Action.POOL, token)

        log_operation_success(
            logger,
            "refresh_pool",
            (time.perf_counter() - start) * 1000,
            result_info={"people": session.pool.size},
            context={"language": language},
        )
        return True

    def ensure_pool(self) -> bool:
        """Fetch the pool when a credential is set and no pool is held."""
        if self.session.pool.is_loaded or not self.session.classified_credential.is_present:
            return False
        return self.refresh_pool()

    # Search and check

    def search(self, query: str) -> list[TitleSummary]:
        """Search titles of the session's media kind.

        On success the results replace the previous ones and the previous
        selection and matches are cleared.

        Raises:
            NoCredentialError: If no credential is set
            TaxaOverlapError: If the request fails
        """
        session = self.session
        self._require_credential("search")
        session.error = ""

        token = session.begin(Action.SEARCH)
        try:
            results = self.client.search_titles(
                query,
                session.media_kind,
                session.language,
                session.classified_credential,
            )
        except TaxaOverlapError as e:
            if session.is_current(Action.SEARCH, token):
                self._fail(e, "search")
                raise
            logger.info("Ignoring failure of a stale search: %s", e)
            return session.results
        finally:
            session.finish(Action.SEARCH, token)

        if not session.is_current(Action.SEARCH, token):
            logger.info("Discarding stale search results for %r", query)
            return session.results

        session.clear_results()
        session.query = query
        session.results = results
        return results

    def check_title(self, title: TitleSummary | int) -> list[MatchEntry]:
        """Match a title's cast against the reference pool and rank it.

        An empty pool is refreshed first. Matching reads the pool snapshot
        held when the credits arrive, never a half-updated one.

        Args:
            title: Selected search result or a bare TMDB id

        Returns:
            Ranked matches; empty for an overlap-free title

        Raises:
            NoCredentialError: If no credential is set
            TaxaOverlapError: If a request fails
        """
        session = self.session
        self._require_credential("check_title")

        if not session.pool.index:
            self.refresh_pool(force=True)

        if isinstance(title, TitleSummary):
            selected = title
        else:
            selected = next(
                (r for r in session.results if r.id == title),
                TitleSummary(id=int(title), title=str(title)),
            )
        media_kind = session.media_kind
        session.error = ""

        token = session.begin(Action.CHECK)
        start = time.perf_counter()
        try:
            credits = self.client.get_credits(
                selected.id,
                media_kind,
                session.language,
                session.classified_credential,
            )
        except TaxaOverlapError as e:
            if session.is_current(Action.CHECK, token):
                self._fail(e, "check_title")
                raise
            logger.info("Ignoring failure of a stale title check: %s", e)
            return session.matches
        finally:
            session.finish(Action.CHECK, token)

        if not session.is_current(Action.CHECK, token):
            logger.info("Discarding stale credits of title %s", selected.id)
            return session.matches

        matches = rank(
            match_credits(credits, session.pool.index, media_kind),
            media_kind,
            session.sort_mode,
        )
        session.selected = selected
        session.match_kind = media_kind
        session.matches = matches

        log_operation_success(
            logger,
            "check_title",
            (time.perf_counter() - start) * 1000,
            result_info={"matches": len(matches)},
            context={"title_id": selected.id, "media_kind": media_kind.value},
        )
        return matches

    def change_sort_mode(self, sort_mode: SortMode | str) -> list[MatchEntry]:
        """Re-rank the current matches; nothing is re-matched."""
        mode = coerce_sort_mode(sort_mode)
        session = self.session
        session.sort_mode = mode
        if session.selected is not None and session.matches:
            session.matches = rank(session.matches, session.match_kind or session.media_kind, mode)
        return session.matches


__all__ = ["OverlapService"]
