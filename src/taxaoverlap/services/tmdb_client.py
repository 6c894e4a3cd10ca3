"""TMDB API client.

Thin layer over an HttpTransport that knows the three endpoints the
overlap check needs: title search, per-title credits and the aggregate
credits of the reference series. Every call requires a credential and
fails with NoCredentialError before touching the network when there is
none.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from taxaoverlap.config.models.api_settings import TMDBSettings
from taxaoverlap.services.credentials import ClassifiedCredential, classify
from taxaoverlap.services.media_strategies import get_strategy
from taxaoverlap.services.request_builder import build_request
from taxaoverlap.services.transport import HttpTransport, RequestsTransport
from taxaoverlap.shared.constants import TMDBResponseKeys, TMDBSearchKeys
from taxaoverlap.shared.errors import NoCredentialError
from taxaoverlap.shared.logging import log_operation_success
from taxaoverlap.shared.models import MediaKind, TitleSummary

logger = logging.getLogger(__name__)


class TMDBClient:
    """TMDB API client.

    Args:
        settings: TMDB settings (base URL, timeout, reference title)
        transport: HTTP transport; a RequestsTransport by default
    """

    def __init__(
        self,
        settings: TMDBSettings | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        self.settings = settings or TMDBSettings()
        self.transport = transport or RequestsTransport(timeout=self.settings.timeout)

    def get_json(
        self,
        path: str,
        params: dict[str, Any] | None,
        credential: ClassifiedCredential | str | None,
        *,
        operation: str = "get_json",
    ) -> Any:
        """Perform an authorized GET and return the decoded body.

        Raises:
            NoCredentialError: If no credential is set
            ProviderHttpError: On a non-2xx response
            ProviderNetworkError: When TMDB cannot be reached
        """
        if not isinstance(credential, ClassifiedCredential):
            credential = classify(credential)
        if not credential.is_present:
            raise NoCredentialError(operation)

        request = build_request(self.settings.base_url, path, params, credential)
        return self.transport.get_json(request.url, request.headers)

    def search_titles(
        self,
        query: str,
        media_kind: MediaKind | str,
        language: str,
        credential: ClassifiedCredential | str | None,
    ) -> list[TitleSummary]:
        """Search series or movies by title.

        Returns:
            Parsed results in TMDB order; entries without an id are dropped
        """
        strategy = get_strategy(media_kind)
        start = time.perf_counter()

        data = self.get_json(
            strategy.search_path(),
            {
                TMDBSearchKeys.QUERY: query,
                TMDBSearchKeys.INCLUDE_ADULT: False,
                TMDBSearchKeys.LANGUAGE: language,
            },
            credential,
            operation="search",
        )
        raw_results = data.get(TMDBResponseKeys.RESULTS) if isinstance(data, dict) else None
        if not isinstance(raw_results, list):
            raw_results = []

        results = [
            summary
            for summary in (strategy.title_summary(raw) for raw in raw_results)
            if summary is not None
        ]
        log_operation_success(
            logger,
            "search",
            (time.perf_counter() - start) * 1000,
            result_info={"results": len(results)},
            context={"media_kind": strategy.kind.value, "language": language},
        )
        return results

    def get_credits(
        self,
        title_id: int,
        media_kind: MediaKind | str,
        language: str,
        credential: ClassifiedCredential | str | None,
    ) -> Any:
        """Raw cast payload of a title: aggregate credits for series, credits for movies."""
        strategy = get_strategy(media_kind)
        return self.get_json(
            strategy.credits_path(title_id),
            {TMDBSearchKeys.LANGUAGE: language},
            credential,
            operation="get_credits",
        )

    def get_reference_credits(
        self,
        language: str,
        credential: ClassifiedCredential | str | None,
    ) -> Any:
        """Raw aggregate credits of the reference series."""
        return self.get_credits(
            self.settings.reference_title_id,
            MediaKind.SERIES,
            language,
            credential,
        )


__all__ = ["TMDBClient"]
