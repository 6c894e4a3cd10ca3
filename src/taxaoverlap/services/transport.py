"""HTTP transport for TMDB requests.

A single GET-JSON capability. No retries and no response caching: a
failed request surfaces once and the caller decides what to keep.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

import requests

from taxaoverlap.shared.constants import TMDB, HTTPStatusCodes
from taxaoverlap.shared.errors import ProviderHttpError, ProviderNetworkError
from taxaoverlap.shared.logging import log_api_call, redact_text, redact_url

logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """Fetches JSON from a URL."""

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        """GET url and decode the JSON body.

        Raises:
            ProviderHttpError: On a non-2xx response
            ProviderNetworkError: When no response was received
        """
        ...


class RequestsTransport:
    """HttpTransport on top of a requests.Session."""

    def __init__(
        self,
        timeout: float = TMDB.REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_json(self, url: str, headers: dict[str, str]) -> Any:
        endpoint = redact_url(url)
        start = time.perf_counter()

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            log_api_call(logger, url, "GET", duration_ms=(time.perf_counter() - start) * 1000)
            # requests puts the full URL, api_key included, in the exception text
            raise ProviderNetworkError(
                f"Could not reach TMDB: {e.__class__.__name__}",
                endpoint=endpoint,
                reason=redact_text(str(e)),
            ) from None

        duration_ms = (time.perf_counter() - start) * 1000
        log_api_call(logger, url, "GET", response.status_code, duration_ms)

        if not HTTPStatusCodes.is_success(response.status_code):
            raise ProviderHttpError(response.status_code, response.text, endpoint=endpoint)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderNetworkError(
                "TMDB returned a response that is not JSON",
                endpoint=endpoint,
                original_error=e,
            ) from e

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpTransport", "RequestsTransport"]
