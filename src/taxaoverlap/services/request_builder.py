"""Construction of authorized TMDB requests.

Pure transformation from (path, params, credential) to URL and headers;
nothing here performs I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from taxaoverlap.services.credentials import ClassifiedCredential, CredentialKind
from taxaoverlap.shared.constants import TMDBSearchKeys


@dataclass(frozen=True)
class ProviderRequest:
    """A fully qualified GET request."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)


def _format_param(value: Any) -> str:
    # Booleans are sent the way TMDB documents them
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_request(
    base_url: str,
    path: str,
    params: Mapping[str, Any] | None,
    credential: ClassifiedCredential,
) -> ProviderRequest:
    """Build the URL and headers of a TMDB request.

    Args:
        base_url: API root, e.g. ``https://api.themoviedb.org/3``
        path: Resource path starting with "/"
        params: Query parameters; None and "" values are omitted
        credential: Classified credential deciding the auth mechanism

    Returns:
        ProviderRequest with the final URL and header set
    """
    query: list[tuple[str, str]] = [
        (key, _format_param(value))
        for key, value in (params or {}).items()
        if value is not None and value != ""
    ]
    headers = {"accept": "application/json"}

    if credential.kind is CredentialKind.BEARER_TOKEN and credential.normalized_header_value:
        headers["Authorization"] = credential.normalized_header_value
    elif credential.kind is CredentialKind.API_KEY and credential.query_value:
        query.append((TMDBSearchKeys.API_KEY, credential.query_value))

    url = f"{base_url.rstrip('/')}{path}"
    if query:
        url = f"{url}?{urlencode(query)}"

    return ProviderRequest(url=url, headers=headers)


__all__ = ["ProviderRequest", "build_request"]
