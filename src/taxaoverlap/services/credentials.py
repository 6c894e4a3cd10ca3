"""TMDB credential classification.

TMDB accepts two kinds of credentials: a v3 API key, sent as the
``api_key`` query parameter, and a v4 read access token, sent as an
``Authorization: Bearer`` header. The user pastes either into the same
field, so the kind is inferred from the shape of the string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from taxaoverlap.shared.constants import CredentialLabels, UserMessages

# Three dot-separated segments of at least 10 token characters (a JWT),
# optionally preceded by an upper-case "BEARER" prefix
_BEARER_PATTERN = re.compile(
    r"^(?:BEARER\s+)?[A-Za-z0-9\-_]{10,}\.[A-Za-z0-9\-_]{10,}\.[A-Za-z0-9\-_]{10,}$"
)
_BEARER_PREFIX = "bearer "
_MASK_EDGE = 4


class CredentialKind(str, Enum):
    """How a credential authorizes requests."""

    NONE = "none"
    API_KEY = "api-key"
    BEARER_TOKEN = "bearer-token"

    @property
    def label(self) -> str:
        """Short display label of the kind."""
        return {
            CredentialKind.NONE: CredentialLabels.NONE,
            CredentialKind.API_KEY: CredentialLabels.API_KEY,
            CredentialKind.BEARER_TOKEN: CredentialLabels.BEARER_TOKEN,
        }[self]


@dataclass(frozen=True)
class ClassifiedCredential:
    """A credential together with everything derived from its kind.

    Attributes:
        kind: Detected credential kind
        normalized_header_value: Authorization header value (bearer tokens only)
        masked_display: Safe representation for display
        query_value: Value of the api_key query parameter (API keys only)
    """

    kind: CredentialKind
    normalized_header_value: str | None
    masked_display: str
    query_value: str | None = None

    @property
    def is_present(self) -> bool:
        return self.kind is not CredentialKind.NONE


def _has_bearer_prefix(value: str) -> bool:
    return value.lower().startswith(_BEARER_PREFIX)


def is_bearer(raw: str | None) -> bool:
    """Tell whether the string looks like a v4 bearer token."""
    value = (raw or "").strip()
    return bool(_BEARER_PATTERN.match(value)) or _has_bearer_prefix(value)


def _mask(value: str) -> str:
    # Slicing short values may overlap; masking is cosmetic only
    return f"{value[:_MASK_EDGE]}...{value[-_MASK_EDGE:]}"


def classify(raw: str | None) -> ClassifiedCredential:
    """Classify a user-supplied credential.

    Args:
        raw: Credential as typed or stored, may be None or blank

    Returns:
        ClassifiedCredential describing how to authorize requests with it
    """
    value = (raw or "").strip()
    if not value:
        return ClassifiedCredential(
            kind=CredentialKind.NONE,
            normalized_header_value=None,
            masked_display=UserMessages.CREDENTIAL_NOT_SAVED,
        )

    if is_bearer(value):
        if _has_bearer_prefix(value):
            header_value = value
            core = value[len(_BEARER_PREFIX) :]
        else:
            header_value = f"Bearer {value}"
            core = value
        return ClassifiedCredential(
            kind=CredentialKind.BEARER_TOKEN,
            normalized_header_value=header_value,
            masked_display=f"Bearer {_mask(core)}",
        )

    return ClassifiedCredential(
        kind=CredentialKind.API_KEY,
        normalized_header_value=None,
        masked_display=f"api_key {_mask(value)}",
        query_value=value,
    )


__all__ = [
    "ClassifiedCredential",
    "CredentialKind",
    "classify",
    "is_bearer",
]
