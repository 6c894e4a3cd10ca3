"""Services for TAXA-overlap.

Credential handling, TMDB access, reference pool caching and the
overlap matching and ranking engine.
"""

from taxaoverlap.services.credentials import ClassifiedCredential, CredentialKind, classify
from taxaoverlap.services.matcher import match_overlap
from taxaoverlap.services.media_strategies import (
    MediaStrategy,
    MovieStrategy,
    SeriesStrategy,
    get_strategy,
)
from taxaoverlap.services.pool_cache import CachedPool, PoolCache, is_fresh
from taxaoverlap.services.ranking import danish_collation_key, rank
from taxaoverlap.services.reference_pool import build_reference_index
from taxaoverlap.services.request_builder import ProviderRequest, build_request
from taxaoverlap.services.storage import KeyValueStore, SQLiteKeyValueStore
from taxaoverlap.services.tmdb_client import TMDBClient
from taxaoverlap.services.transport import HttpTransport, RequestsTransport

__all__ = [
    "CachedPool",
    "ClassifiedCredential",
    "CredentialKind",
    "HttpTransport",
    "KeyValueStore",
    "MediaStrategy",
    "MovieStrategy",
    "PoolCache",
    "ProviderRequest",
    "RequestsTransport",
    "SQLiteKeyValueStore",
    "SeriesStrategy",
    "TMDBClient",
    "build_reference_index",
    "build_request",
    "classify",
    "danish_collation_key",
    "get_strategy",
    "is_fresh",
    "match_overlap",
    "rank",
]
