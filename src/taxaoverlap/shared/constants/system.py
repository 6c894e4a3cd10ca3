"""Application-wide constants for TAXA-overlap."""


class Application:
    """Application metadata."""

    NAME = "taxa-overlap"
    HOME_DIR = ".taxaoverlap"


class TMDB:
    """TMDB API configuration constants."""

    API_BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
    # TMDB id of the TAXA series, the reference cast pool
    REFERENCE_TITLE_ID = 51261
    DEFAULT_LANGUAGE = "da-DK"
    SUPPORTED_LANGUAGES = ("da-DK", "en-US", "sv-SE", "nb-NO", "de-DE")
    REQUEST_TIMEOUT = 10


class ImageSize:
    """Image size tokens understood by the TMDB image CDN."""

    POSTER = "w92"
    PROFILE = "w185"


class Cache:
    """Reference pool cache constants."""

    MAX_AGE_DAYS = 30
    MS_PER_DAY = 1000 * 60 * 60 * 24
    # 30 days in milliseconds
    DEFAULT_MAX_AGE_MS = MAX_AGE_DAYS * MS_PER_DAY


class StorageKeys:
    """Keys of the persisted key-value layout."""

    POOL = "tmdb_taxa_aggregate_credits_v1"
    POOL_META = "tmdb_taxa_aggregate_meta_v1"
    CREDENTIAL = "tmdb_auth_v1"
    LANGUAGE = "tmdb_lang_v1"


class Ranking:
    """Ranking and matching constants."""

    # Billing order used when a movie credit has none; sorts last
    UNKNOWN_ORDER = 999999
    UNKNOWN_CHARACTER = "(unknown)"
    UNKNOWN_NAME = "(unknown)"


__all__ = [
    "TMDB",
    "Application",
    "Cache",
    "ImageSize",
    "Ranking",
    "StorageKeys",
]
