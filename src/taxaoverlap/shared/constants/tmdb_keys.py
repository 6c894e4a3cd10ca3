"""TMDB API Response Keys Constants.

This module contains the TMDB response field keys the overlap engine
reads, so payload access does not depend on scattered string literals.
"""


class TMDBResponseKeys:
    """TMDB API response field keys."""

    ID = "id"

    # Title fields
    NAME = "name"
    TITLE = "title"
    ORIGINAL_NAME = "original_name"
    ORIGINAL_TITLE = "original_title"

    # Dates
    FIRST_AIR_DATE = "first_air_date"
    RELEASE_DATE = "release_date"

    # Images
    POSTER_PATH = "poster_path"
    PROFILE_PATH = "profile_path"

    # TV specific
    NUMBER_OF_EPISODES = "number_of_episodes"

    # Search results
    RESULTS = "results"


class TMDBCreditKeys:
    """Keys of credits and aggregate_credits payloads."""

    CAST = "cast"
    ROLES = "roles"
    CHARACTER = "character"
    EPISODE_COUNT = "episode_count"
    TOTAL_EPISODE_COUNT = "total_episode_count"
    ORDER = "order"


class TMDBSearchKeys:
    """TMDB request query parameter names."""

    QUERY = "query"
    LANGUAGE = "language"
    INCLUDE_ADULT = "include_adult"
    API_KEY = "api_key"


class TMDBMediaTypes:
    """TMDB media type path segments."""

    TV = "tv"
    MOVIE = "movie"


__all__ = [
    "TMDBCreditKeys",
    "TMDBMediaTypes",
    "TMDBResponseKeys",
    "TMDBSearchKeys",
]
