"""Constants for TAXA-overlap.

Re-exports every constant group so callers can import from one place.
"""

from .http_codes import HTTPStatusCodes
from .messages import CredentialLabels, UserMessages
from .system import TMDB, Application, Cache, ImageSize, Ranking, StorageKeys
from .tmdb_keys import TMDBCreditKeys, TMDBMediaTypes, TMDBResponseKeys, TMDBSearchKeys

__all__ = [
    "TMDB",
    "Application",
    "Cache",
    "CredentialLabels",
    "HTTPStatusCodes",
    "ImageSize",
    "Ranking",
    "StorageKeys",
    "TMDBCreditKeys",
    "TMDBMediaTypes",
    "TMDBResponseKeys",
    "TMDBSearchKeys",
    "UserMessages",
]
