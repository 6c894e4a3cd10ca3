"""HTTP Status Code Constants."""


class HTTPStatusCodes:
    """HTTP status code constants."""

    OK = 200
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    @staticmethod
    def is_success(code: int) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= code < 300


__all__ = ["HTTPStatusCodes"]
