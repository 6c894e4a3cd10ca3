"""User-facing message constants."""


class UserMessages:
    """Messages shown by the command line."""

    CREDENTIAL_NOT_SAVED = "(none saved)"
    CREDENTIAL_SAVED = "Credential saved."
    CREDENTIAL_CLEARED = "Credential cleared."
    LOGGED_OUT = "Logged out; credential and TAXA pool removed."
    OVERLAP_FREE = "Congratulations - you found a TAXA-free title!"
    POOL_EMPTY = "empty"
    POOL_REFRESHED = "TAXA pool refreshed: {count} people."
    POOL_FRESH = "TAXA pool is fresh: {count} people."
    NO_RESULTS = "No titles found for '{query}'."


class CredentialLabels:
    """Display labels for credential kinds."""

    NONE = "(unknown)"
    API_KEY = "v3 API key"
    BEARER_TOKEN = "v4 Bearer"


__all__ = ["CredentialLabels", "UserMessages"]
