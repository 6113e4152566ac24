class LookupClientError(Exception):
    """Raised when the lookup provider fails or returns an unusable response."""
