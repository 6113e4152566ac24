class StorageError(Exception):
    """Raised when a file cannot be written to durable storage."""
