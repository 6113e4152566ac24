class EmbeddingError(Exception):
    """Raised when an embedding capability fails."""


class EmbeddingDimensionError(EmbeddingError):
    """Raised when a vector does not have the configured dimensionality."""
