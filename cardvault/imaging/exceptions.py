class RasterizationError(Exception):
    """Raised when a document cannot be rendered to an image."""
