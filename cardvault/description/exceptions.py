class DescriptionError(Exception):
    """Raised when the description writer cannot produce prose."""
