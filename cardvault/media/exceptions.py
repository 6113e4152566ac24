class MediaError(Exception):
    """Raised when narration or synthetic image generation fails."""
