class ChatError(Exception):
    """Raised when an answer cannot be produced from the retrieved cards."""
