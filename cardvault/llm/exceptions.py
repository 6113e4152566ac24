class LLMClientError(Exception):
    """Raised when a chat provider returns an unusable response."""


class LLMNetworkError(LLMClientError):
    """Raised when the chat provider call fails due to network/infrastructure issues."""
