from abc import ABC, abstractmethod


class BaseChatClient(ABC):
    """Contract for provider-specific chat/vision clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        schema_name: str = "result",
        image_bytes: bytes | None = None,
        image_content_type: str = "image/png",
    ) -> str:
        """Return provider response as plain text.

        When ``json_schema`` is given the provider is asked for strict JSON
        matching it. When ``image_bytes`` is given the image is attached to
        the user message.
        """
