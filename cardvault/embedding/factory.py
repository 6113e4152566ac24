import openai

from cardvault.config.settings import Settings
from cardvault.embedding.base import BaseImageEmbedder, BaseTextEmbedder
from cardvault.embedding.clip_adapter import ClipImageEmbedder
from cardvault.embedding.hashing_adapter import HashingImageEmbedder, HashingTextEmbedder
from cardvault.embedding.openai_text_adapter import OpenAITextEmbedder


class EmbedderFactory:
    """Creates the configured text and image embedders."""

    PROVIDERS = ("example", "openai")

    @classmethod
    def create_text(
        cls,
        settings: Settings,
        openai_client: openai.OpenAI | None = None,
    ) -> BaseTextEmbedder:
        provider = cls.provider(settings)
        if provider == "example":
            return HashingTextEmbedder(settings.text_embedding_dimensions)
        if openai_client is None:
            raise ValueError("an OpenAI client is required for embedding_provider=openai")
        return OpenAITextEmbedder(
            client=openai_client,
            model=settings.text_embedding_model_name,
            dimensions=settings.text_embedding_dimensions,
        )

    @classmethod
    def create_image(cls, settings: Settings) -> BaseImageEmbedder:
        if cls.provider(settings) == "example":
            return HashingImageEmbedder(settings.image_embedding_dimensions)
        return ClipImageEmbedder(
            model_name=settings.image_embedding_model_name,
            dimensions=settings.image_embedding_dimensions,
        )

    @classmethod
    def provider(cls, settings: Settings) -> str:
        """Return the normalized provider name or raise ValueError."""
        provider = settings.embedding_provider.lower()
        if provider not in cls.PROVIDERS:
            raise ValueError(
                f"Unknown embedding provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        return provider
