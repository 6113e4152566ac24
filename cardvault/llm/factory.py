from typing import ClassVar

import openai

from cardvault.config.settings import Settings
from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.example_client_adapter import ExampleClientAdapter
from cardvault.llm.openai_client_adapter import OpenAIClientAdapter, build_openai_client


class ChatClientFactory:
    """Creates the configured chat client adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings, client: openai.OpenAI | None = None) -> BaseChatClient:
        """Create a configured chat client, reusing ``client`` when given."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if client is None or provider not in cls.PROVIDERS:
            client = cls.create_openai(settings)
        return OpenAIClientAdapter(client)

    @classmethod
    def create_openai(cls, settings: Settings) -> openai.OpenAI:
        """Build the shared OpenAI SDK client used by every OpenAI adapter."""
        provider = cls.provider(settings)
        base_url = None
        if provider == "openai_compatible":
            base_url = (settings.openai_base_url or "").strip()
            if not base_url:
                raise ValueError(
                    "openai_base_url is required for llm_provider=openai_compatible"
                )
        return build_openai_client(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def provider(cls, settings: Settings) -> str:
        """Return the normalized provider name or raise ValueError."""
        provider = settings.llm_provider.lower()
        if provider not in cls.PROVIDERS:
            raise ValueError(
                f"Unknown LLM provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        return provider
