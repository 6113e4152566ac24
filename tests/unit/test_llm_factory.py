from unittest.mock import MagicMock, patch

import pytest

from cardvault.config.settings import Settings
from cardvault.llm.example_client_adapter import ExampleClientAdapter
from cardvault.llm.factory import ChatClientFactory
from cardvault.llm.openai_client_adapter import OpenAIClientAdapter


class TestChatClientFactory:
    def test_creates_example_adapter(self) -> None:
        client = ChatClientFactory.create(Settings(llm_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_creates_openai_adapter(self) -> None:
        client = ChatClientFactory.create(Settings(llm_provider="openai", openai_api_key="k"))
        assert isinstance(client, OpenAIClientAdapter)

    def test_reuses_given_openai_client(self) -> None:
        shared = MagicMock()
        with patch.object(ChatClientFactory, "create_openai") as create_openai:
            client = ChatClientFactory.create(Settings(llm_provider="openai"), shared)
        create_openai.assert_not_called()
        assert isinstance(client, OpenAIClientAdapter)

    def test_provider_is_case_insensitive(self) -> None:
        client = ChatClientFactory.create(Settings(llm_provider="EXAMPLE"))
        assert isinstance(client, ExampleClientAdapter)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            ChatClientFactory.create(Settings(llm_provider="nope"))

    def test_unknown_provider_raises_even_with_client(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            ChatClientFactory.create(Settings(llm_provider="nope"), MagicMock())

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="openai_base_url"):
            ChatClientFactory.create_openai(
                Settings(llm_provider="openai_compatible", openai_base_url=" ")
            )

    def test_openai_compatible_passes_base_url(self) -> None:
        settings = Settings(
            llm_provider="openai_compatible",
            openai_api_key="k",
            openai_base_url="http://localhost:11434/v1",
        )
        with patch("cardvault.llm.factory.build_openai_client") as build:
            ChatClientFactory.create_openai(settings)
        assert build.call_args.kwargs["base_url"] == "http://localhost:11434/v1"
