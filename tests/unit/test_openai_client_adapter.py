import base64
from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from cardvault.llm.exceptions import LLMClientError, LLMNetworkError
from cardvault.llm.openai_client_adapter import OpenAIClientAdapter, build_openai_client


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _call(adapter: OpenAIClientAdapter, **kwargs: object) -> str:
    params: dict[str, object] = {
        "model": "m",
        "temperature": 0.1,
        "system_prompt": "system",
        "user_prompt": "user",
        "json_schema": {"type": "object"},
    }
    params.update(kwargs)
    return adapter.create_chat_completion(**params)  # type: ignore[arg-type]


class TestBuildOpenAIClient:
    def test_disables_sdk_retries(self) -> None:
        with patch("cardvault.llm.openai_client_adapter.openai.OpenAI") as mock_openai:
            build_openai_client(api_key="k", timeout_seconds=12, base_url="http://local/v1")
        mock_openai.assert_called_once_with(
            api_key="k",
            timeout=12,
            base_url="http://local/v1",
            max_retries=0,
        )


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        adapter = OpenAIClientAdapter(mock_client)

        assert _call(adapter) == '{"ok": true}'

    def test_sends_strict_json_schema(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        adapter = OpenAIClientAdapter(mock_client)

        _call(adapter, schema_name="card_extraction")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["name"] == "card_extraction"
        assert kwargs["response_format"]["json_schema"]["strict"] is True

    def test_plain_text_request_has_no_response_format(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("prose")
        adapter = OpenAIClientAdapter(mock_client)

        _call(adapter, json_schema=None, system_prompt="")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert "response_format" not in kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]

    def test_attaches_image_as_data_url(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        adapter = OpenAIClientAdapter(mock_client)

        _call(adapter, image_bytes=b"\x89PNG", image_content_type="image/png")

        messages = mock_client.chat.completions.create.call_args.kwargs["messages"]
        content = messages[-1]["content"]
        encoded = base64.b64encode(b"\x89PNG").decode("ascii")
        assert content[0] == {"type": "text", "text": "user"}
        assert content[1]["image_url"]["url"] == f"data:image/png;base64,{encoded}"

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        adapter = OpenAIClientAdapter(mock_client)

        with pytest.raises(LLMClientError, match="empty response"):
            _call(adapter)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])
        adapter = OpenAIClientAdapter(mock_client)

        with pytest.raises(LLMClientError, match="no choices"):
            _call(adapter)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        adapter = OpenAIClientAdapter(mock_client)

        with pytest.raises(LLMNetworkError, match="network error"):
            _call(adapter)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        adapter = OpenAIClientAdapter(mock_client)

        with pytest.raises(LLMNetworkError, match="network error"):
            _call(adapter)

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        adapter = OpenAIClientAdapter(mock_client)

        with pytest.raises(LLMNetworkError, match="API error"):
            _call(adapter)
