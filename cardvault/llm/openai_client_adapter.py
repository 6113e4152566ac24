import base64

import httpx
import openai

from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.exceptions import LLMClientError, LLMNetworkError


def build_openai_client(
    *,
    api_key: str,
    timeout_seconds: int,
    base_url: str | None = None,
) -> openai.OpenAI:
    """Single-attempt OpenAI client; failures are classified by the caller."""
    return openai.OpenAI(
        api_key=api_key,
        timeout=timeout_seconds,
        base_url=base_url,
        max_retries=0,
    )


class OpenAIClientAdapter(BaseChatClient):
    """Chat client adapter built on the OpenAI-compatible chat API."""

    def __init__(self, client: openai.OpenAI) -> None:
        self._client = client

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
        kwargs: dict[str, object] = {}
        if json_schema is not None:
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": json_schema,
                },
            }
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append(
            {
                "role": "user",
                "content": self._user_content(user_prompt, image_bytes, image_content_type),
            }
        )
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
                **kwargs,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LLMNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise LLMNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise LLMClientError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise LLMClientError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(
        user_prompt: str,
        image_bytes: bytes | None,
        image_content_type: str,
    ) -> str | list[dict[str, object]]:
        if image_bytes is None:
            return user_prompt
        encoded = base64.b64encode(image_bytes).decode("ascii")
        return [
            {"type": "text", "text": user_prompt},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{image_content_type};base64,{encoded}"},
            },
        ]
