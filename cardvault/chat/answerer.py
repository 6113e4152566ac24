from collections.abc import Sequence
from pathlib import Path

from cardvault.chat.context import build_context, render_conversation
from cardvault.chat.exceptions import ChatError
from cardvault.chat.models import ChatMessage
from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.exceptions import LLMClientError
from cardvault.retrieval.models import SearchResult

_DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "answer_prompt.txt"


class CardAnswerer:
    """Answers collection questions grounded on retrieved cards."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.7,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        path = prompt_template_path or _DEFAULT_PROMPT_PATH
        try:
            self._prompt_template = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ChatError(f"Failed to load prompt template: {exc}") from exc

    def system_prompt(self, results: Sequence[SearchResult]) -> str:
        return self._prompt_template.format(context=build_context(results))

    def answer(self, messages: Sequence[ChatMessage], results: Sequence[SearchResult]) -> str:
        """Return the provider's answer text.

        Raises:
            ChatError: if the provider call fails or returns empty text.
        """
        try:
            text = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self.system_prompt(results),
                user_prompt=render_conversation(messages),
            )
        except LLMClientError as exc:
            raise ChatError(f"Chat answer failed: {exc}") from exc
        text = text.strip()
        if not text:
            raise ChatError("Chat answer was empty")
        return text
