import json
from pathlib import Path

from cardvault.cards.models import CardAttributes
from cardvault.description.base import BaseDescriptionWriter
from cardvault.description.exceptions import DescriptionError
from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.exceptions import LLMClientError

_DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "description_prompt.txt"


class DescriptionWriter(BaseDescriptionWriter):
    """Writes collector-friendly prose through a chat provider."""

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
            raise DescriptionError(f"Failed to load prompt template: {exc}") from exc

    def write(
        self,
        card: CardAttributes,
        base_description: str,
        hint: str | None = None,
        research: str | None = None,
    ) -> str:
        prompt = self._prompt_template.format(
            card_json=json.dumps(card.to_dict(), indent=2),
            base_description=base_description,
            hint=hint or "none provided",
            research=(
                f"External research findings:\n{research}"
                if research
                else "No external research results were available."
            ),
        )
        try:
            text = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt="",
                user_prompt=prompt,
            )
        except LLMClientError as exc:
            raise DescriptionError(f"Description generation failed: {exc}") from exc
        text = text.strip()
        if not text:
            raise DescriptionError("Description generation returned empty text")
        return text
