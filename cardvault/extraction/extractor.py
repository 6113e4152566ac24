"""AI-powered card label extractor."""

import json
from pathlib import Path

from cardvault.extraction.base import BaseCardExtractor
from cardvault.extraction.exceptions import ExtractionError, ExtractionNetworkError
from cardvault.extraction.models import ExtractionResult
from cardvault.extraction.prompt_loader import load_json_schema, load_prompt_template
from cardvault.extraction.validator import parse_extraction
from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.exceptions import LLMClientError, LLMNetworkError
from cardvault.logging.logger import Log


class CardExtractor(BaseCardExtractor):
    """Reads a grading label from an image using a vision-capable chat provider."""

    def __init__(
        self,
        *,
        client: BaseChatClient,
        model: str,
        temperature: float = 0.1,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def extract(
        self,
        image_bytes: bytes,
        content_type: str,
        hint: str | None = None,
    ) -> ExtractionResult:
        prompt = self._build_prompt(hint)
        try:
            raw_response = self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt="",
                user_prompt=prompt,
                json_schema=self._json_schema_dict,
                schema_name="card_extraction",
                image_bytes=image_bytes,
                image_content_type=content_type,
            )
        except LLMNetworkError as exc:
            raise ExtractionNetworkError(str(exc)) from exc
        except LLMClientError as exc:
            raise ExtractionError(str(exc)) from exc
        Log.debug(f"Extraction raw response:\n{raw_response}")

        result = parse_extraction(self._parse_json(raw_response))
        Log.info(f"Extraction complete: valid={result.valid}")
        return result

    def _build_prompt(self, hint: str | None) -> str:
        hint_section = f"\nUser hint: {hint}" if hint else ""
        return self._prompt_template.format(
            json_schema=self._json_schema,
            hint_section=hint_section,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed
