"""Offline chat client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseChatClient and register the provider in ChatClientFactory.
"""

import json
from typing import ClassVar

from cardvault.llm.client_base import BaseChatClient


class ExampleClientAdapter(BaseChatClient):
    """Returns a fixed valid card for JSON requests and fixed prose otherwise.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_CARD: ClassVar[dict[str, object]] = {
        "is_valid_card": True,
        "subject": "LeBron James",
        "year": "2003-04",
        "manufacturer": "Topps",
        "grade": 10,
        "identifier": "12345678",
        "sub_category": "Chrome",
        "sub_number": "#111",
        "rejection_reason": None,
    }
    DEFAULT_TEXT: ClassVar[str] = (
        "A gem mint rookie-year card from one of the most collected sets of the era."
    )

    def __init__(self, card: dict[str, object] | None = None) -> None:
        self._card = dict(card) if card is not None else dict(self.DEFAULT_CARD)

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
        _ = model, temperature, system_prompt, user_prompt, schema_name
        _ = image_bytes, image_content_type
        if json_schema is not None:
            return json.dumps(self._card)
        return self.DEFAULT_TEXT
