import base64
import binascii

import httpx
import openai

from cardvault.media.base import BaseNarrator, BaseSyntheticImageClient
from cardvault.media.exceptions import MediaError

_MAX_NARRATION_CHARS = 4500


class OpenAINarrator(BaseNarrator):
    """Narration through the OpenAI speech API."""

    def __init__(self, *, client: openai.OpenAI, model: str, voice: str) -> None:
        self._client = client
        self._model = model
        self._voice = voice

    def narrate(self, text: str) -> bytes:
        try:
            response = self._client.audio.speech.create(
                model=self._model,
                voice=self._voice,
                input=text[:_MAX_NARRATION_CHARS],
                response_format="mp3",
            )
        except (openai.APIConnectionError, httpx.TimeoutException) as exc:
            raise MediaError(f"Speech network error: {exc}") from exc
        except openai.APIError as exc:
            raise MediaError(f"Speech API error: {exc}") from exc
        audio = response.content
        if not audio:
            raise MediaError("No audio content received from speech service")
        return audio


class OpenAISyntheticImageClient(BaseSyntheticImageClient):
    """Image edits through the OpenAI images API."""

    def __init__(self, *, client: openai.OpenAI, model: str) -> None:
        self._client = client
        self._model = model

    def edit(self, image_bytes: bytes, content_type: str, prompt: str) -> bytes:
        try:
            response = self._client.images.edit(
                model=self._model,
                image=("card", image_bytes, content_type),
                prompt=prompt,
            )
        except (openai.APIConnectionError, httpx.TimeoutException) as exc:
            raise MediaError(f"Image edit network error: {exc}") from exc
        except openai.APIError as exc:
            raise MediaError(f"Image edit API error: {exc}") from exc
        if not response.data or not response.data[0].b64_json:
            raise MediaError("No edited image data received")
        try:
            return base64.b64decode(response.data[0].b64_json)
        except (binascii.Error, ValueError) as exc:
            raise MediaError(f"Edited image is not valid base64: {exc}") from exc
