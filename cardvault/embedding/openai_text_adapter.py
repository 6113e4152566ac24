import httpx
import openai

from cardvault.embedding.base import BaseTextEmbedder
from cardvault.embedding.exceptions import EmbeddingError


class OpenAITextEmbedder(BaseTextEmbedder):
    """Text embeddings from the OpenAI embeddings API with pinned dimensionality."""

    def __init__(self, *, client: openai.OpenAI, model: str, dimensions: int) -> None:
        self._client = client
        self._model = model
        self.dimensions = dimensions

    def embed_text(self, text: str) -> list[float]:
        try:
            response = self._client.embeddings.create(
                model=self._model,
                input=text,
                dimensions=self.dimensions,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise EmbeddingError(f"Text embedding network error: {exc}") from exc
        except openai.APIError as exc:
            raise EmbeddingError(f"Text embedding API error: {exc}") from exc
        if not response.data:
            raise EmbeddingError("Text embedding returned no data")
        return list(response.data[0].embedding)
