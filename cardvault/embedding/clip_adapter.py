import io
from typing import Any

from PIL import Image, UnidentifiedImageError

from cardvault.embedding.base import BaseImageEmbedder
from cardvault.embedding.exceptions import EmbeddingError
from cardvault.logging.logger import Log


class ClipImageEmbedder(BaseImageEmbedder):
    """CLIP image/text embeddings via sentence-transformers.

    The model is loaded on first use and reused for the lifetime of the
    instance.
    """

    def __init__(self, *, model_name: str, dimensions: int, device: str = "cpu") -> None:
        self._model_name = model_name
        self._device = device
        self._model: Any = None
        self.dimensions = dimensions

    def embed_image(self, image_bytes: bytes) -> list[float]:
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                image = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise EmbeddingError(f"Cannot decode image for embedding: {exc}") from exc
        return self._encode(image)

    def embed_query_text(self, text: str) -> list[float]:
        return self._encode(text)

    def _encode(self, item: object) -> list[float]:
        model = self._get_model()
        try:
            vector = model.encode(
                item,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as exc:
            raise EmbeddingError(f"CLIP encoding failed: {exc}") from exc
        return vector.tolist()

    def _get_model(self) -> Any:
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            Log.info(f"Loading CLIP model {self._model_name} on {self._device}")
            try:
                self._model = SentenceTransformer(self._model_name, device=self._device)
            except Exception as exc:
                raise EmbeddingError(f"Failed to load CLIP model: {exc}") from exc
        return self._model
