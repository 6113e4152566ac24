from abc import ABC, abstractmethod

from cardvault.embedding.exceptions import EmbeddingDimensionError


class BaseTextEmbedder(ABC):
    """Contract for text-embedding adapters (modality A)."""

    dimensions: int

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Return a fixed-length vector for ``text``.

        Raises:
            EmbeddingError: on any failure.
        """


class BaseImageEmbedder(ABC):
    """Contract for image-embedding adapters (modality B).

    ``embed_query_text`` maps free text into the same space as
    ``embed_image`` so text queries can search the image index.
    """

    dimensions: int

    @abstractmethod
    def embed_image(self, image_bytes: bytes) -> list[float]:
        """Return a fixed-length vector for an encoded image."""

    @abstractmethod
    def embed_query_text(self, text: str) -> list[float]:
        """Return an image-space vector for a text query."""


def ensure_dimensions(vector: list[float], expected: int, label: str) -> list[float]:
    if len(vector) != expected:
        raise EmbeddingDimensionError(
            f"{label} embedding has {len(vector)} dimensions, expected {expected}"
        )
    return vector
