from abc import ABC, abstractmethod


class BaseNarrator(ABC):
    """Contract for text-to-speech adapters."""

    content_type: str = "audio/mpeg"

    @abstractmethod
    def narrate(self, text: str) -> bytes:
        """Return encoded audio for ``text``.

        Raises:
            MediaError: on any failure.
        """


class BaseSyntheticImageClient(ABC):
    """Contract for image-editing adapters used to produce synthetic samples."""

    @abstractmethod
    def edit(self, image_bytes: bytes, content_type: str, prompt: str) -> bytes:
        """Return PNG bytes of ``image_bytes`` edited according to ``prompt``.

        Raises:
            MediaError: on any failure.
        """
