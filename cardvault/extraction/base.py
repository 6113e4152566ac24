from abc import ABC, abstractmethod

from cardvault.extraction.models import ExtractionResult


class BaseCardExtractor(ABC):
    """Contract for all card extraction adapters."""

    @abstractmethod
    def extract(
        self,
        image_bytes: bytes,
        content_type: str,
        hint: str | None = None,
    ) -> ExtractionResult:
        """Read card attributes from an image.

        Args:
            image_bytes: Model-ready image bytes.
            content_type: MIME type of ``image_bytes``.
            hint: Optional free-text hint supplied by the user.

        Returns:
            ExtractionResult with the validity flag, raw fields and an
            optional rejection reason.

        Raises:
            ExtractionError: if the capability fails.
        """
