from cardvault.extraction.base import BaseCardExtractor
from cardvault.extraction.extractor import CardExtractor
from cardvault.extraction.models import ExtractionResult

__all__ = ["BaseCardExtractor", "CardExtractor", "ExtractionResult"]
