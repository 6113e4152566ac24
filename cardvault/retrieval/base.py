from abc import ABC, abstractmethod
from typing import Any

from cardvault.retrieval.models import IndexMatch, SearchFilters


class BaseVectorIndex(ABC):
    """Contract for one single-modality vector index keyed by card identifier."""

    name: str
    dimensions: int

    @abstractmethod
    def upsert(self, identifier: str, vector: list[float], payload: dict[str, Any]) -> None:
        """Insert or overwrite the point for ``identifier``."""

    @abstractmethod
    def query(
        self,
        vector: list[float],
        top_k: int,
        filters: SearchFilters | None = None,
    ) -> list[IndexMatch]:
        """Return up to ``top_k`` nearest points, best first."""

    @abstractmethod
    def scan(self, limit: int) -> list[IndexMatch]:
        """Enumerate up to ``limit`` stored points (scores are 0)."""

    @abstractmethod
    def delete(self, identifier: str) -> None:
        """Remove the point for ``identifier``; missing points are not an error."""
