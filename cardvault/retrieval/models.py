from dataclasses import dataclass, field
from typing import Any

from cardvault.cards.models import CardRecord


@dataclass(frozen=True)
class FusionWeights:
    """Per-modality weights for score fusion. Not required to sum to 1."""

    text: float = 0.6
    image: float = 0.4


@dataclass(frozen=True)
class SearchFilters:
    """Metadata filters, combined with AND. Unset fields are not applied."""

    subject: str | None = None
    year: str | None = None
    manufacturer: str | None = None
    min_grade: float | None = None
    max_grade: float | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.subject,
                self.year,
                self.manufacturer,
                self.min_grade,
                self.max_grade,
            )
        )


@dataclass(frozen=True)
class IndexMatch:
    """One hit returned by a vector index."""

    identifier: str
    score: float
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    """A stored card with its per-modality scores.

    ``combined_score`` is derived from the raw scores and weights on every
    access.
    """

    record: CardRecord
    text_score: float
    image_score: float
    weights: FusionWeights

    @property
    def combined_score(self) -> float:
        return self.weights.text * self.text_score + self.weights.image * self.image_score

    def to_dict(self) -> dict[str, object]:
        return {
            "card": self.record.to_dict(),
            "text_score": self.text_score,
            "image_score": self.image_score,
            "similarity_score": self.combined_score,
        }
