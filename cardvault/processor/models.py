from dataclasses import dataclass
from enum import Enum

from cardvault.cards.models import CardAttributes


class StepName(str, Enum):
    """Closed set of fixed pipeline steps."""

    INGEST = "ingest"
    EXTRACT = "extract"
    VERIFY = "verify"
    ENRICH = "enrich"
    EMBED = "embed"
    PERSIST = "persist"
    END = "end"


class FailureKind(str, Enum):
    """Machine-readable terminal failure kinds."""

    INGEST_FAILED = "ingest_failed"
    EXTRACTION_FAILED = "extraction_failed"
    EXTRACTION_REJECTED = "extraction_rejected"
    EXTRACTION_INCOMPLETE = "extraction_incomplete"
    EMBEDDING_FAILED = "embedding_failed"
    PERSISTENCE_FAILED = "persistence_failed"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class CertificationResult:
    """Verification reference built from the certification number."""

    certified: bool
    verification_url: str | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        return "certified" if self.certified else "unverified"


@dataclass(frozen=True)
class TerminalOutcome:
    """Final result of a pipeline run: success with the stored card, or a typed failure."""

    success: bool
    kind: FailureKind | None = None
    reason: str = ""
    card: CardAttributes | None = None
    description: str | None = None
    image_path: str | None = None
    verification_url: str | None = None
    narration_path: str | None = None
    synthetic_sample_path: str | None = None

    @classmethod
    def failure(cls, kind: FailureKind, reason: str) -> "TerminalOutcome":
        return cls(success=False, kind=kind, reason=reason)

    @property
    def identifier(self) -> str | None:
        return self.card.identifier if self.card else None

    def to_dict(self) -> dict[str, object]:
        if not self.success:
            kind = self.kind.value if self.kind else FailureKind.INTERNAL_ERROR.value
            return {"success": False, "error": kind, "reason": self.reason}
        return {
            "success": True,
            "identifier": self.identifier,
            "card": self.card.to_dict() if self.card else None,
            "description": self.description,
            "image_path": self.image_path,
            "verification_url": self.verification_url,
            "narration_path": self.narration_path,
            "synthetic_sample_path": self.synthetic_sample_path,
        }
