from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from cardvault.cards.models import CardAttributes
from cardvault.extraction.models import ExtractionResult
from cardvault.lookup.models import LookupResult
from cardvault.processor.exceptions import TerminalOutcomeAlreadySetError
from cardvault.processor.models import (
    CertificationResult,
    FailureKind,
    StepName,
    TerminalOutcome,
)

TRANSITIONS: dict[StepName, StepName] = {
    StepName.INGEST: StepName.EXTRACT,
    StepName.EXTRACT: StepName.VERIFY,
    StepName.VERIFY: StepName.ENRICH,
    StepName.ENRICH: StepName.EMBED,
    StepName.EMBED: StepName.PERSIST,
    StepName.PERSIST: StepName.END,
}

# Optional side-steps run after this step and before its successor.
SIDE_STEP_ANCHOR = StepName.ENRICH


@dataclass(slots=True)
class ProcessingState:
    """Accumulates data as one card moves through the pipeline steps."""

    image_data: bytes | str | None
    content_type: str | None
    hint: str | None = None
    enrich: bool = False
    narrate: bool = False
    synthesize: bool = False

    raw_bytes: bytes = b""
    image_bytes: bytes = b""
    image_content_type: str = ""
    extraction: ExtractionResult | None = None
    attributes: CardAttributes | None = None
    certification: CertificationResult | None = None
    lookup: LookupResult | None = None
    description: str | None = None
    text_embedding: list[float] = field(default_factory=list)
    image_embedding: list[float] = field(default_factory=list)
    image_path: str | None = None
    narration_path: str | None = None
    synthetic_sample_path: str | None = None
    synthetic_attributes: CardAttributes | None = None

    current_step: str = ""
    next_step: StepName = StepName.INGEST
    errors: list[str] = field(default_factory=list)
    outcome: TerminalOutcome | None = None

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not None

    def warn(self, message: str) -> None:
        self.errors.append(message)

    def fail(self, kind: FailureKind, reason: str) -> None:
        self._set_outcome(TerminalOutcome.failure(kind, reason))

    def succeed(self, outcome: TerminalOutcome) -> None:
        self._set_outcome(outcome)

    def require_attributes(self) -> CardAttributes:
        if self.attributes is None:
            raise ValueError("ProcessingState.attributes must be set before this step")
        return self.attributes

    def _set_outcome(self, outcome: TerminalOutcome) -> None:
        if self.outcome is not None:
            raise TerminalOutcomeAlreadySetError(
                f"terminal outcome already set ({self.outcome.kind or 'success'})"
            )
        self.outcome = outcome
        self.next_step = StepName.END


class PipelineStep(ABC):
    """One fixed step of the card pipeline.

    ``failure_kind`` is the step's error policy: an exception escaping a step
    with a failure kind ends the run with that kind; for a step without one
    it is recorded as a warning and the run continues.
    """

    name: ClassVar[StepName]
    failure_kind: ClassVar[FailureKind | None] = None

    @abstractmethod
    def run(self, state: ProcessingState) -> ProcessingState:
        raise NotImplementedError


class SideStep(ABC):
    """Optional non-fatal step inserted between two fixed steps.

    Side-steps read the state and add their own outputs; they never set a
    terminal outcome, and any exception they raise becomes a warning.
    """

    name: ClassVar[str]

    @abstractmethod
    def enabled(self, state: ProcessingState) -> bool:
        raise NotImplementedError

    @abstractmethod
    def run(self, state: ProcessingState) -> ProcessingState:
        raise NotImplementedError
