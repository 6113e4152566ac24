from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the extraction capability before completeness checks."""

    valid: bool
    fields: dict[str, Any] = field(default_factory=dict)
    rejection_reason: str | None = None
