"""Turns raw extraction JSON into domain objects."""

from typing import Any

from cardvault.cards.models import CardAttributes
from cardvault.extraction.exceptions import ExtractionError, ExtractionIncompleteError
from cardvault.extraction.models import ExtractionResult

REQUIRED_FIELDS = ("subject", "year", "manufacturer", "grade", "identifier")
OPTIONAL_FIELDS = ("sub_category", "sub_number")
_MIN_GRADE = 1.0
_MAX_GRADE = 10.0


def parse_extraction(data: dict[str, Any]) -> ExtractionResult:
    """Build an ExtractionResult from the provider's JSON object.

    Raises:
        ExtractionError: if the validity flag is missing or not a boolean.
    """
    valid = data.get("is_valid_card")
    if not isinstance(valid, bool):
        raise ExtractionError("'is_valid_card' must be a boolean")
    fields = {
        name: data.get(name)
        for name in (*REQUIRED_FIELDS, *OPTIONAL_FIELDS)
        if data.get(name) is not None
    }
    reason = data.get("rejection_reason")
    if reason is not None and not isinstance(reason, str):
        reason = str(reason)
    return ExtractionResult(valid=valid, fields=fields, rejection_reason=reason or None)


def build_card_attributes(fields: dict[str, Any]) -> CardAttributes:
    """Validate required attributes and build CardAttributes.

    Raises:
        ExtractionIncompleteError: listing every required field that is
            absent, blank, or (for grade) not a number within 1-10.
    """
    grade = _grade(fields.get("grade"))
    missing = [
        name
        for name in REQUIRED_FIELDS
        if (grade is None if name == "grade" else not _text(fields.get(name)))
    ]
    if missing:
        raise ExtractionIncompleteError(missing)
    return CardAttributes(
        subject=_text(fields["subject"]),
        year=_text(fields["year"]),
        manufacturer=_text(fields["manufacturer"]),
        grade=grade,
        identifier=_text(fields["identifier"]),
        sub_category=_text(fields.get("sub_category")) or None,
        sub_number=_text(fields.get("sub_number")) or None,
    )


def _text(raw: Any) -> str:
    if raw is None or isinstance(raw, bool):
        return ""
    return str(raw).strip()


def _grade(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        grade = float(raw)
    except (TypeError, ValueError):
        return None
    if not _MIN_GRADE <= grade <= _MAX_GRADE:
        return None
    return grade
