from dataclasses import dataclass, field


@dataclass(frozen=True)
class CardAttributes:
    """Descriptive attributes read from a grading label."""

    subject: str
    year: str
    manufacturer: str
    grade: float
    identifier: str  # certification number
    sub_category: str | None = None  # set name, e.g. "Chrome"
    sub_number: str | None = None  # card number within the set, e.g. "#23"

    @property
    def grade_label(self) -> str:
        return f"{self.grade:g}"

    def to_dict(self) -> dict[str, object]:
        return {
            "subject": self.subject,
            "year": self.year,
            "manufacturer": self.manufacturer,
            "grade": self.grade,
            "identifier": self.identifier,
            "sub_category": self.sub_category,
            "sub_number": self.sub_number,
        }


@dataclass(frozen=True)
class CardRecord:
    """Durable unit stored by the retrieval engine, keyed by identifier."""

    attributes: CardAttributes
    image_path: str
    created_at: str
    text_embedding: tuple[float, ...] = field(default_factory=tuple)
    image_embedding: tuple[float, ...] = field(default_factory=tuple)

    @property
    def identifier(self) -> str:
        return self.attributes.identifier

    def to_dict(self) -> dict[str, object]:
        """Serialize without embedding values."""
        return {
            **self.attributes.to_dict(),
            "image_path": self.image_path,
            "created_at": self.created_at,
        }
