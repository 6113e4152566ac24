from dataclasses import dataclass, field


@dataclass(frozen=True)
class Snippet:
    """One search hit."""

    title: str
    content: str


@dataclass(frozen=True)
class LookupResult:
    """Supplementary facts gathered for a card."""

    snippets: list[Snippet] = field(default_factory=list)
    answer: str | None = None

    def summary(self, max_facts: int = 3) -> str | None:
        """Condense the answer and the first facts into prompt-ready text."""
        facts = "\n".join(
            f"Fact {i}: {s.title} - {s.content}"
            for i, s in enumerate(self.snippets[:max_facts], start=1)
        )
        parts = [f"Summary: {self.answer}" if self.answer else "", facts]
        combined = "\n\n".join(p for p in parts if p).strip()
        return combined or None
