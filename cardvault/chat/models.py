from dataclasses import dataclass, field
from typing import Any

from cardvault.retrieval.models import SearchResult


@dataclass(frozen=True)
class ChatMessage:
    """One conversation turn. ``role`` is ``user``, ``assistant`` or ``system``."""

    role: str
    content: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatMessage":
        """Accept ``{"role", "content"}`` or the ``{"role", "parts": [...]}`` shape."""
        parts = data.get("parts")
        if parts:
            content = "".join(
                str(part.get("text", "")) for part in parts if part.get("type") == "text"
            )
        else:
            content = str(data.get("content") or "")
        return cls(role=str(data.get("role", "user")), content=content)


@dataclass(frozen=True)
class ChatAnswer:
    text: str
    results: list[SearchResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "answer": self.text,
            "cards": [result.to_dict() for result in self.results],
        }
