from abc import ABC, abstractmethod

from cardvault.cards.models import CardAttributes


class BaseDescriptionWriter(ABC):
    """Contract for text-generation adapters that write card descriptions."""

    @abstractmethod
    def write(
        self,
        card: CardAttributes,
        base_description: str,
        hint: str | None = None,
        research: str | None = None,
    ) -> str:
        """Merge attributes, baseline text and optional research into prose.

        Raises:
            DescriptionError: on any failure or empty output.
        """
