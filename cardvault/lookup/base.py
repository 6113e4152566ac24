from abc import ABC, abstractmethod

from cardvault.lookup.models import LookupResult


class BaseLookupClient(ABC):
    """Contract for web lookup providers used during enrichment."""

    @abstractmethod
    def search(self, query: str) -> LookupResult:
        """Return snippets and an optional synthesized answer for ``query``.

        Raises:
            LookupClientError: on any provider failure.
        """
