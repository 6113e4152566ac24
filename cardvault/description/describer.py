"""Description with optional web enrichment and a deterministic fallback."""

from dataclasses import dataclass, field

from cardvault.cards.models import CardAttributes
from cardvault.description.base import BaseDescriptionWriter
from cardvault.description.base_description import build_base_description
from cardvault.logging.logger import Log
from cardvault.lookup.base import BaseLookupClient
from cardvault.lookup.models import LookupResult


@dataclass
class DescriptionOutcome:
    description: str
    lookup: LookupResult | None = None
    warnings: list[str] = field(default_factory=list)


def lookup_query(card: CardAttributes) -> str:
    return f"PSA {card.year} {card.manufacturer} {card.subject} collector facts significance"


class Describer:
    """Produces a card description; never raises for capability failures.

    Without enrichment the deterministic base description is returned and no
    external call is made. With enrichment the lookup (when configured) and
    the writer are tried in turn; each failure is recorded as a warning and
    the base description is kept whenever the writer fails.
    """

    def __init__(
        self,
        writer: BaseDescriptionWriter | None,
        lookup_client: BaseLookupClient | None = None,
    ) -> None:
        self._writer = writer
        self._lookup_client = lookup_client

    def describe(
        self,
        card: CardAttributes,
        verification_url: str | None = None,
        hint: str | None = None,
        enrich: bool = False,
    ) -> DescriptionOutcome:
        base = build_base_description(card, verification_url)
        outcome = DescriptionOutcome(description=base)
        if not enrich:
            return outcome

        outcome.lookup = self._lookup(card, outcome.warnings)
        research = outcome.lookup.summary() if outcome.lookup else None

        if self._writer is None:
            outcome.warnings.append("Description enhancement skipped: no writer configured")
            return outcome
        try:
            outcome.description = self._writer.write(card, base, hint=hint, research=research)
        except Exception as exc:
            Log.warning(f"Description enhancement failed, using base description: {exc}")
            outcome.warnings.append(f"Description enhancement failed: {exc}")
        return outcome

    def _lookup(self, card: CardAttributes, warnings: list[str]) -> LookupResult | None:
        if self._lookup_client is None:
            warnings.append("Web lookup requested but no lookup provider is configured")
            return None
        try:
            result = self._lookup_client.search(lookup_query(card))
        except Exception as exc:
            Log.warning(f"Lookup failed: {exc}")
            warnings.append(f"Lookup failed: {exc}")
            return None
        Log.info(f"Lookup returned {len(result.snippets)} snippets for {card.identifier}")
        return result
