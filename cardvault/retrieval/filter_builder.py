"""Qdrant filter construction from SearchFilters."""

from qdrant_client.models import FieldCondition, Filter, MatchValue, Range

from cardvault.retrieval.models import SearchFilters


class QdrantFilterBuilder:
    """Builds Qdrant Filter objects from SearchFilters.

    Supported filters:
    - subject, year, manufacturer: exact match on the payload field
    - min_grade / max_grade: range on the numeric grade field
    """

    EQUALITY_FIELDS = ("subject", "year", "manufacturer")

    def build(self, filters: SearchFilters | None) -> Filter | None:
        """Return a conjunctive Filter, or None if no filter is set."""
        if filters is None or filters.is_empty():
            return None

        must: list[FieldCondition] = []
        for key in self.EQUALITY_FIELDS:
            value = getattr(filters, key)
            if value is not None:
                must.append(FieldCondition(key=key, match=MatchValue(value=value)))

        if filters.min_grade is not None or filters.max_grade is not None:
            must.append(
                FieldCondition(
                    key="grade",
                    range=Range(gte=filters.min_grade, lte=filters.max_grade),
                )
            )
        return Filter(must=must)
