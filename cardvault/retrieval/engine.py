"""Hybrid retrieval over two single-modality vector indexes.

Text and image vectors of a card live in separate indexes keyed by the card
identifier, each carrying the same metadata payload. A search queries both
independently and fuses the scores by weighted sum.

The two writes of ``store`` are not transactional: if one fails the other may
already be visible. Callers treat any raised error as a failed store.
"""

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from cardvault.cards.models import CardAttributes, CardRecord
from cardvault.logging.logger import Log
from cardvault.retrieval.base import BaseVectorIndex
from cardvault.retrieval.exceptions import PartialDeleteError, RetrievalError
from cardvault.retrieval.models import FusionWeights, IndexMatch, SearchFilters, SearchResult

OVERFETCH_FACTOR = 2


def record_payload(record: CardRecord) -> dict[str, Any]:
    return record.to_dict()


def record_from_payload(payload: dict[str, Any]) -> CardRecord:
    attributes = CardAttributes(
        subject=str(payload.get("subject", "")),
        year=str(payload.get("year", "")),
        manufacturer=str(payload.get("manufacturer", "")),
        grade=float(payload.get("grade") or 0.0),
        identifier=str(payload.get("identifier", "")),
        sub_category=payload.get("sub_category") or None,
        sub_number=payload.get("sub_number") or None,
    )
    return CardRecord(
        attributes=attributes,
        image_path=str(payload.get("image_path", "")),
        created_at=str(payload.get("created_at", "")),
    )


class HybridRetrievalEngine:
    """Stores cards in a text index and an image index and searches both."""

    def __init__(self, text_index: BaseVectorIndex, image_index: BaseVectorIndex) -> None:
        self._text_index = text_index
        self._image_index = image_index

    def store(self, record: CardRecord) -> None:
        """Upsert ``record`` into both indexes.

        Raises:
            RetrievalError: if either write fails (the other may have landed).
        """
        payload = record_payload(record)
        text_vector = list(record.text_embedding)
        image_vector = list(record.image_embedding)
        failed = self._run_on_both(
            lambda: self._text_index.upsert(record.identifier, text_vector, payload),
            lambda: self._image_index.upsert(record.identifier, image_vector, payload),
        )
        if failed:
            names = [name for name, _ in failed]
            raise RetrievalError(
                f"Failed to store card {record.identifier} in {names}"
            ) from failed[0][1]
        Log.info(f"Stored card {record.identifier} in {self._text_index.name} and {self._image_index.name}")

    def search(
        self,
        text_vector: list[float],
        image_vector: list[float],
        top_k: int = 5,
        weights: FusionWeights | None = None,
        filters: SearchFilters | None = None,
    ) -> list[SearchResult]:
        """Return up to ``top_k`` results ordered by combined score, best first.

        Each index is asked for ``2 * top_k`` neighbours. A card seen in only
        one index scores 0 in the other. Ties keep merge order: text hits
        first, then image-only hits.
        """
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        weights = weights or FusionWeights()
        fetch = top_k * OVERFETCH_FACTOR

        with ThreadPoolExecutor(max_workers=2) as pool:
            text_future = pool.submit(self._text_index.query, text_vector, fetch, filters)
            image_future = pool.submit(self._image_index.query, image_vector, fetch, filters)
            text_matches = text_future.result()
            image_matches = image_future.result()

        merged = self._merge(text_matches, image_matches)
        results = [
            SearchResult(
                record=record_from_payload(payload),
                text_score=text_score,
                image_score=image_score,
                weights=weights,
            )
            for payload, text_score, image_score in merged.values()
        ]
        results.sort(key=lambda r: r.combined_score, reverse=True)
        Log.info(f"Hybrid search returned {min(len(results), top_k)} of {len(results)} merged results")
        return results[:top_k]

    def list_all(self, limit: int = 100) -> list[CardRecord]:
        """Return up to ``limit`` stored cards without their vectors."""
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return [record_from_payload(match.payload) for match in self._text_index.scan(limit)]

    def delete(self, identifier: str) -> None:
        """Remove ``identifier`` from both indexes.

        Raises:
            PartialDeleteError: naming which indexes succeeded and failed.
        """
        failed = self._run_on_both(
            lambda: self._text_index.delete(identifier),
            lambda: self._image_index.delete(identifier),
        )
        if failed:
            failed_names = [name for name, _ in failed]
            succeeded = [
                index.name
                for index in (self._text_index, self._image_index)
                if index.name not in failed_names
            ]
            raise PartialDeleteError(identifier, succeeded, failed_names) from failed[0][1]
        Log.info(f"Deleted card {identifier} from both indexes")

    @staticmethod
    def _merge(
        text_matches: list[IndexMatch],
        image_matches: list[IndexMatch],
    ) -> dict[str, list[Any]]:
        merged: dict[str, list[Any]] = {}
        for match in text_matches:
            merged[match.identifier] = [match.payload, match.score, 0.0]
        for match in image_matches:
            entry = merged.get(match.identifier)
            if entry is None:
                merged[match.identifier] = [match.payload, 0.0, match.score]
            else:
                entry[2] = match.score
        return merged

    def _run_on_both(
        self,
        on_text: Callable[[], None],
        on_image: Callable[[], None],
    ) -> list[tuple[str, BaseException]]:
        """Run both operations concurrently; wait for both; collect failures."""
        failed: list[tuple[str, BaseException]] = []
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                (self._text_index.name, pool.submit(on_text)),
                (self._image_index.name, pool.submit(on_image)),
            ]
            for name, future in futures:
                exc = future.exception()
                if exc is not None:
                    Log.error(f"Index operation on {name} failed: {exc}")
                    failed.append((name, exc))
        return failed
