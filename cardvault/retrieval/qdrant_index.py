import uuid
from typing import Any

from qdrant_client import QdrantClient
from qdrant_client.models import (
    Distance,
    PayloadSchemaType,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from cardvault.logging.logger import Log
from cardvault.retrieval.base import BaseVectorIndex
from cardvault.retrieval.exceptions import RetrievalError
from cardvault.retrieval.filter_builder import QdrantFilterBuilder
from cardvault.retrieval.models import IndexMatch, SearchFilters

_POINT_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "cardvault/cards")
_SCROLL_PAGE = 256

PAYLOAD_INDEXES: dict[str, PayloadSchemaType] = {
    "identifier": PayloadSchemaType.KEYWORD,
    "subject": PayloadSchemaType.KEYWORD,
    "year": PayloadSchemaType.KEYWORD,
    "manufacturer": PayloadSchemaType.KEYWORD,
    "grade": PayloadSchemaType.FLOAT,
}


def point_id(identifier: str) -> str:
    """Qdrant only accepts UUID or integer ids; derive a stable UUID."""
    return str(uuid.uuid5(_POINT_NAMESPACE, identifier))


class QdrantVectorIndex(BaseVectorIndex):
    """One Qdrant collection holding a single modality's vectors."""

    def __init__(
        self,
        *,
        client: QdrantClient,
        collection_name: str,
        dimensions: int,
        filter_builder: QdrantFilterBuilder | None = None,
    ) -> None:
        self._client = client
        self._filter_builder = filter_builder or QdrantFilterBuilder()
        self.name = collection_name
        self.dimensions = dimensions

    def ensure_collection(self) -> None:
        """Create the collection (cosine distance) and its payload indexes if missing.

        An existing collection must hold vectors of the configured size.

        Raises:
            RetrievalError: if the collection cannot be prepared or its vector
                size differs from ``dimensions``.
        """
        try:
            info = None
            if self._client.collection_exists(collection_name=self.name):
                info = self._client.get_collection(collection_name=self.name)
        except Exception as exc:
            raise RetrievalError(f"Failed to prepare collection {self.name}: {exc}") from exc
        if info is not None:
            vectors = info.config.params.vectors
            size = vectors.size if isinstance(vectors, VectorParams) else None
            if size != self.dimensions:
                raise RetrievalError(
                    f"Collection {self.name} stores {size}d vectors but {self.dimensions}d "
                    "are configured; recreate it or restore the embedding dimensions"
                )
            return
        try:
            self._client.create_collection(
                collection_name=self.name,
                vectors_config=VectorParams(size=self.dimensions, distance=Distance.COSINE),
            )
            for field, schema in PAYLOAD_INDEXES.items():
                self._client.create_payload_index(
                    collection_name=self.name,
                    field_name=field,
                    field_schema=schema,
                )
        except Exception as exc:
            raise RetrievalError(f"Failed to prepare collection {self.name}: {exc}") from exc
        Log.info(f"Created collection {self.name} ({self.dimensions}d)")

    def upsert(self, identifier: str, vector: list[float], payload: dict[str, Any]) -> None:
        try:
            self._client.upsert(
                collection_name=self.name,
                points=[PointStruct(id=point_id(identifier), vector=vector, payload=payload)],
                wait=True,
            )
        except Exception as exc:
            raise RetrievalError(f"Upsert into {self.name} failed: {exc}") from exc

    def query(
        self,
        vector: list[float],
        top_k: int,
        filters: SearchFilters | None = None,
    ) -> list[IndexMatch]:
        try:
            response = self._client.query_points(
                collection_name=self.name,
                query=vector,
                limit=top_k,
                query_filter=self._filter_builder.build(filters),
                with_payload=True,
            )
        except Exception as exc:
            raise RetrievalError(f"Query on {self.name} failed: {exc}") from exc
        return [self._to_match(point.payload, point.score) for point in response.points]

    def scan(self, limit: int) -> list[IndexMatch]:
        matches: list[IndexMatch] = []
        offset = None
        try:
            while len(matches) < limit:
                points, offset = self._client.scroll(
                    collection_name=self.name,
                    limit=min(_SCROLL_PAGE, limit - len(matches)),
                    offset=offset,
                    with_payload=True,
                    with_vectors=False,
                )
                matches.extend(self._to_match(point.payload, 0.0) for point in points)
                if offset is None:
                    break
        except Exception as exc:
            raise RetrievalError(f"Scan of {self.name} failed: {exc}") from exc
        return matches

    def delete(self, identifier: str) -> None:
        try:
            self._client.delete(
                collection_name=self.name,
                points_selector=PointIdsList(points=[point_id(identifier)]),
                wait=True,
            )
        except Exception as exc:
            raise RetrievalError(f"Delete from {self.name} failed: {exc}") from exc

    @staticmethod
    def _to_match(payload: dict[str, Any] | None, score: float) -> IndexMatch:
        payload = payload or {}
        return IndexMatch(
            identifier=str(payload.get("identifier", "")),
            score=float(score),
            payload=payload,
        )
