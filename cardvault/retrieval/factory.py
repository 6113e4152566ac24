from qdrant_client import QdrantClient

from cardvault.config.settings import Settings
from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.retrieval.qdrant_index import QdrantVectorIndex


class RetrievalEngineFactory:
    """Creates the Qdrant client, both collections and the hybrid engine."""

    @classmethod
    def create_client(cls, settings: Settings) -> QdrantClient:
        if settings.qdrant_url:
            return QdrantClient(
                url=settings.qdrant_url,
                api_key=settings.qdrant_api_key,
                timeout=settings.qdrant_timeout_seconds,
            )
        if settings.qdrant_location == ":memory:":
            return QdrantClient(location=":memory:")
        return QdrantClient(path=settings.qdrant_location)

    @classmethod
    def create(
        cls,
        settings: Settings,
        client: QdrantClient | None = None,
    ) -> HybridRetrievalEngine:
        client = client or cls.create_client(settings)
        text_index = QdrantVectorIndex(
            client=client,
            collection_name=settings.text_collection_name,
            dimensions=settings.text_embedding_dimensions,
        )
        image_index = QdrantVectorIndex(
            client=client,
            collection_name=settings.image_collection_name,
            dimensions=settings.image_embedding_dimensions,
        )
        text_index.ensure_collection()
        image_index.ensure_collection()
        return HybridRetrievalEngine(text_index, image_index)
