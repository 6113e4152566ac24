from collections.abc import Generator

import pytest
from qdrant_client import QdrantClient

from cardvault.config.settings import Settings
from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.retrieval.factory import RetrievalEngineFactory


@pytest.fixture()
def qdrant_client() -> Generator[QdrantClient, None, None]:
    client = QdrantClient(location=":memory:")
    yield client
    client.close()


@pytest.fixture()
def engine(example_settings: Settings, qdrant_client: QdrantClient) -> HybridRetrievalEngine:
    """Hybrid engine over a fresh embedded Qdrant instance."""
    return RetrievalEngineFactory.create(example_settings, client=qdrant_client)
