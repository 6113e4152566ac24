from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.retrieval.factory import RetrievalEngineFactory
from cardvault.retrieval.models import FusionWeights, SearchFilters, SearchResult

__all__ = [
    "FusionWeights",
    "HybridRetrievalEngine",
    "RetrievalEngineFactory",
    "SearchFilters",
    "SearchResult",
]
