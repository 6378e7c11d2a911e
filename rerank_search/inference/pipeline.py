"""Query pipeline: embed, match, rerank."""

import time
from typing import Any, Dict, List, Optional

from ..core.config import settings
from ..core.exceptions import SearchPipelineException
from ..core.logging_config import get_logger, log_performance
from ..models.document import Document
from ..models.reranker import RerankCandidate, RerankResult
from ..vector_store.embeddings import OpenAIEmbeddingClient
from ..vector_store.supabase_store import SupabaseVectorStore
from .reranker.base_reranker import BaseReranker
from .reranker.cohere_reranker import CohereReranker


class SearchPipeline:
    """Holds the long-lived service clients and runs one search per call.

    Clients may be injected; any left as ``None`` are built from settings in
    :meth:`initialize`. Nothing request-specific is stored on the instance.
    """

    def __init__(
        self,
        embedder: Optional[OpenAIEmbeddingClient] = None,
        vector_store: Optional[SupabaseVectorStore] = None,
        reranker: Optional[BaseReranker] = None,
        match_threshold: float = None,
        match_count: int = None,
        top_n: int = None
    ):
        self.logger = get_logger(__name__, "search_pipeline")
        self.embedder = embedder
        self.vector_store = vector_store
        self.reranker = reranker
        self.match_threshold = settings.match_threshold if match_threshold is None else match_threshold
        self.match_count = settings.match_count if match_count is None else match_count
        self.top_n = settings.rerank_top_n if top_n is None else top_n
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Build and warm the service clients."""
        if self._initialized:
            return

        try:
            start_time = time.time()

            if self.embedder is None:
                self.embedder = OpenAIEmbeddingClient()
            if self.vector_store is None:
                self.vector_store = SupabaseVectorStore()
            if self.reranker is None:
                self.reranker = CohereReranker()

            self.embedder.load()
            self.vector_store.initialize()
            self.reranker.initialize()

            self._initialized = True

            self.logger.info(
                "Search pipeline initialized successfully",
                extra={"init_time_ms": (time.time() - start_time) * 1000}
            )

        except Exception as e:
            raise SearchPipelineException(
                f"Failed to initialize search pipeline: {str(e)}",
                component="search_pipeline",
                error_code="PIPELINE_INIT_FAILED"
            ) from e

    async def list_documents(self) -> List[Document]:
        """Unranked path: every document in the table."""
        self.initialize()
        return await self.vector_store.list_documents_async()

    async def search(self, query: str) -> List[RerankResult]:
        """Ranked path. Remote calls run one after another, never retried."""
        self.initialize()

        start_time = time.time()

        embedding = await self.embedder.embed_query_async(query)

        matches = await self.vector_store.match_documents_async(
            embedding,
            match_threshold=self.match_threshold,
            limit=self.match_count
        )

        candidates = [
            RerankCandidate(index=index, title=doc.title, content=doc.content)
            for index, doc in enumerate(matches)
        ]

        results = await self.reranker.rerank_async(query, candidates, top_n=self.top_n)

        log_performance(
            self.logger,
            "search_pipeline",
            (time.time() - start_time) * 1000,
            metadata={
                "query_length": len(query),
                "candidate_count": len(candidates),
                "result_count": len(results)
            }
        )

        return results

    def health_check(self) -> Dict[str, Any]:
        """Report which clients are constructed. Makes no upstream calls."""
        components = {
            "embedder": "healthy" if self.embedder is not None else "not_available",
            "vector_store": "healthy" if self.vector_store is not None else "not_available",
            "reranker": "healthy" if self.reranker is not None else "not_available"
        }

        return {
            "healthy": self._initialized and all(v == "healthy" for v in components.values()),
            "components": components,
            "timestamp": time.time()
        }


# Global search pipeline instance
search_pipeline = SearchPipeline()


def get_search_pipeline() -> SearchPipeline:
    """FastAPI dependency returning the process-wide pipeline."""
    return search_pipeline
