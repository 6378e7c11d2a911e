"""Abstract base class for reranker implementations."""

import asyncio
from abc import ABC, abstractmethod
from typing import List

from ...core.logging_config import get_logger
from ...models.reranker import RerankResult, RerankCandidate


class BaseReranker(ABC):
    """Abstract base class for all reranker implementations."""

    def __init__(self, model_name: str = None):
        self.logger = get_logger(__name__, "reranker")
        self.model_name = model_name
        self._initialized = False

    @abstractmethod
    def _initialize(self) -> None:
        """Initialize the reranker model/client."""
        pass

    @abstractmethod
    def _rerank_batch(
        self,
        query: str,
        candidates: List[RerankCandidate],
        top_n: int
    ) -> List[RerankResult]:
        """Perform the actual reranking."""
        pass

    def rerank(
        self,
        query: str,
        candidates: List[RerankCandidate],
        top_n: int = 3
    ) -> List[RerankResult]:
        """Rerank candidates based on relevance to query. Every call reaches the service."""
        if not self._initialized:
            self._initialize()

        results = self._rerank_batch(query, candidates, top_n)

        self.logger.info(
            f"Reranked {len(candidates)} candidates to top {len(results)}",
            extra={
                "query_length": len(query),
                "candidate_count": len(candidates),
                "result_count": len(results),
                "reranker_type": self.__class__.__name__
            }
        )

        return results

    async def rerank_async(
        self,
        query: str,
        candidates: List[RerankCandidate],
        top_n: int = 3
    ) -> List[RerankResult]:
        """Asynchronously rerank candidates."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.rerank, query, candidates, top_n)
