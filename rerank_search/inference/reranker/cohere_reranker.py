"""Cohere reranker implementation."""

import time
import threading
from typing import List
import requests

from ...core.config import settings
from ...core.exceptions import RerankerException
from ...core.logging_config import log_performance
from .base_reranker import BaseReranker, RerankCandidate, RerankResult


class CohereReranker(BaseReranker):
    """Cohere Rerank v2 API implementation."""

    def __init__(self, api_key: str = None, model_name: str = None, timeout: float = None):
        super().__init__(model_name or settings.rerank_model)
        self.api_key = api_key or settings.cohere_api_key
        self.base_url = "https://api.cohere.com/v2"
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.session = None
        self._lock = threading.RLock()

        if not self.api_key:
            raise RerankerException(
                "Cohere API key not provided",
                component="reranker",
                error_code="MISSING_API_KEY"
            )

    def initialize(self) -> None:
        """Explicitly initialize the reranker for application startup."""
        self._initialize()

    def _initialize(self) -> None:
        """Initialize the Cohere client session with thread safety."""
        with self._lock:
            if self._initialized:
                return

            self.session = requests.Session()
            self.session.headers.update({
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json"
            })
            self._initialized = True

            self.logger.info(f"Cohere reranker initialized with model: {self.model_name}")

    def _rerank_batch(
        self,
        query: str,
        candidates: List[RerankCandidate],
        top_n: int
    ) -> List[RerankResult]:
        """Perform reranking using Cohere API."""
        try:
            start_time = time.time()

            response = self.session.post(
                f"{self.base_url}/rerank",
                json={
                    "model": self.model_name,
                    "query": query,
                    "documents": [candidate.content for candidate in candidates],
                    "top_n": top_n
                },
                timeout=self.timeout
            )

            if response.status_code != 200:
                raise RerankerException(
                    f"Cohere rerank failed: {response.status_code} - {response.text}",
                    component="reranker",
                    error_code="COHERE_RERANK_FAILED",
                    details={"status_code": response.status_code}
                )

            result_data = response.json()
            results = []

            # Results arrive most relevant first; keep that order
            for result in result_data.get("results", []):
                original_index = result["index"]
                if not 0 <= original_index < len(candidates):
                    raise RerankerException(
                        f"Cohere returned out-of-range index {original_index}",
                        component="reranker",
                        error_code="COHERE_MALFORMED_RESPONSE",
                        details={"index": original_index, "candidate_count": len(candidates)}
                    )
                candidate = candidates[original_index]

                results.append(RerankResult(
                    title=candidate.title,
                    content=candidate.content,
                    relevance_score=result["relevance_score"]
                ))

            duration = (time.time() - start_time) * 1000

            log_performance(
                self.logger,
                "cohere_rerank",
                duration,
                metadata={
                    "query_length": len(query),
                    "candidate_count": len(candidates),
                    "result_count": len(results),
                    "top_n": top_n,
                    "model": self.model_name
                }
            )

            return results

        except RerankerException:
            raise
        except Exception as e:
            raise RerankerException(
                f"Unexpected error in Cohere reranking: {str(e)}",
                component="reranker",
                error_code="COHERE_UNEXPECTED_ERROR",
                details={
                    "query_length": len(query),
                    "candidate_count": len(candidates)
                }
            ) from e
