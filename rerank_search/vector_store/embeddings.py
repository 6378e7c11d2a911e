"""OpenAI embedding client wrapper."""

import asyncio
import time
import threading
from typing import List

from openai import OpenAI

from ..core.config import settings
from ..core.exceptions import EmbeddingException
from ..core.logging_config import get_logger, log_performance


class OpenAIEmbeddingClient:
    """Wrapper around the OpenAI embeddings endpoint."""

    def __init__(self, api_key: str = None, model_name: str = None, timeout: float = None):
        self.logger = get_logger(__name__, "embeddings")
        self.api_key = api_key or settings.openai_api_key
        self.model_name = model_name or settings.embedding_model
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._client = None
        self._lock = threading.RLock()

        if not self.api_key:
            raise EmbeddingException(
                "OpenAI API key not provided",
                component="embeddings",
                error_code="MISSING_API_KEY"
            )

    def load(self) -> None:
        """Explicitly create the API client for application startup."""
        self._load_client()

    def _load_client(self) -> None:
        """Create the OpenAI client with thread safety."""
        with self._lock:
            if self._client is None:
                # No SDK-level retries; one failed call fails the request
                client_kwargs = {"api_key": self.api_key, "max_retries": 0}
                if self.timeout is not None:
                    client_kwargs["timeout"] = self.timeout
                self._client = OpenAI(**client_kwargs)
                self.logger.info(f"OpenAI embedding client ready for model: {self.model_name}")

    @property
    def is_loaded(self) -> bool:
        return self._client is not None

    def embed_query(self, text: str) -> List[float]:
        """Embed a single query string exactly as given."""
        self._load_client()

        try:
            start_time = time.time()

            response = self._client.embeddings.create(
                input=text,
                model=self.model_name
            )

            data = response.data
            if len(data) != 1:
                raise EmbeddingException(
                    f"Expected exactly one embedding, got {len(data)}",
                    component="embeddings",
                    error_code="MALFORMED_RESPONSE",
                    details={"embedding_count": len(data)}
                )

            embedding = data[0].embedding

            duration = (time.time() - start_time) * 1000

            log_performance(
                self.logger,
                "embed_query",
                duration,
                metadata={
                    "model": self.model_name,
                    "text_length": len(text),
                    "dimension": len(embedding)
                }
            )

            return embedding

        except EmbeddingException:
            raise
        except Exception as e:
            raise EmbeddingException(
                f"Failed to generate embedding: {str(e)}",
                component="embeddings",
                error_code="EMBEDDING_FAILED",
                details={"model": self.model_name}
            ) from e

    async def embed_query_async(self, text: str) -> List[float]:
        """Asynchronously embed a query string."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.embed_query, text)
