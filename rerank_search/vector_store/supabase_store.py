"""Supabase-backed similarity search and document table access.

Both operations go through Supabase's PostgREST interface: similarity search
is the ``match_documents`` remote procedure, the unranked listing is a plain
table select. The HTTP session is created once and shared across requests.
"""

import asyncio
import time
import threading
from typing import List, Sequence

import requests

from ..core.config import settings
from ..core.exceptions import DocumentStoreException, VectorStoreException
from ..core.logging_config import get_logger, log_performance
from ..models.document import Document

DOCUMENT_COLUMNS = "id,title,content"


class SupabaseVectorStore:
    """Client for the hosted vector store and its document table."""

    def __init__(
        self,
        url: str = None,
        service_key: str = None,
        table: str = None,
        match_function: str = None,
        timeout: float = None
    ):
        self.logger = get_logger(__name__, "vector_store")
        self.url = (url or settings.supabase_url or "").rstrip("/")
        self.service_key = service_key or settings.supabase_service_role_key
        self.table = table or settings.documents_table
        self.match_function = match_function or settings.match_function
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.session = None
        self._lock = threading.RLock()

        if not self.url or not self.service_key:
            raise VectorStoreException(
                "Supabase URL and service role key must both be provided",
                component="vector_store",
                error_code="MISSING_SUPABASE_CONFIG",
                details={"has_url": bool(self.url), "has_key": bool(self.service_key)}
            )

    @property
    def rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    def initialize(self) -> None:
        """Create the shared HTTP session."""
        with self._lock:
            if self.session is not None:
                return

            self.session = requests.Session()
            # Sessions are not persisted; every call uses the service role key
            self.session.headers.update({
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
                "Content-Type": "application/json",
                "Accept": "application/json"
            })

            self.logger.info(
                "Supabase session initialized",
                extra={"table": self.table, "match_function": self.match_function}
            )

    def match_documents(
        self,
        embedding: Sequence[float],
        match_threshold: float = None,
        limit: int = None
    ) -> List[Document]:
        """Run the similarity search RPC and return records in ranked order."""
        self.initialize()

        match_threshold = settings.match_threshold if match_threshold is None else match_threshold
        limit = settings.match_count if limit is None else limit

        try:
            start_time = time.time()

            response = self.session.post(
                f"{self.rest_url}/rpc/{self.match_function}",
                params={"select": DOCUMENT_COLUMNS, "limit": limit},
                json={
                    "query_embedding": list(embedding),
                    "match_threshold": match_threshold
                },
                timeout=self.timeout
            )

            if response.status_code != 200:
                raise VectorStoreException(
                    f"{self.match_function} RPC failed: {response.status_code} - {response.text}",
                    component="vector_store",
                    error_code="MATCH_RPC_FAILED",
                    details={"status_code": response.status_code}
                )

            documents = [Document.from_row(row) for row in response.json()]

            duration = (time.time() - start_time) * 1000

            log_performance(
                self.logger,
                "match_documents",
                duration,
                metadata={
                    "match_threshold": match_threshold,
                    "limit": limit,
                    "result_count": len(documents)
                }
            )

            return documents

        except VectorStoreException:
            raise
        except Exception as e:
            raise VectorStoreException(
                f"Unexpected error calling {self.match_function}: {str(e)}",
                component="vector_store",
                error_code="MATCH_RPC_ERROR",
                details={"match_threshold": match_threshold, "limit": limit}
            ) from e

    async def match_documents_async(
        self,
        embedding: Sequence[float],
        match_threshold: float = None,
        limit: int = None
    ) -> List[Document]:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None, self.match_documents, embedding, match_threshold, limit
        )

    def list_documents(self) -> List[Document]:
        """Return every record in the document table, unfiltered."""
        self.initialize()

        try:
            start_time = time.time()

            response = self.session.get(
                f"{self.rest_url}/{self.table}",
                params={"select": DOCUMENT_COLUMNS},
                timeout=self.timeout
            )

            if response.status_code != 200:
                raise DocumentStoreException(
                    f"Reading {self.table} failed: {response.status_code} - {response.text}",
                    component="document_store",
                    error_code="TABLE_READ_FAILED",
                    details={"status_code": response.status_code, "table": self.table}
                )

            documents = [Document.from_row(row) for row in response.json()]

            log_performance(
                self.logger,
                "list_documents",
                (time.time() - start_time) * 1000,
                metadata={"table": self.table, "result_count": len(documents)}
            )

            return documents

        except DocumentStoreException:
            raise
        except Exception as e:
            raise DocumentStoreException(
                f"Unexpected error reading {self.table}: {str(e)}",
                component="document_store",
                error_code="TABLE_READ_ERROR",
                details={"table": self.table}
            ) from e

    async def list_documents_async(self) -> List[Document]:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, self.list_documents)
