"""Custom exceptions for the rerank search service."""

from typing import Any, Dict, Optional
import traceback
from datetime import datetime, timezone


class SearchServiceException(Exception):
    """Base exception for search service errors."""

    def __init__(
        self,
        message: str,
        component: str = "unknown",
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.component = component
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "component": self.component,
            "error_code": self.error_code,
            "details": self.details,
            "timestamp": self.timestamp,
            "traceback": traceback.format_exc()
        }


class VectorStoreException(SearchServiceException):
    """Exception for similarity search calls."""
    pass


class DocumentStoreException(SearchServiceException):
    """Exception for plain document table reads."""
    pass


class EmbeddingException(SearchServiceException):
    """Exception for embedding operations."""
    pass


class RerankerException(SearchServiceException):
    """Exception for reranking operations."""
    pass


class SearchPipelineException(SearchServiceException):
    """Exception for search pipeline setup and orchestration."""
    pass
