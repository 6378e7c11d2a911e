"""Reranker data models for the search service."""

from typing import Any, Dict
from dataclasses import dataclass


@dataclass
class RerankResult:
    """Container for rerank results."""
    title: str
    content: str
    relevance_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "relevance_score": self.relevance_score
        }


@dataclass
class RerankCandidate:
    """Container for rerank candidate."""
    index: int
    title: str
    content: str
