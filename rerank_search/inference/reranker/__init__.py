"""Reranker implementations."""

from .base_reranker import BaseReranker
from .cohere_reranker import CohereReranker

__all__ = [
    "BaseReranker",
    "CohereReranker",
]
