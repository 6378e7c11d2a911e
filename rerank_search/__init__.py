"""Rerank search service: query embedding, similarity search and reranking."""

__version__ = "1.0.0"
