"""Unit tests for embedding functionality."""

import pytest
from unittest.mock import Mock, patch

from rerank_search.vector_store.embeddings import OpenAIEmbeddingClient
from rerank_search.core.exceptions import EmbeddingException


def _embedding_response(*vectors):
    return Mock(data=[Mock(embedding=list(v)) for v in vectors])


class TestOpenAIEmbeddingClient:
    """Test suite for OpenAIEmbeddingClient."""

    @pytest.fixture
    def embedder(self):
        """Create a test embedding client instance."""
        return OpenAIEmbeddingClient(api_key="test_key", model_name="test-embedding-model")

    def test_default_model(self):
        embedder = OpenAIEmbeddingClient(api_key="test_key")
        assert embedder.model_name == "text-embedding-3-small"

    def test_missing_api_key(self):
        with patch('rerank_search.vector_store.embeddings.settings') as mock_settings:
            mock_settings.openai_api_key = None

            with pytest.raises(EmbeddingException) as exc_info:
                OpenAIEmbeddingClient()

            assert exc_info.value.error_code == "MISSING_API_KEY"

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_client_loading(self, mock_openai):
        """Without a configured timeout the SDK keeps its own default."""
        with patch('rerank_search.vector_store.embeddings.settings') as mock_settings:
            mock_settings.request_timeout = None
            embedder = OpenAIEmbeddingClient(api_key="test_key", model_name="test-embedding-model")

        embedder.load()
        embedder.load()

        assert embedder.is_loaded
        mock_openai.assert_called_once_with(api_key="test_key", max_retries=0)

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_client_loading_with_timeout(self, mock_openai):
        embedder = OpenAIEmbeddingClient(api_key="test_key", model_name="test-embedding-model", timeout=5.0)

        embedder.load()

        mock_openai.assert_called_once_with(api_key="test_key", max_retries=0, timeout=5.0)

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_embed_query_uses_exact_text(self, mock_openai, embedder):
        """The query goes to the API untouched."""
        mock_client = mock_openai.return_value
        mock_client.embeddings.create.return_value = _embedding_response([0.1, 0.2, 0.3])

        result = embedder.embed_query("  Mixed Case Query  ")

        assert result == [0.1, 0.2, 0.3]
        mock_client.embeddings.create.assert_called_once_with(
            input="  Mixed Case Query  ",
            model="test-embedding-model"
        )

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_embed_query_rejects_multiple_embeddings(self, mock_openai, embedder):
        mock_openai.return_value.embeddings.create.return_value = _embedding_response([0.1], [0.2])

        with pytest.raises(EmbeddingException) as exc_info:
            embedder.embed_query("query")

        assert exc_info.value.error_code == "MALFORMED_RESPONSE"

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_embed_query_rejects_empty_response(self, mock_openai, embedder):
        mock_openai.return_value.embeddings.create.return_value = _embedding_response()

        with pytest.raises(EmbeddingException) as exc_info:
            embedder.embed_query("query")

        assert exc_info.value.error_code == "MALFORMED_RESPONSE"

    @patch('rerank_search.vector_store.embeddings.OpenAI')
    def test_embed_query_api_failure(self, mock_openai, embedder):
        mock_openai.return_value.embeddings.create.side_effect = RuntimeError("boom")

        with pytest.raises(EmbeddingException) as exc_info:
            embedder.embed_query("query")

        assert "Failed to generate embedding" in str(exc_info.value)
        assert exc_info.value.error_code == "EMBEDDING_FAILED"

    @pytest.mark.asyncio
    @patch('rerank_search.vector_store.embeddings.OpenAI')
    async def test_embed_query_async(self, mock_openai, embedder):
        mock_openai.return_value.embeddings.create.return_value = _embedding_response([0.5, 0.5])

        result = await embedder.embed_query_async("query")

        assert result == [0.5, 0.5]


if __name__ == "__main__":
    pytest.main([__file__])
