"""Unit tests for the Supabase store client."""

import pytest
from unittest.mock import Mock, patch
import requests

from rerank_search.vector_store.supabase_store import SupabaseVectorStore
from rerank_search.models.document import Document
from rerank_search.core.exceptions import DocumentStoreException, VectorStoreException


ROWS = [
    {"id": 1, "title": "First", "content": "first body"},
    {"id": 2, "title": "Second", "content": "second body"},
]


def _response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


class TestSupabaseVectorStore:
    """Test suite for SupabaseVectorStore."""

    @pytest.fixture
    def store(self):
        return SupabaseVectorStore(
            url="https://example.supabase.co/",
            service_key="service_key",
            table="documents",
            match_function="match_documents"
        )

    def test_missing_config(self):
        with patch('rerank_search.vector_store.supabase_store.settings') as mock_settings:
            mock_settings.supabase_url = None
            mock_settings.supabase_service_role_key = None

            with pytest.raises(VectorStoreException) as exc_info:
                SupabaseVectorStore()

            assert exc_info.value.error_code == "MISSING_SUPABASE_CONFIG"

    def test_rest_url_strips_trailing_slash(self, store):
        assert store.rest_url == "https://example.supabase.co/rest/v1"

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_session_headers(self, mock_session, store):
        store.initialize()
        store.initialize()

        mock_session.assert_called_once()
        headers = mock_session.return_value.headers.update.call_args[0][0]
        assert headers["apikey"] == "service_key"
        assert headers["Authorization"] == "Bearer service_key"

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_match_documents(self, mock_session, store):
        session = mock_session.return_value
        session.post.return_value = _response(payload=ROWS)

        documents = store.match_documents([0.1, 0.2], match_threshold=0.3, limit=10)

        assert documents == [Document(1, "First", "first body"), Document(2, "Second", "second body")]
        session.post.assert_called_once_with(
            "https://example.supabase.co/rest/v1/rpc/match_documents",
            params={"select": "id,title,content", "limit": 10},
            json={"query_embedding": [0.1, 0.2], "match_threshold": 0.3},
            timeout=store.timeout
        )

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_match_documents_defaults(self, mock_session, store):
        session = mock_session.return_value
        session.post.return_value = _response(payload=[])

        assert store.match_documents([0.1]) == []

        _, kwargs = session.post.call_args
        assert kwargs["json"]["match_threshold"] == 0.3
        assert kwargs["params"]["limit"] == 10

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_match_documents_http_error(self, mock_session, store):
        mock_session.return_value.post.return_value = _response(404, text="function not found")

        with pytest.raises(VectorStoreException) as exc_info:
            store.match_documents([0.1])

        assert exc_info.value.error_code == "MATCH_RPC_FAILED"
        assert exc_info.value.details["status_code"] == 404

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_match_documents_connection_error(self, mock_session, store):
        mock_session.return_value.post.side_effect = requests.Timeout("timed out")

        with pytest.raises(VectorStoreException) as exc_info:
            store.match_documents([0.1])

        assert exc_info.value.error_code == "MATCH_RPC_ERROR"

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_list_documents(self, mock_session, store):
        session = mock_session.return_value
        session.get.return_value = _response(payload=ROWS)

        documents = store.list_documents()

        assert [doc.to_dict() for doc in documents] == ROWS
        session.get.assert_called_once_with(
            "https://example.supabase.co/rest/v1/documents",
            params={"select": "id,title,content"},
            timeout=store.timeout
        )

    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    def test_list_documents_failure(self, mock_session, store):
        mock_session.return_value.get.return_value = _response(500, text="oops")

        with pytest.raises(DocumentStoreException) as exc_info:
            store.list_documents()

        assert exc_info.value.error_code == "TABLE_READ_FAILED"

    @pytest.mark.asyncio
    @patch('rerank_search.vector_store.supabase_store.requests.Session')
    async def test_async_wrappers(self, mock_session, store):
        session = mock_session.return_value
        session.post.return_value = _response(payload=ROWS[:1])
        session.get.return_value = _response(payload=ROWS)

        matches = await store.match_documents_async([0.1], 0.3, 10)
        documents = await store.list_documents_async()

        assert len(matches) == 1
        assert len(documents) == 2


if __name__ == "__main__":
    pytest.main([__file__])
