"""Search API endpoint."""

from typing import Optional
from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...core.exceptions import DocumentStoreException, VectorStoreException
from ...core.logging_config import get_logger, log_exception
from ...inference.pipeline import SearchPipeline, get_search_pipeline


router = APIRouter(tags=["search"])
logger = get_logger(__name__, "search_api")

ALL_DOCUMENTS_ERROR = "Error retrieving all documents."
MATCH_DOCUMENTS_ERROR = "Error calling match_documents in Supabase."
UNEXPECTED_ERROR = "An unexpected error occurred."


class SearchRequest(BaseModel):
    """Request model for search. An empty query lists every document."""
    query: Optional[str] = Field(default=None, description="Free-text search query")


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message}
    )


@router.post("/search")
async def search(
    http_request: Request,
    request: Optional[SearchRequest] = Body(default=None),
    pipeline: SearchPipeline = Depends(get_search_pipeline)
):
    """Return the top reranked matches for ``query``, or all documents without one."""
    request_id = getattr(http_request.state, "request_id", "unknown")
    query = request.query if request else None

    try:
        if not query:
            try:
                documents = await pipeline.list_documents()
            except DocumentStoreException as e:
                log_exception(logger, e, {"request_id": request_id})
                return _error(ALL_DOCUMENTS_ERROR)

            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={"data": [doc.to_dict() for doc in documents]}
            )

        logger.info(
            "Processing search request",
            extra={"request_id": request_id, "query_length": len(query)}
        )

        try:
            results = await pipeline.search(query)
        except VectorStoreException as e:
            log_exception(logger, e, {"request_id": request_id})
            return _error(MATCH_DOCUMENTS_ERROR)

        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"data": [result.to_dict() for result in results]}
        )

    except Exception as e:
        log_exception(logger, e, {"request_id": request_id, "path": "/search"})
        return _error(UNEXPECTED_ERROR)
