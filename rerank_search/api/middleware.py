"""Request logging and error handling middleware for the search API."""

import time
import uuid
from typing import Callable
from fastapi import Request, Response, HTTPException, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging_config import get_logger, log_exception


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Global exception handling middleware. Never echoes exception details."""

    def __init__(self, app):
        super().__init__(app)
        self.logger = get_logger(__name__, "exception_middleware")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except Exception as e:
            log_exception(self.logger, e, {"path": request.url.path})
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "An unexpected error occurred."}
            )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request/response logging middleware."""

    def __init__(self, app):
        super().__init__(app)
        self.logger = get_logger(__name__, "request_middleware")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        start_time = time.time()

        request.state.request_id = request_id

        self.logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client_host": request.client.host if request.client else None
            }
        )

        response = await call_next(request)

        duration = (time.time() - start_time) * 1000

        self.logger.info(
            f"Request completed: {response.status_code}",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": duration
            }
        )

        response.headers["X-Request-ID"] = request_id

        return response
