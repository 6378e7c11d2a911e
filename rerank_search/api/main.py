"""FastAPI main application for the rerank search service."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time

from ..core.config import settings
from ..core.logging_config import setup_logging, get_logger
from ..inference.pipeline import search_pipeline
from .middleware import ExceptionHandlingMiddleware, RequestLoggingMiddleware
from .routers import search


# Setup logging
setup_logging()
logger = get_logger(__name__, "api_main")

app = FastAPI(
    title="Rerank Search API",
    description="Query embedding, Supabase similarity search and Cohere reranking",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)

# Order matters - first added runs last
app.add_middleware(ExceptionHandlingMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(search.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed bodies without echoing the input back."""
    logger.warning(
        f"Rejected malformed request body on {request.url.path}",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "path": request.url.path,
            "error_count": len(exc.errors())
        }
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body."}
    )


@app.on_event("startup")
async def startup_event():
    """Build the long-lived service clients."""
    try:
        logger.info("Starting Rerank Search API...")

        search_pipeline.initialize()

        logger.info("Rerank Search API started successfully")

    except Exception as e:
        logger.error(f"Failed to start application: {str(e)}", exc_info=True)
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Release shared HTTP sessions."""
    logger.info("Shutting down Rerank Search API...")

    for client in (search_pipeline.vector_store, search_pipeline.reranker):
        session = getattr(client, "session", None)
        if session is not None:
            session.close()

    logger.info("Rerank Search API shutdown complete")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Rerank Search API",
        "version": "1.0.0",
        "status": "running",
        "timestamp": time.time(),
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health")
async def health_check():
    """Report whether the service clients were built."""
    pipeline_health = search_pipeline.health_check()

    return JSONResponse(
        status_code=200 if pipeline_health["healthy"] else 503,
        content={
            "status": "healthy" if pipeline_health["healthy"] else "unhealthy",
            "timestamp": time.time(),
            "version": "1.0.0",
            "pipeline": pipeline_health,
            "api": {
                "status": "healthy",
                "uptime_seconds": time.time() - startup_time
            }
        }
    )


# Store startup time for uptime calculation
startup_time = time.time()


def run() -> None:
    """Serve the API with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(
        "rerank_search.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=False
    )


if __name__ == "__main__":
    run()
