"""
FastAPI Application Factory

Creates and configures the report API application.
"""

from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import structlog

from retail_insights.analytics.exceptions import ArithmeticOverflow, EmptyResultError, InvalidInput
from retail_insights.config import get_settings
from retail_insights.ingestion.snapshot import FactTableSnapshot
from retail_insights.serving.api.dependencies import load_configured_snapshot
from retail_insights.serving.api.middleware import RequestLoggingMiddleware
from retail_insights.serving.api.routes import health_router, reports_router

logger = structlog.get_logger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
        logger.error("Invalid fact table", error=str(exc), row_index=exc.row_index)
        return JSONResponse(status_code=422, content={"detail": str(exc), "row_index": exc.row_index})

    @app.exception_handler(EmptyResultError)
    async def empty_result_handler(request: Request, exc: EmptyResultError) -> JSONResponse:
        logger.warning("Empty report result", error=str(exc), path=request.url.path)
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ArithmeticOverflow)
    async def overflow_handler(request: Request, exc: ArithmeticOverflow) -> JSONResponse:
        logger.error("Report arithmetic overflow", error=str(exc), path=request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(FileNotFoundError)
    async def missing_source_handler(request: Request, exc: FileNotFoundError) -> JSONResponse:
        logger.error("Fact table source missing", error=str(exc))
        return JSONResponse(status_code=503, content={"detail": "Fact table snapshot unavailable"})


def create_api_app(
    snapshot_loader: Optional[Callable[[], FactTableSnapshot]] = None,
    lifespan=None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        snapshot_loader: Returns the snapshot served by the reports
            (default: the configured file, loaded once)
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Retail Insights API",
        description="Business reports over the retail order-lines fact table",
        version=settings.version,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.snapshot_loader = snapshot_loader or load_configured_snapshot

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)

    _register_error_handlers(app)

    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(reports_router, prefix="/api/v1/reports", tags=["Reports"])

    @app.get("/api/v1/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "Retail Insights API",
            "version": settings.version,
            "environment": settings.app_env,
            "documentation": "/docs",
        }

    return app
