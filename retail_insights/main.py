"""
FastAPI Production Application

Main entry point for the Retail Insights API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from retail_insights.analytics.exceptions import InvalidInput
from retail_insights.config import get_settings
from retail_insights.config.logging import configure_logging
from retail_insights.serving.api import create_api_app

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()

    logger.info("Starting Retail Insights API", environment=settings.app_env)

    # Warm the snapshot so the first report request does not pay for loading
    try:
        snapshot = app.state.snapshot_loader()
        logger.info("Fact table snapshot ready", rows=len(snapshot), source=snapshot.source)
    except (FileNotFoundError, InvalidInput) as e:
        logger.warning(f"Snapshot preload failed: {e}")

    yield

    logger.info("Shutting down...")


app = create_api_app(lifespan=lifespan)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
