"""
Application Lifecycle Events

Manages FastAPI lifespan events for startup and shutdown.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: Load URL history (the crawl session starts idle)
    - Shutdown: Cancel the tick driver and pending validations
    """
    logger.info("🚀 Starting Crawl Console...")

    console = app.state.console
    await console.startup()
    logger.info("💡 Use POST /api/v1/session/start to begin crawling")

    yield  # Application runs here

    logger.info("🛑 Shutting down Crawl Console...")
    await console.shutdown()
    logger.info("✅ Shutdown complete")
