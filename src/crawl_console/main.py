"""
Main Application Entry Point

FastAPI application factory and router registration.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crawl_console.api.middleware.request_logging import RequestLoggingMiddleware
from crawl_console.api.routes import config, health, history, jobs, session, url_input
from crawl_console.api.routes.health import root_router as health_root_router
from crawl_console.core.config import settings
from crawl_console.core.events import lifespan
from crawl_console.services.console import CrawlConsole


def create_app(console: CrawlConsole | None = None) -> FastAPI:
    """
    FastAPI application factory

    Creates and configures the FastAPI application with all routers.

    Args:
        console: Console state to serve; built from settings when omitted
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Control console for web-crawl sessions",
        lifespan=lifespan,
    )
    app.state.console = console or CrawlConsole.from_settings(settings)

    app.add_middleware(RequestLoggingMiddleware)
    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH"],
            allow_headers=["*"],
        )

    # Root-level health endpoints (Kubernetes probes)
    app.include_router(health_root_router, tags=["health"])

    # Register routers with /api/v1 prefix
    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(session.router, prefix="/api/v1/session", tags=["session"])
    app.include_router(config.router, prefix="/api/v1/config", tags=["config"])
    app.include_router(history.router, prefix="/api/v1", tags=["history"])
    app.include_router(url_input.router, prefix="/api/v1/url-input", tags=["url-input"])
    app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["jobs"])

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    uvicorn.run(
        "crawl_console.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
