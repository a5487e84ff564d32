"""
Health Check Router

Provides Kubernetes-compatible health check endpoints:
- /health: Simple health for load balancers
- /health/live: Liveness probe (process alive)
- /health/ready: Readiness probe (history store reachable)

The crawl backend is reported in the readiness checks but does not make
the console unready.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from crawl_console.api.deps import get_console
from crawl_console.services.console import CrawlConsole

logger = logging.getLogger(__name__)

# Router for /api/v1 prefix
router = APIRouter()

# Router for root-level health endpoints
root_router = APIRouter()


def _check_history_store(console: CrawlConsole) -> bool:
    try:
        console.history_store.store.ping()
        return True
    except sqlite3.Error as e:
        logger.warning(f"History store health check failed: {e}")
        return False


# --- Root-level endpoints (Kubernetes probes) ---


@root_router.get("/health")
async def health():
    """Simple health check for load balancers."""
    return {"status": "ok"}


@root_router.get("/health/live")
async def liveness():
    """Kubernetes liveness probe - is the process running?"""
    return {"status": "ok"}


@root_router.get("/health/ready")
async def readiness(console: CrawlConsole = Depends(get_console)):
    """Kubernetes readiness probe - are dependencies healthy?"""
    backend = await console.backend.health_check()
    checks = {
        "history_store": "ok" if _check_history_store(console) else "unhealthy",
        "backend": "ok" if backend.success else "unreachable",
    }

    healthy = checks["history_store"] == "ok"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "unhealthy", "checks": checks},
    )


# --- /api/v1 endpoints ---


@router.get("/health")
async def health_check():
    return {"status": "ok"}
