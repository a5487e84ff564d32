"""
Request Logging Middleware

Tags every request with an X-Request-ID and logs one line per response.
Session commands also log the crawl status they left behind.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("crawl_console.api")

SESSION_PREFIX = "/api/v1/session"


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 2)


def _session_status(request: Request) -> str | None:
    console = getattr(request.app.state, "console", None)
    if console is None or not request.url.path.startswith(SESSION_PREFIX):
        return None
    return console.session.progress.status


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {request.url.path} failed: {e}",
                extra={"request_id": request_id, "duration_ms": _elapsed_ms(start_time)},
            )
            raise

        message = f"{request.method} {request.url.path} -> {response.status_code}"
        status = _session_status(request)
        if status is not None:
            message += f" (session {status})"
        logger.info(
            message,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start_time),
            },
        )
        response.headers["X-Request-ID"] = request_id
        return response
