"""
Crawl Backend Client

Async client for the crawl backend API. Calls never raise on transport
problems: every method returns an ApiResponse whose `error` carries the
reason, and nothing is retried.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from crawl_console.models.backend import (
    ApiResponse,
    CrawlJob,
    ExportOptions,
    HealthStatus,
    UrlValidationResult,
)

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error occurred"

_jobs_adapter = TypeAdapter(list[CrawlJob])
_validation_adapter = TypeAdapter(list[UrlValidationResult])


def _http_error(resp: httpx.Response) -> str:
    return f"HTTP {resp.status_code}: {resp.reason_phrase}"


def _exception_message(exc: Exception) -> str:
    return str(exc) or UNKNOWN_ERROR


class BackendClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        parse: Any = None,
    ) -> ApiResponse:
        """
        Send a JSON request and wrap the outcome in an ApiResponse.

        Args:
            parse: Optional callable applied to the decoded JSON body
        """
        url = f"{self.base_url}{endpoint}"
        try:
            async with self._client() as client:
                resp = await client.request(method, url, json=json)
            if not resp.is_success:
                logger.warning(f"Backend {method} {endpoint} failed: {resp.status_code}")
                return ApiResponse(success=False, error=_http_error(resp))
            data = resp.json() if resp.content else None
            if parse is not None and data is not None:
                data = parse(data)
            return ApiResponse(success=True, data=data)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Backend {method} {endpoint} error: {exc}")
            return ApiResponse(success=False, error=_exception_message(exc))

    async def start_crawl(self, urls: list[str]) -> ApiResponse:
        return await self._request(
            "POST", "/crawl", json={"urls": urls}, parse=CrawlJob.model_validate
        )

    async def get_crawl_job(self, job_id: str) -> ApiResponse:
        return await self._request(
            "GET", f"/crawl/{job_id}", parse=CrawlJob.model_validate
        )

    async def get_crawl_jobs(self) -> ApiResponse:
        return await self._request(
            "GET", "/crawl", parse=_jobs_adapter.validate_python
        )

    async def stop_crawl(self, job_id: str) -> ApiResponse:
        return await self._request("POST", f"/crawl/{job_id}/stop")

    async def validate_urls(self, urls: list[str]) -> ApiResponse:
        return await self._request(
            "POST",
            "/validate",
            json={"urls": urls},
            parse=_validation_adapter.validate_python,
        )

    async def export_results(self, options: ExportOptions) -> ApiResponse:
        """Request an export; `data` holds the raw file bytes."""
        payload = options.model_dump(by_alias=True, exclude_none=True)
        try:
            async with self._client() as client:
                resp = await client.post(f"{self.base_url}/export", json=payload)
            if not resp.is_success:
                logger.warning(f"Backend export failed: {resp.status_code}")
                return ApiResponse(success=False, error=_http_error(resp))
            return ApiResponse(success=True, data=resp.content)
        except httpx.HTTPError as exc:
            logger.warning(f"Backend export error: {exc}")
            return ApiResponse(success=False, error=_exception_message(exc))

    async def health_check(self) -> ApiResponse:
        return await self._request(
            "GET", "/health", parse=HealthStatus.model_validate
        )
