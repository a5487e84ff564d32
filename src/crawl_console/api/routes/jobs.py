"""
Jobs Router

Crawl jobs on the backend: listing, dashboard summary, launch, stop,
URL reachability checks and result export. Backend failures are answered
with 502 and the backend's error message.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from crawl_console.api.deps import get_console
from crawl_console.models.backend import (
    CrawlJob,
    ExportOptions,
    JobSummary,
    UrlValidationResult,
    UrlListRequest,
)
from crawl_console.services.console import CrawlConsole

router = APIRouter()

EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "markdown": "text/markdown",
}


EMPTY_RESPONSE = "empty response"


def _backend_error(error: str | None) -> HTTPException:
    return HTTPException(status_code=502, detail=f"Crawl backend error: {error}")


def _ascii_filename(filename: str) -> str:
    return "".join(
        ch if ch.isascii() and ch.isprintable() and ch not in '"\\' else "_"
        for ch in filename
    )


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    return (
        f'attachment; filename="{_ascii_filename(filename)}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


@router.get("", response_model=list[CrawlJob])
async def list_jobs(console: CrawlConsole = Depends(get_console)):
    """Refresh jobs from the backend"""
    jobs = await console.refresh_jobs()
    if console.jobs_error:
        raise _backend_error(console.jobs_error)
    return jobs


@router.post("", response_model=CrawlJob)
async def launch_job(
    request: UrlListRequest, console: CrawlConsole = Depends(get_console)
):
    resp = await console.launch_job(request.urls)
    if not resp.success:
        raise _backend_error(resp.error)
    if resp.data is None:
        raise _backend_error(EMPTY_RESPONSE)
    return resp.data


@router.get("/summary", response_model=JobSummary)
async def get_job_summary(console: CrawlConsole = Depends(get_console)):
    """
    Dashboard counts

    A failed refresh keeps the last known jobs and reports the error in the
    summary instead of failing the request.
    """
    await console.refresh_jobs()
    return console.job_summary()


@router.post("/validate", response_model=list[UrlValidationResult])
async def validate_urls(
    request: UrlListRequest, console: CrawlConsole = Depends(get_console)
):
    resp = await console.backend.validate_urls(request.urls)
    if not resp.success:
        raise _backend_error(resp.error)
    return resp.data or []


@router.post("/export")
async def export_results(
    options: ExportOptions, console: CrawlConsole = Depends(get_console)
):
    resp = await console.backend.export_results(options)
    if not resp.success:
        raise _backend_error(resp.error)
    filename = options.filename or f"crawl-{options.job_id}.{options.format}"
    return Response(
        content=resp.data or b"",
        media_type=EXPORT_MEDIA_TYPES[options.format],
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.get("/{job_id}", response_model=CrawlJob)
async def get_job(job_id: str, console: CrawlConsole = Depends(get_console)):
    resp = await console.sync_job(job_id)
    if not resp.success:
        raise _backend_error(resp.error)
    if resp.data is None:
        raise _backend_error(EMPTY_RESPONSE)
    return resp.data


@router.post("/{job_id}/stop")
async def stop_job(job_id: str, console: CrawlConsole = Depends(get_console)):
    resp = await console.stop_job(job_id)
    if not resp.success:
        raise _backend_error(resp.error)
    return {"status": "stopped", "job_id": job_id}
