"""
Crawl Session Router

Start/pause/resume/stop commands and the progress snapshot.
"""

from fastapi import APIRouter, Depends, HTTPException

from crawl_console.api.deps import get_console
from crawl_console.domain.urls import InvalidUrlError
from crawl_console.models.progress import (
    CommandResponse,
    ProgressSnapshot,
    StartCrawlRequest,
)
from crawl_console.services.console import CrawlConsole

router = APIRouter()


@router.get("", response_model=ProgressSnapshot)
async def get_session(console: CrawlConsole = Depends(get_console)):
    """Get current crawl progress"""
    return console.session.snapshot()


@router.post("/start", response_model=CommandResponse)
async def start_session(
    request: StartCrawlRequest, console: CrawlConsole = Depends(get_console)
):
    """
    Start crawling a URL

    The URL is validated first; a rejected URL leaves the session and the
    URL history untouched. Starting while a session is running or paused
    does nothing (changed=false).
    """
    try:
        started = await console.submit(request.url)
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CommandResponse(
        command="start",
        changed=started,
        snapshot=console.session.snapshot(),
    )


@router.post("/pause", response_model=CommandResponse)
async def pause_session(console: CrawlConsole = Depends(get_console)):
    changed = await console.session.pause()
    return CommandResponse(
        command="pause", changed=changed, snapshot=console.session.snapshot()
    )


@router.post("/resume", response_model=CommandResponse)
async def resume_session(console: CrawlConsole = Depends(get_console)):
    changed = await console.session.resume()
    return CommandResponse(
        command="resume", changed=changed, snapshot=console.session.snapshot()
    )


@router.post("/stop", response_model=CommandResponse)
async def stop_session(console: CrawlConsole = Depends(get_console)):
    """Stop the session; counters keep their last values"""
    changed = await console.session.stop()
    return CommandResponse(
        command="stop", changed=changed, snapshot=console.session.snapshot()
    )
