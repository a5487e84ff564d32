"""
URL Input Router

Draft URL with debounced validation, history selection and submission.
"""

from fastapi import APIRouter, Depends, HTTPException

from crawl_console.api.deps import get_console
from crawl_console.domain.urls import InvalidUrlError
from crawl_console.models.progress import CommandResponse
from crawl_console.models.url_input import (
    HistorySelection,
    UrlInputChange,
    UrlInputState,
)
from crawl_console.services.console import CrawlConsole

router = APIRouter()


@router.get("", response_model=UrlInputState)
async def get_url_input(console: CrawlConsole = Depends(get_console)):
    return console.url_input.state()


@router.put("", response_model=UrlInputState, status_code=202)
async def change_url_input(
    request: UrlInputChange, console: CrawlConsole = Depends(get_console)
):
    """Store a draft URL; validation runs once typing settles"""
    console.url_input.change(request.value)
    return console.url_input.state()


@router.post("/validate", response_model=UrlInputState)
async def validate_url_input(console: CrawlConsole = Depends(get_console)):
    console.url_input.validate_now()
    return console.url_input.state()


@router.post("/select", response_model=UrlInputState)
async def select_history_url(
    request: HistorySelection, console: CrawlConsole = Depends(get_console)
):
    if request.url not in console.history:
        raise HTTPException(status_code=404, detail="URL not found in history")
    console.url_input.select(request.url)
    return console.url_input.state()


@router.post("/submit", response_model=CommandResponse)
async def submit_url_input(console: CrawlConsole = Depends(get_console)):
    """Validate the draft immediately and start a session on it"""
    try:
        started = await console.submit_draft()
    except InvalidUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CommandResponse(
        command="start", changed=started, snapshot=console.session.snapshot()
    )
