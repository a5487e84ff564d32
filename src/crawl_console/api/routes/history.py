"""
History Router

Recently submitted URLs, most recent first.
"""

from fastapi import APIRouter, Depends

from crawl_console.api.deps import get_console
from crawl_console.services.console import CrawlConsole

router = APIRouter()


@router.get("/history", response_model=list[str])
async def get_url_history(console: CrawlConsole = Depends(get_console)):
    return console.history
