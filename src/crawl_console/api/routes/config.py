"""
Crawl Configuration Router

Read, partially update and reset the configuration used by the next start.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from crawl_console.api.deps import get_console
from crawl_console.models.config import ConfigUpdateRequest, CrawlConfiguration
from crawl_console.services.console import CrawlConsole

router = APIRouter()


@router.get("", response_model=CrawlConfiguration)
async def get_config(console: CrawlConsole = Depends(get_console)):
    return console.config_editor.config


@router.patch("", response_model=CrawlConfiguration)
async def update_config(
    request: ConfigUpdateRequest, console: CrawlConsole = Depends(get_console)
):
    """
    Merge the given fields into the configuration

    Numeric fields are clamped to their allowed ranges instead of rejected.
    """
    try:
        return console.config_editor.update(request.changes())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {e}")


@router.post("/reset", response_model=CrawlConfiguration)
async def reset_config(console: CrawlConsole = Depends(get_console)):
    return console.config_editor.reset()
