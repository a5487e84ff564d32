"""
Crawl Progress Models

Pydantic models for the simulated crawl session and its control endpoints.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CrawlStatus = Literal["idle", "running", "paused", "completed", "failed"]
CrawlCommand = Literal["start", "pause", "resume", "stop"]


class CrawlProgress(BaseModel):
    """Observable state of the crawl session"""

    model_config = ConfigDict(frozen=True)

    status: CrawlStatus = Field(default="idle", description="Session status")
    target_url: str | None = Field(
        default=None, description="URL the session was started with"
    )
    total_pages: int = Field(default=0, ge=0)
    crawled_pages: int = Field(default=0, ge=0)
    failed_pages: int = Field(default=0, ge=0)
    queue_size: int = Field(default=0, ge=0)
    current_url: str | None = Field(
        default=None, description="Page currently being processed"
    )
    start_time: datetime | None = Field(
        default=None, description="When the session was started (UTC)"
    )
    elapsed_seconds: int = Field(default=0, ge=0)
    estimated_remaining_seconds: int | None = Field(default=None, ge=0)


class ProgressSnapshot(BaseModel):
    """Progress plus the derived figures shown on the dashboard"""

    progress: CrawlProgress
    progress_percentage: float = Field(..., ge=0.0, le=100.0)
    success_rate: float = Field(..., ge=0.0, le=100.0)
    elapsed_display: str
    remaining_display: str | None = None
    available_commands: list[CrawlCommand]


class StartCrawlRequest(BaseModel):
    """Request to start a crawl session"""

    url: str = Field(
        ..., description="Absolute http(s) URL to crawl", examples=["https://example.com"]
    )


class CommandResponse(BaseModel):
    """Result of a session control command"""

    command: CrawlCommand
    changed: bool = Field(
        ..., description="False when the command did not apply to the current status"
    )
    snapshot: ProgressSnapshot
