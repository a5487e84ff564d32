"""
Crawl Backend Models

Types exchanged with the crawl backend API. The backend speaks camelCase
JSON; fields are snake_case in Python and aliased on the wire.
"""

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

JobStatus = Literal["pending", "running", "completed", "failed"]
ExportFormat = Literal["json", "csv", "xlsx", "markdown"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope returned by every backend call"""

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None


class CrawlJob(_CamelModel):
    """A crawl job tracked by the backend"""

    id: str
    url: str
    status: JobStatus
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None
    results_count: int | None = Field(default=None, ge=0)


class UrlValidationResult(_CamelModel):
    """Backend reachability check for one URL"""

    url: str
    is_valid: bool
    status: int | None = None
    error: str | None = None
    response_time: float | None = None


class ExportOptions(_CamelModel):
    """Export request for a finished job"""

    format: ExportFormat = "json"
    job_id: str
    filename: str | None = None


class HealthStatus(BaseModel):
    status: str


class UrlListRequest(BaseModel):
    urls: list[str] = Field(..., min_length=1)


class JobSummary(BaseModel):
    """Dashboard counts over the known jobs"""

    total: int = Field(..., ge=0)
    active: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    recent: list[CrawlJob]
    error: str | None = Field(
        default=None, description="Last transport error from the backend, if any"
    )
