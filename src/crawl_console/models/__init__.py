"""
Models package initialization
"""

from crawl_console.models.backend import (
    ApiResponse,
    CrawlJob,
    ExportOptions,
    HealthStatus,
    JobSummary,
    UrlValidationResult,
    UrlListRequest,
)
from crawl_console.models.config import ConfigUpdateRequest, CrawlConfiguration
from crawl_console.models.progress import (
    CommandResponse,
    CrawlProgress,
    ProgressSnapshot,
    StartCrawlRequest,
)
from crawl_console.models.url_input import (
    HistorySelection,
    UrlCheck,
    UrlInputChange,
    UrlInputState,
)

__all__ = [
    "ApiResponse",
    "CrawlJob",
    "ExportOptions",
    "HealthStatus",
    "JobSummary",
    "UrlValidationResult",
    "UrlListRequest",
    "ConfigUpdateRequest",
    "CrawlConfiguration",
    "CommandResponse",
    "CrawlProgress",
    "ProgressSnapshot",
    "StartCrawlRequest",
    "HistorySelection",
    "UrlCheck",
    "UrlInputChange",
    "UrlInputState",
]
