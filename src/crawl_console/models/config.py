"""
Crawl Configuration Models

Bounded crawl parameters. Numeric fields never hold an out-of-range value:
input is coerced to an integer, replaced by a fallback when it is not a
number, and clamped to the field's bounds.
"""

import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_USER_AGENT = "JumboWebCrawler/1.0"
DEFAULT_CONTENT_TYPES = ["text/html"]

# field -> (lower, upper, fallback)
NUMERIC_BOUNDS: dict[str, tuple[int, int, int]] = {
    "max_pages": (1, 1000, 1),
    "max_depth": (1, 10, 1),
    "crawl_delay_ms": (500, 5000, 1000),
    "timeout_ms": (5000, 30000, 10000),
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> int | None:
    """Parse the leading integer of a value, or None if it has none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def clamp_int(value: Any, lower: int, upper: int, fallback: int) -> int:
    """
    Coerce a value into [lower, upper].

    Zero and non-numeric input take the fallback before clamping.
    """
    parsed = parse_int(value)
    if not parsed:
        parsed = fallback
    return max(lower, min(upper, parsed))


class CrawlConfiguration(BaseModel):
    """Crawl parameters consumed when a session starts"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_pages: int = Field(
        default=50, ge=1, le=1000, description="Maximum number of pages to crawl"
    )
    max_depth: int = Field(
        default=3, ge=1, le=10, description="Maximum depth from the starting URL"
    )
    respect_robots_txt: bool = Field(
        default=True, description="Honor robots.txt directives"
    )
    crawl_delay_ms: int = Field(
        default=1000, ge=500, le=5000, description="Delay between requests (ms)"
    )
    include_external_links: bool = Field(
        default=False, description="Follow links that point to other domains"
    )
    content_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_TYPES),
        description="Accepted MIME types",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User agent sent with requests"
    )
    timeout_ms: int = Field(
        default=10000, ge=5000, le=30000, description="Request timeout (ms)"
    )

    @field_validator(*NUMERIC_BOUNDS, mode="before")
    @classmethod
    def _clamp_numeric(cls, value: Any, info: ValidationInfo) -> int:
        lower, upper, fallback = NUMERIC_BOUNDS[info.field_name]
        return clamp_int(value, lower, upper, fallback)

    @field_validator("content_types", mode="before")
    @classmethod
    def _dedupe_content_types(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            seen: list[str] = []
            for item in value:
                if isinstance(item, str):
                    item = item.strip()
                    if not item or item in seen:
                        continue
                seen.append(item)
            return seen
        return value


class ConfigUpdateRequest(BaseModel):
    """Partial configuration update; numeric fields accept any input and are clamped"""

    model_config = ConfigDict(extra="forbid")

    max_pages: Any = None
    max_depth: Any = None
    respect_robots_txt: bool | None = None
    crawl_delay_ms: Any = None
    include_external_links: bool | None = None
    content_types: list[str] | None = None
    user_agent: str | None = None
    timeout_ms: Any = None

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set in the request"""
        return self.model_dump(exclude_unset=True)
