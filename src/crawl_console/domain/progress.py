"""
Crawl Progress Domain Logic

Pure reducers for the simulated crawl session. Every function takes a
CrawlProgress and returns a new one; nothing here touches timers or I/O,
so the tick can be replayed deterministically from a seeded draw source.
"""

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from crawl_console.models.config import CrawlConfiguration
from crawl_console.models.progress import CrawlCommand, CrawlProgress, ProgressSnapshot

# Draw thresholds: a page is crawled when the draw exceeds ADVANCE_THRESHOLD, etc.
ADVANCE_THRESHOLD = 0.7
FAILURE_THRESHOLD = 0.95
QUEUE_BUMP_THRESHOLD = 0.8
QUEUE_BUMP = 2

INITIAL_QUEUE_LIMIT = 10
SECONDS_PER_PAGE = 2

ACTIVE_STATUSES = ("running", "paused")


@dataclass(frozen=True)
class TickDraws:
    """Random draws in [0, 1) consumed by one tick"""

    advance: float
    failure: float
    queue: float


class DrawSource(Protocol):
    def draw(self) -> TickDraws: ...


class RandomDrawSource:
    """Draw source backed by random.Random; pass a seed for reproducible runs"""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def draw(self) -> TickDraws:
        return TickDraws(
            advance=self._rng.random(),
            failure=self._rng.random(),
            queue=self._rng.random(),
        )


def initial_progress() -> CrawlProgress:
    return CrawlProgress()


def start_progress(
    url: str, config: CrawlConfiguration, now: datetime
) -> CrawlProgress:
    """Fresh running progress for a session on `url`."""
    total = config.max_pages
    return CrawlProgress(
        status="running",
        target_url=url,
        total_pages=total,
        crawled_pages=0,
        failed_pages=0,
        queue_size=min(INITIAL_QUEUE_LIMIT, total),
        current_url=url,
        start_time=now,
        elapsed_seconds=0,
        estimated_remaining_seconds=total * SECONDS_PER_PAGE,
    )


def pause_progress(progress: CrawlProgress) -> CrawlProgress:
    if progress.status != "running":
        return progress
    return progress.model_copy(update={"status": "paused"})


def resume_progress(progress: CrawlProgress) -> CrawlProgress:
    if progress.status != "paused":
        return progress
    return progress.model_copy(update={"status": "running"})


def stop_progress(progress: CrawlProgress) -> CrawlProgress:
    """Back to idle; counters keep their last values."""
    if progress.status not in ACTIVE_STATUSES:
        return progress
    return progress.model_copy(update={"status": "idle", "current_url": None})


def fail_progress(progress: CrawlProgress) -> CrawlProgress:
    if progress.status not in ACTIVE_STATUSES:
        return progress
    return progress.model_copy(
        update={"status": "failed", "current_url": None, "estimated_remaining_seconds": None}
    )


def is_complete(crawled_pages: int, total_pages: int, queue_size: int) -> bool:
    return crawled_pages >= total_pages or queue_size == 0


def page_url(target_url: str | None, page_number: int) -> str:
    """Synthetic identifier for the page being processed."""
    base = (target_url or "").rstrip("/")
    return f"{base}/page-{page_number}"


def advance_progress(
    progress: CrawlProgress, draws: TickDraws, now: datetime | None = None
) -> CrawlProgress:
    """
    Apply one simulation tick.

    Args:
        progress: Current progress; returned unchanged unless running
        draws: Random draws for this tick
        now: Current time, used with start_time to compute elapsed seconds

    Returns:
        New progress, completed when every page is crawled or the queue drains
    """
    if progress.status != "running":
        return progress

    if progress.start_time is not None and now is not None:
        elapsed = max(0, int((now - progress.start_time).total_seconds()))
    else:
        elapsed = progress.elapsed_seconds + 1

    total = progress.total_pages
    crawled = progress.crawled_pages
    if draws.advance > ADVANCE_THRESHOLD:
        crawled += 1
    crawled = min(crawled, total)

    failed = progress.failed_pages
    if draws.failure > FAILURE_THRESHOLD:
        failed += 1
    failed = min(failed, crawled)

    bump = QUEUE_BUMP if draws.queue > QUEUE_BUMP_THRESHOLD else 0
    queue = max(0, progress.queue_size - 1 + bump)

    update = {
        "elapsed_seconds": elapsed,
        "crawled_pages": crawled,
        "failed_pages": failed,
        "queue_size": queue,
    }
    if is_complete(crawled, total, queue):
        update.update(
            status="completed", current_url=None, estimated_remaining_seconds=0
        )
    else:
        update.update(
            current_url=page_url(progress.target_url, crawled + 1),
            estimated_remaining_seconds=max(0, (total - crawled) * SECONDS_PER_PAGE),
        )
    return progress.model_copy(update=update)


def available_commands(status: str) -> list[CrawlCommand]:
    if status == "running":
        return ["pause", "stop"]
    if status == "paused":
        return ["resume", "stop"]
    return ["start"]


def progress_percentage(progress: CrawlProgress) -> float:
    if progress.total_pages <= 0:
        return 0.0
    return progress.crawled_pages / progress.total_pages * 100


def success_rate(progress: CrawlProgress) -> float:
    if progress.crawled_pages <= 0:
        return 0.0
    return (progress.crawled_pages - progress.failed_pages) / progress.crawled_pages * 100


def format_duration(seconds: int) -> str:
    """Render seconds as '1h 2m 3s', '2m 5s' or '7s'."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def describe_progress(progress: CrawlProgress) -> ProgressSnapshot:
    remaining = progress.estimated_remaining_seconds
    return ProgressSnapshot(
        progress=progress,
        progress_percentage=round(progress_percentage(progress), 2),
        success_rate=round(success_rate(progress), 2),
        elapsed_display=format_duration(progress.elapsed_seconds),
        remaining_display=format_duration(remaining) if remaining is not None else None,
        available_commands=available_commands(progress.status),
    )
