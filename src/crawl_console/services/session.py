"""
Crawl Session Service

Owns the simulated crawl progress and the background task that ticks it.
"""

import asyncio
import logging
from datetime import datetime, UTC
from typing import Callable

from crawl_console.domain.progress import (
    ACTIVE_STATUSES,
    DrawSource,
    RandomDrawSource,
    advance_progress,
    describe_progress,
    fail_progress,
    initial_progress,
    pause_progress,
    resume_progress,
    start_progress,
    stop_progress,
)
from crawl_console.domain.urls import require_valid_url
from crawl_console.models.config import CrawlConfiguration
from crawl_console.models.progress import CrawlProgress, ProgressSnapshot

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CrawlSession:
    """
    Crawl status state machine with a periodic tick driver.

    Commands and ticks take the same lock, and a tick only applies if its
    driver generation is still current and the session is running. Once
    pause() or stop() returns, no tick can change the progress.
    """

    def __init__(
        self,
        tick_interval: float = 2.0,
        draws: DrawSource | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.tick_interval = tick_interval
        self._draws = draws or RandomDrawSource()
        self._clock = clock or _utcnow
        self._progress: CrawlProgress = initial_progress()
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def progress(self) -> CrawlProgress:
        return self._progress

    @property
    def is_ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def snapshot(self) -> ProgressSnapshot:
        return describe_progress(self._progress)

    async def start(self, url: str, config: CrawlConfiguration) -> bool:
        """
        Start a session on `url`.

        Raises:
            InvalidUrlError: if `url` is blank or not an absolute http(s) URL

        Returns:
            False if a session is already running or paused
        """
        url = require_valid_url(url)
        async with self._lock:
            if self._progress.status in ACTIVE_STATUSES:
                logger.warning(
                    f"Start ignored: session is already {self._progress.status}"
                )
                return False
            self._progress = start_progress(url, config, self._clock())
            self._spawn_ticker()
        logger.info(f"✅ Crawl started for {url} (max_pages={config.max_pages})")
        return True

    async def pause(self) -> bool:
        async with self._lock:
            if self._progress.status != "running":
                logger.warning(f"Pause ignored: session is {self._progress.status}")
                return False
            self._progress = pause_progress(self._progress)
            task = self._detach_ticker()
        await self._wait_cancelled(task)
        logger.info("Crawl paused")
        return True

    async def resume(self) -> bool:
        async with self._lock:
            if self._progress.status != "paused":
                logger.warning(f"Resume ignored: session is {self._progress.status}")
                return False
            self._progress = resume_progress(self._progress)
            self._spawn_ticker()
        logger.info("Crawl resumed")
        return True

    async def stop(self) -> bool:
        """Return to idle, keeping the last counters."""
        async with self._lock:
            if self._progress.status not in ACTIVE_STATUSES:
                logger.warning(f"Stop ignored: session is {self._progress.status}")
                return False
            self._progress = stop_progress(self._progress)
            task = self._detach_ticker()
        await self._wait_cancelled(task)
        logger.info(
            f"🛑 Crawl stopped ({self._progress.crawled_pages}/"
            f"{self._progress.total_pages} pages)"
        )
        return True

    async def fail(self, reason: str) -> bool:
        async with self._lock:
            if self._progress.status not in ACTIVE_STATUSES:
                logger.warning(f"Fail ignored: session is {self._progress.status}")
                return False
            self._progress = fail_progress(self._progress)
            task = self._detach_ticker()
        await self._wait_cancelled(task)
        logger.error(f"❌ Crawl failed: {reason}")
        return True

    async def tick(self) -> CrawlProgress:
        """Apply one tick now. No-op unless running."""
        async with self._lock:
            if self._progress.status == "running":
                self._apply_tick()
                if self._progress.status != "running" and self._task is not None:
                    # Driver exits on its own; drop it without waiting
                    self._detach_ticker()
            return self._progress

    async def shutdown(self) -> None:
        """Cancel the tick driver, leaving progress as it is."""
        async with self._lock:
            task = self._detach_ticker()
        await self._wait_cancelled(task)

    def _apply_tick(self) -> None:
        self._progress = advance_progress(
            self._progress, self._draws.draw(), self._clock()
        )
        if self._progress.status == "completed":
            logger.info(
                f"✅ Crawl completed: {self._progress.crawled_pages}/"
                f"{self._progress.total_pages} pages, "
                f"{self._progress.failed_pages} failed"
            )

    def _spawn_ticker(self) -> None:
        self._generation += 1
        self._task = asyncio.create_task(self._run_ticker(self._generation))

    def _detach_ticker(self) -> asyncio.Task | None:
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        return task

    async def _wait_cancelled(self, task: asyncio.Task | None) -> None:
        if task is None or task is asyncio.current_task():
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run_ticker(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            async with self._lock:
                if generation != self._generation or self._progress.status != "running":
                    return
                self._apply_tick()
                if self._progress.status != "running":
                    self._task = None
                    return
