"""
Crawl Console

Application state shared by the API: the crawl session, its configuration,
the URL input and history, and the job board fed by the backend. One
instance is built per application and handed to routes through
dependencies.
"""

import asyncio
import logging

from crawl_console.core.config import Settings
from crawl_console.db import KeyValueStore, UrlHistoryStore
from crawl_console.domain.history import remember_url
from crawl_console.domain.jobs import add_job, set_jobs, summarize_jobs, update_job
from crawl_console.domain.progress import RandomDrawSource
from crawl_console.domain.urls import require_valid_url
from crawl_console.models.backend import ApiResponse, CrawlJob, JobSummary
from crawl_console.services.backend_client import BackendClient
from crawl_console.services.config_editor import ConfigEditor
from crawl_console.services.session import CrawlSession
from crawl_console.services.url_input import UrlInput

logger = logging.getLogger(__name__)


class CrawlConsole:
    def __init__(
        self,
        session: CrawlSession,
        config_editor: ConfigEditor,
        url_input: UrlInput,
        history_store: UrlHistoryStore,
        backend: BackendClient,
    ):
        self.session = session
        self.config_editor = config_editor
        self.url_input = url_input
        self.history_store = history_store
        self.backend = backend
        self.history: list[str] = []
        self.jobs: list[CrawlJob] = []
        self.jobs_error: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CrawlConsole":
        return cls(
            session=CrawlSession(
                tick_interval=settings.TICK_INTERVAL_SEC,
                draws=RandomDrawSource(settings.SIMULATION_SEED),
            ),
            config_editor=ConfigEditor(),
            url_input=UrlInput(settings.VALIDATION_DEBOUNCE_SEC),
            history_store=UrlHistoryStore(
                KeyValueStore(settings.CONSOLE_DB_PATH),
                key=settings.HISTORY_KEY,
                limit=settings.HISTORY_LIMIT,
            ),
            backend=BackendClient(
                settings.BACKEND_API_URL, timeout=settings.BACKEND_TIMEOUT_SEC
            ),
        )

    async def startup(self) -> None:
        loop = asyncio.get_running_loop()
        self.history = await loop.run_in_executor(None, self.history_store.load)
        logger.info(f"Loaded {len(self.history)} URLs from history")

    async def shutdown(self) -> None:
        self.url_input.close()
        await self.session.shutdown()

    async def submit(self, url: str) -> bool:
        """
        Accept a URL and start a session on it.

        Returns:
            False if a session was already running or paused

        Raises:
            InvalidUrlError: URL rejected; neither the session nor history change
        """
        url = require_valid_url(url)
        started = await self.session.start(url, self.config_editor.config)
        self.history = remember_url(self.history, url, self.history_store.limit)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.history_store.save, self.history)
        return started

    async def submit_draft(self) -> bool:
        self.url_input.validate_now()
        return await self.submit(self.url_input.value)

    async def refresh_jobs(self) -> list[CrawlJob]:
        """Reload jobs from the backend; on failure keep the previous list."""
        resp = await self.backend.get_crawl_jobs()
        if resp.success:
            self.jobs = set_jobs(resp.data or [])
            self.jobs_error = None
        else:
            self.jobs_error = resp.error
        return self.jobs

    async def launch_job(self, urls: list[str]) -> ApiResponse:
        resp = await self.backend.start_crawl(urls)
        if resp.success and resp.data is not None:
            self.jobs = add_job(self.jobs, resp.data)
        return resp

    async def stop_job(self, job_id: str) -> ApiResponse:
        resp = await self.backend.stop_crawl(job_id)
        if resp.success:
            await self.sync_job(job_id)
        return resp

    async def sync_job(self, job_id: str) -> ApiResponse:
        """Fetch one job and merge it into the board."""
        resp = await self.backend.get_crawl_job(job_id)
        if resp.success and resp.data is not None:
            job: CrawlJob = resp.data
            if any(existing.id == job_id for existing in self.jobs):
                self.jobs = update_job(self.jobs, job_id, job.model_dump())
            else:
                self.jobs = add_job(self.jobs, job)
        return resp

    def job_summary(self) -> JobSummary:
        return summarize_jobs(self.jobs, self.jobs_error)
