"""
Test configuration and fixtures for Crawl Console tests
"""

import os

# Set ENVIRONMENT before importing any modules that use core.config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TICK_INTERVAL_SEC", "60")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient

from crawl_console.domain.progress import TickDraws


class FixedClock:
    """Manually advanced clock"""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class ScriptedDraws:
    """Draw source replaying a fixed list of draws, then repeating the last one"""

    def __init__(self, draws: list[TickDraws]):
        self._draws = list(draws)

    def draw(self) -> TickDraws:
        if len(self._draws) > 1:
            return self._draws.pop(0)
        return self._draws[0]


# Crawl one page, no failure, queue unchanged (-1 + 2 bump = +1)
CRAWL_DRAW = TickDraws(advance=0.9, failure=0.1, queue=0.9)
# Nothing crawled, queue shrinks by one
IDLE_DRAW = TickDraws(advance=0.1, failure=0.1, queue=0.1)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing"""
    return str(tmp_path / "test_console.db")


@pytest.fixture
def history_store(temp_db_path):
    from crawl_console.db import KeyValueStore, UrlHistoryStore

    return UrlHistoryStore(KeyValueStore(temp_db_path))


@pytest.fixture
def make_console(history_store, clock):
    """Build a console with a slow tick driver and a scripted draw source"""
    import httpx
    from crawl_console.services import (
        BackendClient,
        ConfigEditor,
        CrawlConsole,
        CrawlSession,
        UrlInput,
    )

    def _make(draws=None, handler=None, debounce=0.01):
        transport = httpx.MockTransport(handler) if handler else None
        return CrawlConsole(
            session=CrawlSession(
                tick_interval=60.0,
                draws=ScriptedDraws(draws or [CRAWL_DRAW]),
                clock=clock,
            ),
            config_editor=ConfigEditor(),
            url_input=UrlInput(debounce),
            history_store=history_store,
            backend=BackendClient("http://backend.test/api", transport=transport),
        )

    return _make


@pytest.fixture
def test_client(make_console):
    """FastAPI test client over a fresh console"""
    from crawl_console.main import create_app

    def _client(**kwargs):
        return TestClient(create_app(make_console(**kwargs)))

    return _client
