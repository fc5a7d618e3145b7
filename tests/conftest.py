"""Pytest configuration and fixtures."""

import pytest
import httpx
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from config import Config
from shortlinks.service import URLShortenerService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage.memory import InMemoryClickRecorder, InMemoryLinkStore
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


class FakeClock:
    """Settable time source."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Clock frozen at a known instant until advanced."""
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def link_store(short_code_generator, clock, logger):
    """Create in-memory link store."""
    return InMemoryLinkStore(
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger.getChild("db"),
    )


@pytest.fixture
def click_recorder(clock, logger):
    """Create in-memory click recorder."""
    return InMemoryClickRecorder(clock=clock, logger=logger.getChild("db"))


@pytest.fixture
def service(link_store, click_recorder, clock, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        link_store=link_store,
        click_recorder=click_recorder,
        clock=clock,
        logger=logger.getChild("service"),
        report_timezone=timezone.utc,
    )


@pytest.fixture
def config():
    """Configuration pointing short links at the test server."""
    return Config(base_url="http://testserver")


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
