"""
Shared pytest fixtures for the test suite.

The application is driven through httpx's ASGITransport. The lifespan is
NOT triggered, so no database is needed for HTTP-level tests.
"""

import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rally.config import DatabaseConfig, LogConfig, SecurityHeadersConfig
from rally.logger import JSONLogFormatter, ReadableFormatter
from rally.main import create_app

ENV_KEYS = (
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_COLOR",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_DATABASE",
    "DB_SSLMODE",
    "CSP_DEFAULT_SRC",
    "APP_HOST",
    "RALLY_TEST_VALUE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without any of the service variables set."""
    for key in ENV_KEYS:
        # setenv first so the removal is undone even if a test sets the key directly
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove the handler installed by configure_logging and restore the level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (JSONLogFormatter, ReadableFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture()
def app():
    """A fresh application with a route that always fails."""
    application = create_app(
        log_config=LogConfig(format="text", color=False),
        db_config=DatabaseConfig(),
        security_config=SecurityHeadersConfig(),
    )

    @application.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    return application


@pytest_asyncio.fixture()
async def async_client(app) -> AsyncClient:
    """Async HTTP test client wired to the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
