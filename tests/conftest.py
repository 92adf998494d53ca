"""Test fixtures and configuration."""

import logging
import os
import sys
import tempfile
from pathlib import Path

# Settings are read at import time; point them at throwaway values before the app loads.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + str(Path(tempfile.gettempdir()) / "restaurant_api_unused.db")
os.environ["ENVIRONMENT"] = "testing"
os.environ["REPORT_SCHEDULER_ENABLED"] = "false"
os.environ["SMTP_HOST"] = "smtp.test"
# Rate limiters keep their counters in memory during tests
os.environ.pop("REDIS_URL", None)

import pytest
import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from restaurant_api import database
from restaurant_api.database import Base
from restaurant_api.logger import get_logger
from restaurant_api.rate_limit import feedback_rate_limiter

from tests.factories import AdminFactory

logger = get_logger(__name__)


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=processors[:-1],
    )
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with a fresh feedback allowance."""
    feedback_rate_limiter.reset()
    yield
    feedback_rate_limiter.reset()


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Fresh SQLite database file per test.

    Services fan out over several sessions, so tests commit for real instead of
    rolling back a single shared transaction.
    """
    from restaurant_api import models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'restaurant.db'}",
        echo=False,
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_maker(db_engine):
    """Session factory bound to the test engine; also installed for API handlers."""
    maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    previous = database.set_test_session_maker(maker)
    yield maker
    database.set_test_session_maker(previous)


@pytest_asyncio.fixture(scope="function")
async def db(session_maker):
    """Session for arranging and inspecting data. Commit before calling the API."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def admin(db):
    """Signed-in admin (password: password123)."""
    user = await AdminFactory.create_async(db, username="owner", email="owner@example.com")
    await db.commit()
    return user


@pytest_asyncio.fixture(scope="function")
async def public_client(session_maker):
    """Client without credentials."""
    from restaurant_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def client(session_maker, admin):
    """Client authenticated as the admin fixture."""
    from restaurant_api.main import app
    from restaurant_api.security import create_access_token

    token = create_access_token(data={"sub": str(admin.id)})
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {token}"},
    ) as client:
        yield client
