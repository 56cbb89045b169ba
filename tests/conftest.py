"""Shared test fixtures for MemoryLane tests."""

import os
import sys
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

# Service packages live one level down in their own directories
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
for _service_dir in ("shared", "core", "client"):
    _path = os.path.join(PROJECT_ROOT, _service_dir)
    if _path not in sys.path:
        sys.path.insert(0, _path)

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from core_svc.database import get_db, init_db
from core_svc.main import app
from core_svc.routers.media import get_config
from shared_lib.config import Settings
from shared_lib.schemas import Delivered


@asynccontextmanager
async def _noop_lifespan(application):
    """Replace the real lifespan with a no-op so tests control the DB and mailer."""
    yield


@pytest_asyncio.fixture
async def test_db(tmp_path):
    """Create a temporary SQLite database with all migrations applied."""
    db_path = str(tmp_path / "test.db")
    db = await init_db(db_path)
    yield db
    await db.close()


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing image storage at a temp directory, notifications on."""
    return Settings(
        database_path=str(tmp_path / "test.db"),
        image_storage_path=str(tmp_path / "images"),
        resend_api_key="re_test",
        mail_from="MemoryLane <noreply@example.com>",
        notify_email="family@example.com",
    )


@pytest.fixture
def mock_mailer():
    """A mail dispatcher double whose sends always succeed."""
    mailer = AsyncMock()
    mailer.send_mail = AsyncMock(return_value=Delivered(message_id="email-1"))
    return mailer


@pytest_asyncio.fixture
async def test_app(test_db, test_settings, mock_mailer):
    """Create a FastAPI test client with test DB, temp storage and mock mailer."""
    original_lifespan = app.router.lifespan_context
    app.router.lifespan_context = _noop_lifespan

    async def get_test_db():
        return test_db

    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_config] = lambda: test_settings
    app.state.mailer = mock_mailer

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    if hasattr(app.state, "mailer"):
        del app.state.mailer
    app.router.lifespan_context = original_lifespan
