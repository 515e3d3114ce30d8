"""
ScatterBrain Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file (aiosqlite driver, foreign keys on)
       with all tables created, a ThoughtProcessor over it, and an HTTPX
       client talking to an app that has that processor injected.

Fixture Hierarchy (all function-scoped):
    engine ──▶ processor ──▶ test_client
                    └──────▶ storage shortcuts (thought_storage, ...)
    mock_processor ──▶ mock_client   (error-path tests, no database)
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any application imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["STATIC_DIR"] = tempfile.mkdtemp(prefix="scatterbrain_static_")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from scatterbrain.database import build_engine
from scatterbrain.main import create_app
from scatterbrain.services.label_storage import LabelStorage
from scatterbrain.services.processor import ThoughtProcessor
from scatterbrain.services.thought_label_storage import ThoughtLabelStorage
from scatterbrain.services.thought_storage import ThoughtStorage


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Async engine on a throwaway SQLite file, disposed after the test."""
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'scatterbrain.db'}")
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def processor(engine):
    """Processor with every table created."""
    proc = ThoughtProcessor.from_engine(engine)
    await proc.init()
    return proc


@pytest.fixture
def thought_storage(processor) -> ThoughtStorage:
    return processor.thought_storage


@pytest.fixture
def label_storage(processor) -> LabelStorage:
    return processor.label_storage


@pytest.fixture
def thought_label_storage(processor) -> ThoughtLabelStorage:
    return processor.thought_label_storage


@pytest_asyncio.fixture
async def test_client(processor):
    """
    HTTPX AsyncClient routed straight into the app (no server, no lifespan).

    Usage:
        async def test_ping(test_client):
            response = await test_client.get("/api/ping")
            assert response.status_code == 200
    """
    app = create_app(processor)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_processor():
    """
    Processor whose storage methods are AsyncMocks.

    A class spec makes MagicMock hand out AsyncMock for every coroutine method.

    Usage:
        mock_processor.thought_storage.get_all_thoughts.side_effect = StorageError(...)
    """
    proc = MagicMock(spec=ThoughtProcessor)
    proc.thought_storage = MagicMock(spec=ThoughtStorage)
    proc.label_storage = MagicMock(spec=LabelStorage)
    proc.thought_label_storage = MagicMock(spec=ThoughtLabelStorage)
    proc.init = AsyncMock()
    proc.close = AsyncMock()
    return proc


@pytest_asyncio.fixture
async def mock_client(mock_processor):
    app = create_app(mock_processor)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
