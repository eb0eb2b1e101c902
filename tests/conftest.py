"""Shared test fixtures for Agent Hub API tests.

Uses an in-memory SQLite async engine so tests run without PostgreSQL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("AGENT_WEBHOOK_URL", "")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from agenthub.core.database import Base, get_db
from agenthub.main import app

# Import all models to ensure they're registered with Base.metadata
from agenthub.models.instagram_lead import InstagramLead
from agenthub.models.activity import Activity
from agenthub.models.schedule_config import ScheduleConfig
from agenthub.models.instagram_post import InstagramPost
from agenthub.models.metric import Metric


# Use aiosqlite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSession = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_db():
    async with TestSession() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture
async def client():
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db():
    """Direct DB session for test setup/assertions."""
    async with TestSession() as session:
        yield session


@pytest_asyncio.fixture
async def make_lead(client):
    """Factory creating a lead through the manual create endpoint."""
    async def _make(username: str, **fields) -> dict:
        resp = await client.post("/api/instagram-leads", json={"username": username, **fields})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
