"""Shared test fixtures for LeadHub tests.

Uses an in-memory SQLite async engine so tests run without PostgreSQL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("WEBHOOK_URL", "")
os.environ.setdefault("AI_CHAT_URL", "")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from leadhub.core.database import Base, get_db
from leadhub.main import app

# Import all models to ensure they're registered with Base.metadata
from leadhub.models.lead import Lead
from leadhub.models.profile import Profile
from leadhub.models.service import Service


# Use aiosqlite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


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
async def manager(db):
    """The manager profile whose away flag drives the chat copy."""
    profile = Profile(
        email="manager@example.com",
        full_name="Mia Manager",
        role="manager",
        is_away=False,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    return profile


@pytest.fixture
def lead_form():
    """A complete intake form payload."""
    return {
        "name": "Jane Doe",
        "phone": "(954) 555-0101",
        "email": "jane@example.com",
        "service_type": "Roofing",
        "urgency": "normal",
        "address": "123 Ocean Blvd, Miami, FL 33101",
        "budget": "$5,000 - $15,000",
        "description": "Shingles blown off after the storm",
    }
