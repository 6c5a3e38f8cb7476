"""Service test fixtures — async DB, FastAPI test client, and marketplace seed data.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Seed users: one sponsor pair, one publisher pair, one available slot

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Identity travels as headers, exactly as the upstream session layer sends it
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.ad_slot import AdSlot
from app.models.publisher import Publisher
from app.models.sponsor import Sponsor
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed data ──────────────────────────────────────────────────

async def _persist(test_db, obj):
    test_db.add(obj)
    await test_db.commit()
    await test_db.refresh(obj)
    return obj


@pytest.fixture
async def publisher(test_db):
    return await _persist(test_db, Publisher(
        user_id="publisher-user-1", name="Tech Blog",
        category="tech", monthly_views=50_000,
    ))


@pytest.fixture
async def other_publisher(test_db):
    return await _persist(test_db, Publisher(
        user_id="publisher-user-2", name="News Site",
        category="news", monthly_views=100_000,
    ))


@pytest.fixture
async def sponsor(test_db):
    return await _persist(test_db, Sponsor(
        user_id="sponsor-user-1", name="Acme Corp", email="ads@acme.test",
    ))


@pytest.fixture
async def second_sponsor(test_db):
    return await _persist(test_db, Sponsor(
        user_id="sponsor-user-2", name="Globex", email="ads@globex.test",
    ))


@pytest.fixture
async def ad_slot(test_db, publisher):
    return await _persist(test_db, AdSlot(
        publisher_id=publisher.id, name="Banner Ad", type="DISPLAY",
        base_price=Decimal("100.00"), is_available=True,
    ))


@pytest.fixture
def sponsor_headers(sponsor):
    return {"X-User-Id": sponsor.user_id, "X-User-Email": sponsor.email}


@pytest.fixture
def second_sponsor_headers(second_sponsor):
    return {"X-User-Id": second_sponsor.user_id}


@pytest.fixture
def owner_headers(publisher):
    return {"X-User-Id": publisher.user_id, "X-User-Email": "owner@techblog.test"}


@pytest.fixture
def other_owner_headers(other_publisher):
    return {"X-User-Id": other_publisher.user_id}
