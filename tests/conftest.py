import os

# Set test environment before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["MIGRATE_ON_START"] = "false"
os.environ["SWEEP_ENABLED"] = "false"

from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from batepapo.core.database import get_store, init_db
from batepapo.core.store import Store
from batepapo.models import Participant

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'batepapo-test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine):
    """A Store over a fresh SQLite file with empty tables"""
    return Store(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))


@pytest.fixture
def add_participant(store):
    """Insert a participant row directly, without an arrival message"""
    async def _add(name: str, last_activity: datetime = T0) -> Participant:
        return await store.insert(Participant(name=name, last_activity=last_activity))
    return _add


@pytest.fixture
async def client(store):
    """HTTP client bound to the app with the test store injected"""
    from batepapo.main import app

    app.dependency_overrides[get_store] = lambda: store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
