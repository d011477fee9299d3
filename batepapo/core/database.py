from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession

import batepapo.models  # noqa: F401  (registers tables on the metadata)
from batepapo.core.config import settings
from batepapo.core.store import Store

# Async SQLModel engine + session
engine = create_async_engine(settings.DATABASE_URL, echo=False, future=True)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

store = Store(AsyncSessionLocal)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Run SQLModel metadata.create_all() using an async connection.
    Creates the participants and messages tables when they are missing;
    used at startup when MIGRATE_ON_START is enabled, and by the tests.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def get_store() -> Store:
    """Dependency that yields the process-wide Store."""
    return store
