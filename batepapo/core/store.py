"""Single-statement data store over SQLModel tables.

Every call opens its own session and commits one statement, so each write
is atomic by itself and nothing is held open between calls. Multi-record
operations (join, eviction) are sequences of these calls; see the services
for the order they use and how partial failure is handled.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import delete as sa_delete, select, update as sa_update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from batepapo.core.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Store:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def find(self, model: Type[ModelT], *criteria, order_by=None, limit: Optional[int] = None) -> List[ModelT]:
        stmt = select(model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"find {model.__name__} failed: {exc}") from exc

    async def find_one(self, model: Type[ModelT], *criteria) -> Optional[ModelT]:
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(select(model).where(*criteria).limit(1))
                return result.scalars().first()
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"find_one {model.__name__} failed: {exc}") from exc

    async def insert(self, record: ModelT) -> ModelT:
        """Insert ``record`` and return it refreshed with its generated id."""
        try:
            async with self._sessionmaker() as session:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return record
        except IntegrityError as exc:
            raise ConflictError(f"{type(record).__name__} already exists") from exc
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"insert {type(record).__name__} failed: {exc}") from exc

    async def update(self, model: Type[ModelT], changes: Dict[str, Any], *criteria) -> bool:
        stmt = sa_update(model).where(*criteria).values(**changes)
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0
        except IntegrityError as exc:
            raise ConflictError(f"{model.__name__} update conflicts with an existing record") from exc
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"update {model.__name__} failed: {exc}") from exc

    async def delete(self, model: Type[ModelT], *criteria) -> bool:
        stmt = sa_delete(model).where(*criteria)
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount > 0
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"delete {model.__name__} failed: {exc}") from exc
