"""
Entity store adapter.

Wraps an async session factory behind a small transactional interface so
that every status-changing operation reads, checks and writes its rows under
one explicitly passed transaction handle.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fleetops.app.core.exceptions import ConflictError, DuplicateRecordError
from fleetops.app.db.session import AsyncSessionLocal, Base

logger = logging.getLogger("fleetops.store")


def _label(model: Type[Base]) -> str:
    return getattr(model, "__label__", model.__name__)


class Transaction:
    """
    Handle for one unit of work.

    All reads and writes issued through the same handle share one database
    transaction; the owning `EntityStore.transaction()` block commits it on
    normal exit and rolls it back on any exception.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, model: Type[Base], id: Any, for_update: bool = False):
        """Fetch a record by primary key, optionally locking the row."""
        records = await self.find(model, model.id == id, for_update=for_update)
        return records[0] if records else None

    async def find(
        self,
        model: Type[Base],
        *criteria,
        for_update: bool = False,
        order_by=None,
        offset: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Any]:
        """Fetch records matching the criteria."""
        query = select(model).where(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, model: Type[Base], *criteria) -> int:
        result = await self.session.execute(
            select(func.count(model.id)).where(*criteria)
        )
        return result.scalar() or 0

    async def insert(self, model_cls: Type[Base], /, **values):
        """Insert a record and return it with server defaults loaded."""
        record = model_cls(**values)
        self.session.add(record)
        await self._flush(model_cls)
        await self.session.refresh(record)
        return record

    async def update(self, record: Base, values: Dict[str, Any], conflict_message: Optional[str] = None):
        """Apply `values` to a record and flush them."""
        for field, value in values.items():
            setattr(record, field, value)
        await self._flush(type(record), conflict_message)
        await self.session.refresh(record)
        return record

    async def delete(self, record: Base):
        await self.session.delete(record)
        await self._flush(type(record))
        return record

    async def _flush(self, model: Type[Base], conflict_message: Optional[str] = None) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            reason = str(exc.orig).lower()
            logger.info("Integrity violation on %s: %s", model.__tablename__, reason)
            if "unique" in reason or "duplicate" in reason:
                raise DuplicateRecordError(
                    conflict_message or f"{_label(model)} already exists"
                ) from exc
            raise ConflictError(
                conflict_message or f"{_label(model)} is still referenced by other records"
            ) from exc


class EntityStore:
    """Transactional access to the fleet tables."""

    def __init__(self, session_factory: async_sessionmaker = AsyncSessionLocal):
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        async with self.session_factory() as session:
            async with session.begin():
                yield Transaction(session)


store = EntityStore()


def get_store() -> EntityStore:
    """
    FastAPI dependency for the entity store.

    Tests override this to point the store at an isolated database.
    """
    return store
