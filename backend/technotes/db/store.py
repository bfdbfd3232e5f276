"""Document-style persistence helpers over an async SQLAlchemy session."""
from __future__ import annotations

import logging
from typing import Any, Iterable, NoReturn, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.core.errors import DuplicateKeyError, StorageUnavailable
from technotes.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# SQLSTATE for unique_violation (PostgreSQL and other standard drivers).
_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == _UNIQUE_VIOLATION
    # sqlite3 only reports the constraint kind in the message.
    return "UNIQUE constraint failed" in str(orig)


class DocumentStore:
    """Find/insert/save/delete helpers wrapping one session.

    Writes commit immediately. Any SQLAlchemy failure rolls the session back
    and is raised as ``StorageUnavailable``; unique constraint violations on
    write are raised as ``DuplicateKeyError`` instead.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # -------------------------- reads --------------------------
    async def find_all(
        self, model: type[ModelT], projection: Iterable[str] | None = None
    ) -> list[ModelT] | list[dict[str, Any]]:
        try:
            if projection is None:
                result = await self.session.execute(select(model))
                return list(result.scalars().all())
            columns = [getattr(model, field) for field in projection]
            result = await self.session.execute(select(*columns))
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            await self._fail("find_all", model, exc)

    async def find_one(self, model: type[ModelT], **filters: Any) -> ModelT | None:
        try:
            result = await self.session.execute(select(model).filter_by(**filters).limit(1))
            return result.scalars().first()
        except SQLAlchemyError as exc:
            await self._fail("find_one", model, exc)

    async def find_by_id(self, model: type[ModelT], record_id: Any) -> ModelT | None:
        try:
            return await self.session.get(model, record_id)
        except SQLAlchemyError as exc:
            await self._fail("find_by_id", model, exc)

    # -------------------------- writes --------------------------
    async def insert(self, record: ModelT) -> ModelT:
        self.session.add(record)
        await self._commit("insert", record)
        return record

    async def save(self, record: ModelT) -> ModelT:
        self.session.add(record)
        await self._commit("save", record)
        return record

    async def delete_one(self, record: ModelT) -> ModelT:
        try:
            await self.session.delete(record)
        except SQLAlchemyError as exc:
            await self._fail("delete_one", type(record), exc)
        await self._commit("delete_one", record)
        return record

    # -------------------------- internals --------------------------
    async def _commit(self, operation: str, record: Base) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                await self._fail(operation, type(record), exc)
            await self.session.rollback()
            logger.info("%s on %s rejected by unique constraint: %s", operation, type(record).__name__, exc.orig)
            raise DuplicateKeyError() from exc
        except SQLAlchemyError as exc:
            await self._fail(operation, type(record), exc)

    async def _fail(self, operation: str, model: type[Base], exc: SQLAlchemyError) -> NoReturn:
        logger.warning("Storage failure during %s on %s: %s", operation, model.__tablename__, exc)
        try:
            await self.session.rollback()
        except SQLAlchemyError:
            logger.debug("Rollback after failed %s also failed", operation, exc_info=True)
        raise StorageUnavailable() from exc
