"""RelationalBackend — tier 1, one row per price cell.

Reads reconstruct the aggregate from all rows of the mapper's table.
Writes are a destructive snapshot replace: DELETE every row, then bulk
INSERT the full row set, committed as one transaction. No diffing.

All queries use raw text() SQL (no ORM).
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import TextClause, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.bb_common.enums import StorageTier
from src.bb_common.errors import RemoteUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PING_SQL = text("SELECT 1")


class RowMapper(Protocol[T]):
    """Maps an aggregate to and from the rows of one table."""

    table: str
    select_sql: TextClause
    delete_sql: TextClause
    insert_sql: TextClause

    def to_rows(self, value: T) -> list[dict[str, Any]]: ...

    def from_rows(self, rows: Sequence[Any]) -> T: ...


SessionFactory = Callable[[], Any]  # async_sessionmaker[AsyncSession] or a test double


class RelationalBackend(Generic[T]):
    tier = StorageTier.RELATIONAL

    def __init__(self, session_factory: SessionFactory, mapper: RowMapper[T]) -> None:
        self._session_factory = session_factory
        self._mapper = mapper

    async def read(self) -> T | None:
        try:
            async with self._session_factory() as db:
                result = await db.execute(self._mapper.select_sql)
                rows = result.fetchall()
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(self.tier.value, str(exc)) from exc
        if not rows:
            return None
        return self._mapper.from_rows(rows)

    async def write_full(self, value: T) -> None:
        rows = self._mapper.to_rows(value)
        if not rows:
            raise RemoteUnavailableError(self.tier.value, "rows to insert is empty")
        try:
            async with self._session_factory() as db:
                await self._replace(db, rows)
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(self.tier.value, str(exc)) from exc
        logger.debug("Replaced %d rows in %s", len(rows), self._mapper.table)

    async def ping(self) -> bool:
        try:
            async with self._session_factory() as db:
                await db.execute(_PING_SQL)
        except (SQLAlchemyError, OSError):
            return False
        return True

    async def _replace(self, db: AsyncSession, rows: list[dict[str, Any]]) -> None:
        try:
            await db.execute(self._mapper.delete_sql)
            await db.execute(self._mapper.insert_sql, rows)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
