"""PricingMatrixRepository — raw SQL over the `billboard_pricing` table.

Rows are (billboard_size, duration_months, price, price_category, zone_name).
Unlike the tiered aggregates this table is edited cell by cell.
"""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.bb_common.enums import StorageTier
from src.bb_common.errors import RemoteUnavailableError

logger = logging.getLogger(__name__)

_TIER = StorageTier.RELATIONAL.value

_SELECT_ALL_SQL = text("""
    SELECT billboard_size, duration_months, price, price_category, zone_name
    FROM billboard_pricing
    ORDER BY billboard_size, duration_months
""")

_SELECT_ONE_SQL = text("""
    SELECT price
    FROM billboard_pricing
    WHERE billboard_size = :size
      AND duration_months = :duration
      AND price_category = :category
      AND zone_name = :zone
    LIMIT 1
""")

_UPDATE_SQL = text("""
    UPDATE billboard_pricing
    SET price = :price
    WHERE billboard_size = :size
      AND duration_months = :duration
      AND price_category = :category
      AND zone_name = :zone
""")


_HAS_SIZE_SQL = text("""
    SELECT 1
    FROM billboard_pricing
    WHERE billboard_size = :size
    LIMIT 1
""")

_INSERT_SQL = text("""
    INSERT INTO billboard_pricing
        (billboard_size, duration_months, price, price_category, zone_name)
    VALUES
        (:size, :duration, :price, :category, :zone)
    ON CONFLICT (billboard_size, duration_months, price_category, zone_name) DO NOTHING
""")


class PricingMatrixRepository:
    def __init__(self, session_factory: Callable[[], Any]) -> None:
        self._session_factory = session_factory

    async def fetch_all(self) -> list[Any]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(_SELECT_ALL_SQL)
                return list(result.fetchall())
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, str(exc)) from exc

    async def fetch_price(
        self, size: str, duration: int, category: str, zone: str
    ) -> int | None:
        params = {"size": size, "duration": duration, "category": category, "zone": zone}
        try:
            async with self._session_factory() as db:
                result = await db.execute(_SELECT_ONE_SQL, params)
                row = result.fetchone()
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, str(exc)) from exc
        if row is None or row.price is None:
            return None
        return int(row.price)

    async def update_price(
        self, size: str, duration: int, category: str, zone: str, price: int
    ) -> int:
        """Returns the number of rows updated."""
        params = {
            "size": size,
            "duration": duration,
            "category": category,
            "zone": zone,
            "price": price,
        }
        try:
            async with self._session_factory() as db:
                try:
                    result = await db.execute(_UPDATE_SQL, params)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, str(exc)) from exc
        logger.debug("Updated %d billboard_pricing row(s) for %s/%s", result.rowcount, size, duration)
        return int(result.rowcount or 0)

    async def has_size(self, size: str) -> bool:
        try:
            async with self._session_factory() as db:
                result = await db.execute(_HAS_SIZE_SQL, {"size": size})
                return result.fetchone() is not None
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, str(exc)) from exc

    async def insert_prices(self, rows: list[dict[str, Any]]) -> None:
        """Bulk insert of (size, duration, price, category, zone) cells; existing cells are kept."""
        try:
            async with self._session_factory() as db:
                try:
                    await db.execute(_INSERT_SQL, rows)
                    await db.commit()
                except Exception:
                    await db.rollback()
                    raise
        except (SQLAlchemyError, OSError) as exc:
            raise RemoteUnavailableError(_TIER, str(exc)) from exc
        logger.debug("Inserted %d billboard_pricing row(s)", len(rows))
