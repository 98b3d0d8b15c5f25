"""Row mapper for `city_multipliers`: one row per city."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text

from src.bb_multiplier.domain.models import CityMultiplier
from src.bb_multiplier.domain.table import MultiplierTable

_SELECT_SQL = text("""
    SELECT city_name, multiplier, description, is_active
    FROM city_multipliers
    ORDER BY city_name
""")

_DELETE_SQL = text("DELETE FROM city_multipliers")

_INSERT_SQL = text("""
    INSERT INTO city_multipliers (city_name, multiplier, description, is_active)
    VALUES (:city_name, :multiplier, :description, :is_active)
""")


class MultiplierRowMapper:
    table = "city_multipliers"
    select_sql = _SELECT_SQL
    delete_sql = _DELETE_SQL
    insert_sql = _INSERT_SQL

    def to_rows(self, value: MultiplierTable) -> list[dict[str, Any]]:
        return [
            {
                "city_name": e.city_name,
                "multiplier": e.multiplier,
                "description": e.description,
                "is_active": e.is_active,
            }
            for e in value.entries()
        ]

    def from_rows(self, rows: Sequence[Any]) -> MultiplierTable:
        return MultiplierTable(
            CityMultiplier(
                city_name=row.city_name,
                multiplier=float(row.multiplier),
                description=row.description,
                is_active=bool(row.is_active),
            )
            for row in rows
        )
