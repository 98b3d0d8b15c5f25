"""Row mapper for `installation_pricing`: one row per (zone, size).

Base prices have no column; on read they are taken from the first zone's
prices, which carry the base value until a zone-level price diverges.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text

from src.bb_common.datetime_utils import utc_now
from src.bb_installation.domain.models import InstallationPricing, InstallationZone
from src.bb_pricing.domain.models import DEFAULT_CURRENCY

_SELECT_SQL = text("""
    SELECT zone_name, billboard_size, price, multiplier, currency, description, last_updated
    FROM installation_pricing
    ORDER BY id
""")

_DELETE_SQL = text("DELETE FROM installation_pricing")

_INSERT_SQL = text("""
    INSERT INTO installation_pricing
        (zone_name, billboard_size, price, multiplier, currency, description, last_updated)
    VALUES
        (:zone_name, :billboard_size, :price, :multiplier, :currency, :description, :last_updated)
""")


class InstallationRowMapper:
    table = "installation_pricing"
    select_sql = _SELECT_SQL
    delete_sql = _DELETE_SQL
    insert_sql = _INSERT_SQL

    def to_rows(self, value: InstallationPricing) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        last_updated = value.last_updated or utc_now()
        for zone_name, zone in value.zones.items():
            for size, price in zone.prices.items():
                rows.append({
                    "zone_name": zone_name,
                    "billboard_size": size,
                    "price": int(price),
                    "multiplier": zone.multiplier,
                    "currency": value.currency,
                    "description": zone.description,
                    "last_updated": last_updated,
                })
        return rows

    def from_rows(self, rows: Sequence[Any]) -> InstallationPricing:
        zones: dict[str, InstallationZone] = {}
        sizes: list[str] = []
        currency = DEFAULT_CURRENCY
        last_updated = None
        for row in rows:
            if row.last_updated and (last_updated is None or row.last_updated > last_updated):
                last_updated = row.last_updated
            zone = zones.get(row.zone_name)
            if zone is None:
                zone = InstallationZone(
                    name=row.zone_name,
                    multiplier=float(row.multiplier or 1.0),
                    description=row.description,
                )
                zones[row.zone_name] = zone
            zone.prices[row.billboard_size] = int(row.price or 0)
            if row.billboard_size not in sizes:
                sizes.append(row.billboard_size)
            if row.currency:
                currency = row.currency
        first = next(iter(zones.values()), None)
        base = dict(first.prices) if first else {}
        return InstallationPricing(
            zones=zones,
            sizes=sizes,
            base_prices=base,
            currency=currency,
            last_updated=last_updated,
        )
