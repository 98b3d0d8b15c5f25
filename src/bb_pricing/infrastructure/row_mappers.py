"""Row mappers for the rental price list (`pricing`) and size list (`pricing_sizes`).

`pricing` holds two row kinds side by side:
  legacy customer price: customer_type set, ab_type / package_duration NULL
  tier price:            ab_type + package_duration set, customer_type NULL
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text

from src.bb_common.enums import CustomerType, PriceTier
from src.bb_pricing.domain.models import (
    DEFAULT_CURRENCY,
    PriceList,
    PriceZone,
    default_packages,
    package_for,
)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_SELECT_PRICING_SQL = text("""
    SELECT zone_name, billboard_size, customer_type, price,
           ab_type, package_duration, currency
    FROM pricing
    ORDER BY id
""")

_DELETE_PRICING_SQL = text("DELETE FROM pricing")

_INSERT_PRICING_SQL = text("""
    INSERT INTO pricing
        (zone_name, billboard_size, customer_type, price,
         ab_type, package_duration, currency)
    VALUES
        (:zone_name, :billboard_size, :customer_type, :price,
         :ab_type, :package_duration, :currency)
""")

_SELECT_SIZES_SQL = text("""
    SELECT billboard_size
    FROM pricing_sizes
    ORDER BY position
""")

_DELETE_SIZES_SQL = text("DELETE FROM pricing_sizes")

_INSERT_SIZES_SQL = text("""
    INSERT INTO pricing_sizes (billboard_size, position)
    VALUES (:billboard_size, :position)
""")


class PriceListRowMapper:
    table = "pricing"
    select_sql = _SELECT_PRICING_SQL
    delete_sql = _DELETE_PRICING_SQL
    insert_sql = _INSERT_PRICING_SQL

    def to_rows(self, value: PriceList) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        for zone_name, zone in value.zones.items():
            for ct in CustomerType:
                for size, price in zone.prices.for_type(ct).items():
                    rows.append({
                        "zone_name": zone_name,
                        "billboard_size": size,
                        "customer_type": ct.value,
                        "price": int(price),
                        "ab_type": None,
                        "package_duration": None,
                        "currency": value.currency,
                    })
            for tier in PriceTier:
                for duration, prices in zone.ab_prices.tier(tier).slots():
                    for size, price in prices.items():
                        rows.append({
                            "zone_name": zone_name,
                            "billboard_size": size,
                            "customer_type": None,
                            "price": int(price),
                            "ab_type": tier.value,
                            "package_duration": duration,
                            "currency": value.currency,
                        })
        return rows

    def from_rows(self, rows: Sequence[Any]) -> PriceList:
        zones: dict[str, PriceZone] = {}
        durations: set[int] = set()
        currency = DEFAULT_CURRENCY

        for row in rows:
            zone = zones.setdefault(row.zone_name, PriceZone(name=row.zone_name))
            if row.currency:
                currency = row.currency
            price = int(row.price or 0)
            if row.customer_type:
                zone.prices.for_type(CustomerType(row.customer_type))[row.billboard_size] = price
            if row.ab_type and row.package_duration:
                slot = zone.ab_prices.tier(PriceTier(row.ab_type)).slot(int(row.package_duration))
                if slot is not None:
                    slot[row.billboard_size] = price
                    durations.add(int(row.package_duration))

        packages = [package_for(d) for d in sorted(durations)] or default_packages()
        return PriceList(zones=zones, packages=packages, currency=currency)


class SizeListRowMapper:
    table = "pricing_sizes"
    select_sql = _SELECT_SIZES_SQL
    delete_sql = _DELETE_SIZES_SQL
    insert_sql = _INSERT_SIZES_SQL

    def to_rows(self, value: list[str]) -> list[dict[str, Any]]:
        return [
            {"billboard_size": size, "position": position}
            for position, size in enumerate(value)
        ]

    def from_rows(self, rows: Sequence[Any]) -> list[str]:
        return [row.billboard_size for row in rows]
