"""Baseline price schedule used to synthesize zones that do not exist yet."""

from collections.abc import Iterable

from src.bb_common.enums import CustomerType, PriceTier
from src.bb_pricing.domain.models import (
    DEFAULT_CURRENCY,
    CustomerPrices,
    DurationPrices,
    PriceList,
    PriceZone,
    TierPrices,
    default_packages,
)
from src.bb_pricing.domain.rules import DURATIONS, apply_duration_discount, derive_b_from_a

DEFAULT_SIZES: tuple[str, ...] = ("5x13", "4x12", "4x10", "3x8", "3x6", "3x4")

BASELINE_CUSTOMER_PRICES: dict[CustomerType, dict[str, int]] = {
    CustomerType.MARKETERS: {
        "5x13": 3000, "4x12": 2400, "4x10": 1900, "3x8": 1300, "3x6": 900, "3x4": 700,
    },
    CustomerType.INDIVIDUALS: {
        "5x13": 3500, "4x12": 2800, "4x10": 2200, "3x8": 1500, "3x6": 1000, "3x4": 800,
    },
    CustomerType.COMPANIES: {
        "5x13": 4000, "4x12": 3200, "4x10": 2500, "3x8": 1700, "3x6": 1200, "3x4": 900,
    },
}


def tier_schedule(one_month: dict[str, int]) -> DurationPrices:
    """Fill all four duration slots from 1-month prices via the duration discount."""
    slots = {
        d: {size: apply_duration_discount(price, d) for size, price in one_month.items()}
        for d in DURATIONS
    }
    return DurationPrices(m1=slots[1], m3=slots[3], m6=slots[6], m12=slots[12])


def build_default_zone(
    name: str,
    sizes: Iterable[str] | None = None,
    template: PriceZone | None = None,
) -> PriceZone:
    """Baseline zone, optionally restricted to the registry's sizes.

    With `sizes`, every table holds exactly those sizes in that order; a size
    the baseline schedule does not know takes its values from `template`.
    """
    individuals = BASELINE_CUSTOMER_PRICES[CustomerType.INDIVIDUALS]
    b_one_month = {size: derive_b_from_a(price) for size, price in individuals.items()}
    ab_prices = TierPrices()
    ab_prices.replace(PriceTier.A, tier_schedule(individuals))
    ab_prices.replace(PriceTier.B, tier_schedule(b_one_month))
    zone = PriceZone(
        name=name,
        prices=CustomerPrices(
            marketers=dict(BASELINE_CUSTOMER_PRICES[CustomerType.MARKETERS]),
            individuals=dict(individuals),
            companies=dict(BASELINE_CUSTOMER_PRICES[CustomerType.COMPANIES]),
        ),
        ab_prices=ab_prices,
    )
    if sizes is None:
        return zone

    wanted = list(sizes)
    tables = zone.size_tables()
    sources = template.size_tables() if template is not None else [{} for _ in tables]
    for table, source in zip(tables, sources):
        merged = {}
        for size in wanted:
            if size in table:
                merged[size] = table[size]
            elif size in source:
                merged[size] = source[size]
        table.clear()
        table.update(merged)
    return zone


def generate_price_list(zone_names: list[str], currency: str = DEFAULT_CURRENCY) -> PriceList:
    """Price list with one baseline zone per municipality, used when no tier has data."""
    return PriceList(
        zones={name: build_default_zone(name) for name in zone_names},
        packages=default_packages(),
        currency=currency,
    )
