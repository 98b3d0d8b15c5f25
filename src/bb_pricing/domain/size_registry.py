"""SizeRegistry — the ordered set of billboard sizes, kept in sync across zones."""

import logging
from collections.abc import Iterable

from src.bb_common.enums import PriceTier
from src.bb_common.errors import (
    DuplicateSizeError,
    LastSizeViolationError,
    SizeNotFoundError,
)
from src.bb_persistence.domain.backend import SaveResult
from src.bb_pricing.domain.baseline import DEFAULT_SIZES, tier_schedule
from src.bb_pricing.domain.models import PriceList, PriceZone, normalize_sizes
from src.bb_pricing.domain.rules import (
    derive_b_from_a,
    legacy_customer_prices,
    validate_price,
    validate_size,
)
from src.bb_pricing.domain.state import PricingState

logger = logging.getLogger(__name__)


def infer_sizes(price_list: PriceList) -> list[str]:
    """Sizes of an arbitrary (the first) zone: A/1-month tier, else individuals."""
    zone = next(iter(price_list.zones.values()), None)
    if zone is None:
        return []
    if zone.ab_prices.a.m1:
        return list(zone.ab_prices.a.m1)
    return list(zone.prices.individuals)


def apply_reference_price(zone: PriceZone, size: str, reference: int) -> None:
    """Set every tier, duration and customer type of `size` from one 1-month A price."""
    a_schedule = tier_schedule({size: reference})
    b_schedule = tier_schedule({size: derive_b_from_a(reference)})
    for tier, schedule in ((PriceTier.A, a_schedule), (PriceTier.B, b_schedule)):
        target = zone.ab_prices.tier(tier)
        for duration, prices in schedule.slots():
            target.slot(duration)[size] = prices[size]  # type: ignore[index]
    for ct, price in legacy_customer_prices(reference).items():
        zone.prices.for_type(ct)[size] = price


def strip_size(zone: PriceZone, size: str) -> None:
    for table in zone.size_tables():
        table.pop(size, None)


class SizeRegistry:
    def __init__(self, state: PricingState) -> None:
        self._state = state

    def list_sizes(self) -> list[str]:
        stored = self._state.stored_sizes
        if stored:
            return stored
        inferred = infer_sizes(self._state.price_list)
        return inferred or list(DEFAULT_SIZES)

    async def add_size(self, size: str, reference: int) -> SaveResult:
        size = validate_size(size)
        validate_price(reference)
        sizes = self.list_sizes()
        if size in sizes:
            raise DuplicateSizeError(size)

        price_list = self._state.snapshot()
        for zone in price_list.zones.values():
            apply_reference_price(zone, size, reference)

        result = await self._state.commit_with_sizes(price_list, sizes + [size])
        logger.info("Added size %s (reference %d) to %d zones", size, reference, len(price_list.zones))
        return result

    async def remove_size(self, size: str) -> SaveResult:
        sizes = self.list_sizes()
        if size not in sizes:
            raise SizeNotFoundError(size)
        if len(sizes) <= 1:
            raise LastSizeViolationError(size)

        price_list = self._state.snapshot()
        for zone in price_list.zones.values():
            strip_size(zone, size)

        result = await self._state.commit_with_sizes(price_list, [s for s in sizes if s != size])
        logger.info("Removed size %s from %d zones", size, len(price_list.zones))
        return result

    async def set_sizes(self, sizes: Iterable[str]) -> SaveResult:
        cleaned = normalize_sizes([validate_size(s) for s in sizes])
        if not cleaned:
            raise LastSizeViolationError("")
        return await self._state.commit_sizes(cleaned)

    async def bulk_apply(self, rows: Iterable[tuple[str, int]]) -> SaveResult:
        """Apply parsed (size, reference price) rows: new sizes are added, known ones repriced."""
        parsed = [(validate_size(size), int(price)) for size, price in rows]
        for _, price in parsed:
            validate_price(price)

        sizes = self.list_sizes()
        price_list = self._state.snapshot()
        for size, reference in parsed:
            for zone in price_list.zones.values():
                apply_reference_price(zone, size, reference)
            if size not in sizes:
                sizes.append(size)

        result = await self._state.commit_with_sizes(price_list, sizes)
        logger.info("Bulk-applied %d size rows", len(parsed))
        return result
