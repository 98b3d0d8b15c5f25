"""CityPricingMatrix — the size x duration x A/B price grid plus city scaling.

The grid comes from `billboard_pricing`. When that table is empty or the
database is down, the grid is computed from the current price list for the
default zone instead.
"""

import asyncio
import logging
from dataclasses import dataclass

from src.bb_common.enums import PriceTier
from src.bb_common.errors import RemoteUnavailableError
from src.bb_common.rounding import scale
from src.bb_multiplier.application.service import MultiplierService
from src.bb_multiplier.domain.models import (
    MatrixUpdateResult,
    MultiplierSummary,
    PricingTableRow,
)
from src.bb_multiplier.infrastructure.matrix_repository import PricingMatrixRepository
from src.bb_pricing.domain.resolver import PriceResolver
from src.bb_pricing.domain.rules import (
    DURATIONS,
    apply_duration_discount,
    derive_b_from_a,
    validate_price,
    validate_size,
)
from src.bb_pricing.domain.size_registry import SizeRegistry
from src.bb_pricing.domain.zone_registry import ZoneRegistry

logger = logging.getLogger(__name__)


@dataclass
class PricingOverview:
    rows: list[PricingTableRow]
    multipliers: list[dict]
    summary: MultiplierSummary
    from_database: bool


class CityPricingMatrix:
    def __init__(
        self,
        repo: PricingMatrixRepository | None,
        multipliers: MultiplierService,
        resolver: PriceResolver,
        sizes: SizeRegistry,
        default_zone: str,
        zones: ZoneRegistry | None = None,
    ) -> None:
        self._repo = repo
        self._multipliers = multipliers
        self._resolver = resolver
        self._sizes = sizes
        self._default_zone = default_zone
        self._zones = zones

    async def get_pricing_table(self) -> tuple[list[PricingTableRow], bool]:
        """Returns (rows, from_database)."""
        if self._repo is None:
            return self._fallback_table(), False
        try:
            records = await self._repo.fetch_all()
        except RemoteUnavailableError as exc:
            logger.warning("Pricing matrix unavailable, computing fallback: %s", exc.message)
            records = []
        if not records:
            return self._fallback_table(), False

        grouped: dict[str, dict[int, dict[str, int]]] = {}
        for r in records:
            by_duration = grouped.setdefault(r.billboard_size, {})
            cell = by_duration.setdefault(int(r.duration_months), {})
            cell[str(r.price_category)] = int(r.price or 0)
        rows = [PricingTableRow(size, prices) for size, prices in grouped.items()]
        return rows, True

    async def load_overview(self) -> PricingOverview:
        (rows, from_db), _source = await asyncio.gather(
            self.get_pricing_table(), self._multipliers.load()
        )
        return PricingOverview(
            rows=rows,
            multipliers=self._multipliers.list_multipliers(),
            summary=self._multipliers.summary(),
            from_database=from_db,
        )

    async def update_price(
        self, size: str, duration: int, category: PriceTier, zone: str, price: int
    ) -> MatrixUpdateResult:
        validate_price(price)
        if self._repo is None:
            return MatrixUpdateResult(success=False, message="Pricing matrix has no database")
        try:
            updated = await self._repo.update_price(size, duration, category.value, zone, price)
        except RemoteUnavailableError as exc:
            return MatrixUpdateResult(success=False, message=exc.message)
        if updated == 0:
            return MatrixUpdateResult(
                success=False,
                message=f"No price row for {size} / {duration} months / {category.value} / {zone}",
            )
        return MatrixUpdateResult(success=True, message="Price updated")

    async def add_size(
        self, size: str, price_a: int, price_b: int | None = None
    ) -> MatrixUpdateResult:
        """Insert the A/B x duration rows of a new size for every zone.

        price_a and price_b are 1-month prices; B defaults to round(A x 1.2).
        """
        size = validate_size(size)
        validate_price(price_a)
        one_month = {PriceTier.A: price_a, PriceTier.B: derive_b_from_a(price_a)}
        if price_b is not None:
            validate_price(price_b)
            one_month[PriceTier.B] = price_b
        if self._repo is None:
            return MatrixUpdateResult(success=False, message="Pricing matrix has no database")

        zone_names = self._zones.list_zones() if self._zones is not None else [self._default_zone]
        rows = [
            {
                "size": size,
                "duration": duration,
                "price": apply_duration_discount(one_month[tier], duration),
                "category": tier.value,
                "zone": zone,
            }
            for zone in zone_names
            for duration in DURATIONS
            for tier in PriceTier
        ]
        try:
            if await self._repo.has_size(size):
                return MatrixUpdateResult(
                    success=False, message=f"Size already in pricing matrix: {size}"
                )
            await self._repo.insert_prices(rows)
        except RemoteUnavailableError as exc:
            return MatrixUpdateResult(success=False, message=exc.message)
        logger.info("Added size %s to pricing matrix for %d zones", size, len(zone_names))
        return MatrixUpdateResult(success=True, message=f"Size {size} added")

    async def get_city_price(
        self, size: str, duration: int, category: PriceTier, zone: str, city: str
    ) -> int:
        price: int | None = None
        if self._repo is not None:
            try:
                price = await self._repo.fetch_price(size, duration, category.value, zone)
            except RemoteUnavailableError as exc:
                logger.warning("Pricing matrix unavailable, resolving from price list: %s", exc.message)
        if price is None:
            price = await self._resolver.resolve(size, zone, category, duration)
        return scale(price, self._multipliers.get_multiplier(city))

    def _fallback_table(self) -> list[PricingTableRow]:
        rows = []
        for size in self._sizes.list_sizes():
            prices = {
                d: {t.value: self._resolver.peek(size, self._default_zone, t, d) for t in PriceTier}
                for d in DURATIONS
            }
            rows.append(PricingTableRow(size, prices))
        return rows
