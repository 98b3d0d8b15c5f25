"""PriceResolver — the single effective monthly price for a billboard.

Resolution order, first hit wins:
  1. exact   ab_prices[tier][duration][size]
  2. 1-month ab_prices[tier][1][size], then duration discount
  3. legacy  prices.individuals[size] (B = round(A x 1.2)), then duration discount
  4. 0       nothing configured — not an error
"""

from collections.abc import Callable

from src.bb_common.enums import PriceTier
from src.bb_common.rounding import scale
from src.bb_pricing.domain.models import PriceZone
from src.bb_pricing.domain.rules import apply_duration_discount, derive_b_from_a
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.domain.zone_registry import ZoneRegistry


def resolve_in_zone(zone: PriceZone, size: str, tier: PriceTier, duration: int) -> int:
    tier_prices = zone.ab_prices.tier(tier)

    exact = tier_prices.slot(duration)
    if exact is not None and isinstance(exact.get(size), int):
        return exact[size]

    one_month = tier_prices.m1.get(size)
    if isinstance(one_month, int):
        return apply_duration_discount(one_month, duration)

    base = zone.prices.individuals.get(size) or 0
    if not base:
        return 0
    base_for_tier = base if tier == PriceTier.A else derive_b_from_a(base)
    return apply_duration_discount(base_for_tier, duration)


class PriceResolver:
    def __init__(
        self,
        state: PricingState,
        zones: ZoneRegistry,
        multiplier_for: Callable[[str], float] | None = None,
    ) -> None:
        self._state = state
        self._zones = zones
        self._multiplier_for = multiplier_for or (lambda _city: 1.0)

    async def resolve(
        self,
        size: str,
        zone_name: str,
        tier: PriceTier,
        duration: int,
        municipality: str | None = None,
    ) -> int:
        """Effective price before any city multiplier.

        A zone that does not exist yet is created (and persisted) first. A
        blank zone name falls back to the municipality's zone.
        """
        zone = self._state.price_list.zones.get(zone_name)
        if zone is None:
            name = (zone_name or "").strip() or self._zones.determine_zone(municipality or "")
            zone = await self._zones.get_or_create_zone(name)
        return resolve_in_zone(zone, size, tier, duration)

    def peek(self, size: str, zone_name: str, tier: PriceTier, duration: int) -> int:
        """Like resolve() but read-only: a missing zone resolves to 0."""
        zone = self._state.price_list.zones.get(zone_name)
        if zone is None:
            return 0
        return resolve_in_zone(zone, size, tier, duration)

    async def resolve_with_city(
        self,
        size: str,
        zone_name: str,
        tier: PriceTier,
        duration: int,
        city: str,
    ) -> int:
        price = await self.resolve(size, zone_name, tier, duration)
        return scale(price, self._multiplier_for(city))
