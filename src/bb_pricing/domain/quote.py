"""QuoteGenerator — priced line items for a set of billboards and a package."""

from datetime import timedelta

from src.bb_common.datetime_utils import epoch_millis, utc_now
from src.bb_common.enums import PriceTier
from src.bb_common.rounding import undiscount
from src.bb_pricing.domain.models import (
    Billboard,
    CustomerInfo,
    PackageDuration,
    Quote,
    QuoteItem,
)
from src.bb_pricing.domain.resolver import PriceResolver
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.domain.zone_registry import ZoneRegistry

QUOTE_VALIDITY = timedelta(days=30)
TAX_RATE = 0.0


def determine_tier(billboard: Billboard) -> PriceTier:
    """Explicit A/B category, else a level string mentioning A or B, else A."""
    if billboard.price_category in (PriceTier.A.value, PriceTier.B.value):
        return PriceTier(billboard.price_category)
    level = (billboard.level or "").upper()
    if "A" in level:
        return PriceTier.A
    if "B" in level:
        return PriceTier.B
    return PriceTier.A


class QuoteGenerator:
    def __init__(
        self, state: PricingState, zones: ZoneRegistry, resolver: PriceResolver
    ) -> None:
        self._state = state
        self._zones = zones
        self._resolver = resolver

    async def generate(
        self,
        customer: CustomerInfo,
        billboards: list[Billboard],
        package: PackageDuration,
    ) -> Quote:
        discount = package.discount
        items: list[QuoteItem] = []
        for b in billboards:
            zone = self._zones.determine_zone(b.municipality)
            tier = determine_tier(b)
            monthly = await self._resolver.resolve(b.size, zone, tier, package.value, b.municipality)
            items.append(QuoteItem(
                billboard_id=b.id,
                name=b.name,
                location=b.location,
                size=b.size,
                zone=zone,
                tier=tier,
                base_price=undiscount(monthly, discount),
                final_price=monthly,
                duration=package.value,
                discount=discount,
                total=monthly * package.value,
                image_url=b.image_url,
            ))

        subtotal = sum(i.base_price * package.value for i in items)
        total_discount = sum((i.base_price - i.final_price) * package.value for i in items)
        tax = round(subtotal * TAX_RATE)
        now = utc_now()
        return Quote(
            id=f"Q-{epoch_millis(now)}",
            customer=customer,
            package=package,
            items=items,
            subtotal=subtotal,
            total_discount=total_discount,
            tax=tax,
            tax_rate=TAX_RATE,
            total=subtotal - total_discount + tax,
            currency=self._state.price_list.currency,
            created_at=now.isoformat(),
            valid_until=(now + QUOTE_VALIDITY).isoformat(),
        )
