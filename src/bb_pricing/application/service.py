"""PricingApplicationService — thin composition layer over the pricing domain.

Every mutation returns the coordinated SaveResult; a save that only reached
the local cache is still a successful call, reported with success=False.
"""

from src.bb_common.enums import CustomerType, PriceTier, StorageTier
from src.bb_common.errors import ZoneNotFoundError
from src.bb_common.schemas import SaveResultResponse, SyncResultResponse
from src.bb_pricing.application.schemas import (
    QuoteRequest,
    ResolvedPriceResponse,
    StorageStatusResponse,
    quote_to_dict,
)
from src.bb_pricing.domain.models import package_for, price_list_to_document, zone_to_document
from src.bb_pricing.domain.quote import QuoteGenerator
from src.bb_pricing.domain.resolver import PriceResolver
from src.bb_pricing.domain.size_registry import SizeRegistry
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.domain.zone_registry import ZoneRegistry


class PricingApplicationService:
    def __init__(
        self,
        state: PricingState,
        sizes: SizeRegistry,
        zones: ZoneRegistry,
        resolver: PriceResolver,
        quotes: QuoteGenerator,
    ) -> None:
        self._state = state
        self._sizes = sizes
        self._zones = zones
        self._resolver = resolver
        self._quotes = quotes

    def get_price_list(self) -> dict:
        return price_list_to_document(self._state.price_list)

    # -- sizes --------------------------------------------------------------

    def list_sizes(self) -> list[str]:
        return self._sizes.list_sizes()

    async def add_size(self, size: str, reference_price: int) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._sizes.add_size(size, reference_price))

    async def remove_size(self, size: str) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._sizes.remove_size(size))

    async def set_sizes(self, sizes: list[str]) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._sizes.set_sizes(sizes))

    async def bulk_apply(self, rows: list[tuple[str, int]]) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._sizes.bulk_apply(rows))

    # -- zones --------------------------------------------------------------

    def list_zones(self) -> list[str]:
        return self._zones.list_zones()

    def get_zone(self, name: str) -> dict:
        zone = self._zones.get_zone(name)
        if zone is None:
            raise ZoneNotFoundError(name)
        return zone_to_document(zone)

    def zone_for(self, municipality: str) -> str:
        return self._zones.determine_zone(municipality)

    async def add_zone(self, name: str) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._zones.add_zone(name))

    async def remove_zone(self, name: str) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._zones.remove_zone(name))

    async def rename_zone(self, name: str, new_name: str) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._zones.rename_zone(name, new_name))

    async def copy_tier(
        self, name: str, source: PriceTier, target: PriceTier
    ) -> SaveResultResponse:
        return SaveResultResponse.from_result(await self._zones.copy_tier(name, source, target))

    async def update_customer_price(
        self, name: str, customer_type: CustomerType, size: str, price: int
    ) -> SaveResultResponse:
        result = await self._zones.update_customer_price(name, customer_type, size, price)
        return SaveResultResponse.from_result(result)

    async def update_tier_price(
        self, name: str, tier: PriceTier, duration: int, size: str, price: int
    ) -> SaveResultResponse:
        result = await self._zones.update_tier_price(name, tier, duration, size, price)
        return SaveResultResponse.from_result(result)

    # -- prices and quotes --------------------------------------------------

    async def resolve(
        self,
        size: str,
        zone: str,
        tier: PriceTier,
        duration: int,
        municipality: str | None = None,
        city: str | None = None,
    ) -> ResolvedPriceResponse:
        price = await self._resolver.resolve(size, zone, tier, duration, municipality)
        city_price = None
        if city:
            city_price = await self._resolver.resolve_with_city(size, zone, tier, duration, city)
        return ResolvedPriceResponse(
            size=size,
            zone=zone,
            tier=tier,
            duration=duration,
            price=price,
            city=city,
            city_price=city_price,
        )

    async def generate_quote(self, body: QuoteRequest) -> dict:
        quote = await self._quotes.generate(
            body.customer.to_domain(),
            [b.to_domain() for b in body.billboards],
            package_for(body.package_months),
        )
        return quote_to_dict(quote)

    # -- storage ------------------------------------------------------------

    async def storage_status(self) -> StorageStatusResponse:
        status = await self._state.prices.check_connection()
        return StorageStatusResponse(
            tiers=[t.value for t in self._state.prices.tiers],
            relational=status.get(StorageTier.RELATIONAL),
            key_value=status.get(StorageTier.KEY_VALUE),
        )

    async def sync_from_remote(self) -> SyncResultResponse:
        result = await self._state.prices.sync_from_remote()
        if result.success:
            await self._state.load()
        return SyncResultResponse.from_result(result)

    async def force_sync_to_remote(self) -> SyncResultResponse:
        prices = await self._state.prices.force_sync_to_remote(self._state.price_list)
        stored = self._state.stored_sizes
        if stored:
            await self._state.sizes.force_sync_to_remote(stored)
        return SyncResultResponse.from_result(prices)
