"""ZoneRegistry — pricing zones keyed by municipality name."""

import copy
import logging

from src.bb_common.enums import CustomerType, PriceTier
from src.bb_common.errors import (
    DuplicateZoneError,
    InvalidZoneNameError,
    LastZoneViolationError,
    ZoneNotFoundError,
)
from src.bb_persistence.domain.backend import SaveResult
from src.bb_pricing.domain.baseline import build_default_zone
from src.bb_pricing.domain.models import PriceList, PriceZone
from src.bb_pricing.domain.rules import validate_price, validate_size
from src.bb_pricing.domain.size_registry import SizeRegistry
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.infrastructure.municipalities import MunicipalityDirectory

logger = logging.getLogger(__name__)


def _zone_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidZoneNameError(name or "")
    return cleaned


class ZoneRegistry:
    def __init__(
        self,
        state: PricingState,
        directory: MunicipalityDirectory,
        default_zone: str,
        sizes: SizeRegistry | None = None,
    ) -> None:
        self._state = state
        self._directory = directory
        self._default_zone = default_zone
        self._sizes = sizes or SizeRegistry(state)

    def _new_zone(self, name: str, price_list: PriceList) -> PriceZone:
        # Sizes outside the baseline copy an existing zone's prices.
        template = next(iter(price_list.zones.values()), None)
        return build_default_zone(name, self._sizes.list_sizes(), template)

    def list_zones(self) -> list[str]:
        return list(self._state.price_list.zones)

    def get_zone(self, name: str) -> PriceZone | None:
        zone = self._state.price_list.zones.get(name)
        return copy.deepcopy(zone) if zone is not None else None

    def determine_zone(self, municipality: str) -> str:
        """Zone name for a billboard's municipality text."""
        return self._directory.find(municipality) or (municipality or "").strip() or self._default_zone

    async def get_or_create_zone(self, name: str) -> PriceZone:
        name = _zone_name(name)
        existing = self.get_zone(name)
        if existing is not None:
            return existing
        price_list = self._state.snapshot()
        zone = self._new_zone(name, price_list)
        price_list.zones[name] = zone
        await self._state.commit(price_list)
        logger.info("Created default pricing zone %s", name)
        return copy.deepcopy(zone)

    async def add_zone(self, name: str) -> SaveResult:
        name = _zone_name(name)
        if name in self._state.price_list.zones:
            raise DuplicateZoneError(name)
        price_list = self._state.snapshot()
        price_list.zones[name] = self._new_zone(name, price_list)
        return await self._state.commit(price_list)

    async def remove_zone(self, name: str) -> SaveResult:
        zones = self._state.price_list.zones
        if name not in zones:
            raise ZoneNotFoundError(name)
        if len(zones) <= 1:
            raise LastZoneViolationError(name)
        price_list = self._state.snapshot()
        del price_list.zones[name]
        logger.info("Removed pricing zone %s", name)
        return await self._state.commit(price_list)

    async def rename_zone(self, old_name: str, new_name: str) -> SaveResult:
        new_name = _zone_name(new_name)
        zones = self._state.price_list.zones
        if old_name not in zones:
            raise ZoneNotFoundError(old_name)
        if new_name in zones and new_name != old_name:
            raise DuplicateZoneError(new_name)
        price_list = self._state.snapshot()
        # Rebuild so the renamed zone keeps its display position.
        renamed: dict[str, PriceZone] = {}
        for key, zone in price_list.zones.items():
            if key == old_name:
                zone.name = new_name
                renamed[new_name] = zone
            else:
                renamed[key] = zone
        price_list.zones = renamed
        return await self._state.commit(price_list)

    async def copy_tier(self, zone_name: str, source: PriceTier, target: PriceTier) -> SaveResult:
        """Deep value copy of one tier's whole duration table onto the other."""
        if zone_name not in self._state.price_list.zones:
            raise ZoneNotFoundError(zone_name)
        price_list = self._state.snapshot()
        zone = price_list.zones[zone_name]
        zone.ab_prices.replace(target, copy.deepcopy(zone.ab_prices.tier(source)))
        return await self._state.commit(price_list)

    async def update_customer_price(
        self, zone_name: str, customer_type: CustomerType, size: str, price: int
    ) -> SaveResult:
        size = validate_size(size)
        validate_price(price)
        if zone_name not in self._state.price_list.zones:
            raise ZoneNotFoundError(zone_name)
        price_list = self._state.snapshot()
        price_list.zones[zone_name].prices.for_type(customer_type)[size] = price
        return await self._state.commit(price_list)

    async def update_tier_price(
        self, zone_name: str, tier: PriceTier, duration: int, size: str, price: int
    ) -> SaveResult:
        size = validate_size(size)
        validate_price(price)
        if zone_name not in self._state.price_list.zones:
            raise ZoneNotFoundError(zone_name)
        price_list = self._state.snapshot()
        slot = price_list.zones[zone_name].ab_prices.tier(tier).slot(duration)
        if slot is None:
            raise ValueError(f"Unsupported duration: {duration}")
        slot[size] = price
        return await self._state.commit(price_list)
