"""InstallationApplicationService — installation fee table and quotes."""

import copy
import logging
from collections.abc import Callable

from src.bb_common.datetime_utils import epoch_millis, utc_now
from src.bb_common.enums import StorageTier
from src.bb_common.rounding import round_half_away, to_decimal
from src.bb_installation.domain import rules
from src.bb_installation.domain.models import (
    InstallationPricing,
    InstallationQuote,
    InstallationQuoteItem,
    InstallationStatistics,
)
from src.bb_persistence.domain.backend import SaveResult, SyncResult
from src.bb_persistence.domain.coordinator import PersistenceCoordinator

logger = logging.getLogger(__name__)


class InstallationApplicationService:
    def __init__(
        self,
        coordinator: PersistenceCoordinator[InstallationPricing],
        fallback: Callable[[], InstallationPricing],
    ) -> None:
        self.coordinator = coordinator
        self._fallback = fallback
        self._pricing: InstallationPricing | None = None

    async def load(self) -> StorageTier | None:
        result = await self.coordinator.read()
        if result.value is None or not result.value.zones:
            logger.info("No stored installation pricing; using defaults")
            self._pricing = self._fallback()
        else:
            self._pricing = result.value
        return result.source

    @property
    def pricing(self) -> InstallationPricing:
        if self._pricing is None:
            self._pricing = self._fallback()
        return self._pricing

    def snapshot(self) -> InstallationPricing:
        return copy.deepcopy(self.pricing)

    async def _commit(self, pricing: InstallationPricing) -> SaveResult:
        pricing.last_updated = utc_now()
        result = await self.coordinator.save(pricing)
        self._pricing = pricing
        return result

    def final_price(self, zone_name: str, size: str) -> int:
        return rules.final_price(self.pricing, zone_name, size)

    async def set_base_price(self, size: str, value: int) -> SaveResult:
        pricing = self.snapshot()
        rules.set_base_price(pricing, size, value)
        return await self._commit(pricing)

    async def add_size(self, size: str, price: int) -> SaveResult:
        pricing = self.snapshot()
        rules.add_size(pricing, size, price)
        return await self._commit(pricing)

    async def remove_size(self, size: str) -> SaveResult:
        pricing = self.snapshot()
        rules.remove_size(pricing, size)
        return await self._commit(pricing)

    async def add_zone(
        self, name: str, multiplier: float = 1.0, description: str | None = None
    ) -> SaveResult:
        pricing = self.snapshot()
        rules.add_zone(pricing, name, multiplier, description)
        return await self._commit(pricing)

    async def remove_zone(self, name: str) -> SaveResult:
        pricing = self.snapshot()
        rules.remove_zone(pricing, name)
        return await self._commit(pricing)

    async def update_zone_multiplier(self, name: str, multiplier: float) -> SaveResult:
        pricing = self.snapshot()
        rules.update_zone_multiplier(pricing, name, multiplier)
        return await self._commit(pricing)

    def generate_quote(
        self,
        items: list[tuple[str, str, int, str | None]],
        customer: str,
        discount_percent: float = 0,
        notes: str | None = None,
    ) -> InstallationQuote:
        """items are (size, zone, quantity, description)."""
        lines = []
        for size, zone, quantity, description in items:
            unit = self.final_price(zone, size)
            lines.append(InstallationQuoteItem(
                size=size,
                zone=zone,
                quantity=quantity,
                unit_price=unit,
                total=unit * quantity,
                description=description,
            ))
        subtotal = sum(line.total for line in lines)
        discount = round_half_away(to_decimal(subtotal) * to_decimal(discount_percent) / 100)
        now = utc_now()
        return InstallationQuote(
            id=f"IQ-{epoch_millis(now)}",
            customer=customer,
            items=lines,
            subtotal=subtotal,
            discount_percent=discount_percent,
            discount=discount,
            total=subtotal - discount,
            currency=self.pricing.currency,
            notes=notes,
            created_at=now.isoformat(),
        )

    def statistics(self) -> InstallationStatistics:
        return rules.statistics(self.pricing)

    async def sync_from_remote(self) -> SyncResult:
        result = await self.coordinator.sync_from_remote()
        if result.success:
            await self.load()
        return result

    async def force_sync_to_remote(self) -> SyncResult:
        return await self.coordinator.force_sync_to_remote(self.pricing)
