"""MultiplierService — owns the current MultiplierTable for this process.

Same edit discipline as the price list: copy, change, save, then swap.
"""

import logging

from src.bb_common.enums import StorageTier
from src.bb_multiplier.domain.models import MultiplierSummary
from src.bb_multiplier.domain.table import (
    MultiplierTable,
    apply_multiplier,
    classify_multiplier,
)
from src.bb_persistence.domain.backend import SaveResult, SyncResult
from src.bb_persistence.domain.coordinator import PersistenceCoordinator

logger = logging.getLogger(__name__)


class MultiplierService:
    def __init__(self, coordinator: PersistenceCoordinator[MultiplierTable]) -> None:
        self.coordinator = coordinator
        self._table: MultiplierTable | None = None

    async def load(self) -> StorageTier | None:
        result = await self.coordinator.read()
        if result.value is None or not result.value.entries():
            logger.info("No stored city multipliers; using defaults")
            self._table = MultiplierTable.with_defaults()
        else:
            self._table = result.value
        return result.source

    @property
    def table(self) -> MultiplierTable:
        if self._table is None:
            self._table = MultiplierTable.with_defaults()
        return self._table

    def get_multiplier(self, city_name: str) -> float:
        return self.table.get_multiplier(city_name)

    def calculate(self, base_price: int, city_name: str) -> int:
        return apply_multiplier(base_price, self.get_multiplier(city_name))

    def list_multipliers(self) -> list[dict]:
        return [
            {
                "city_name": e.city_name,
                "multiplier": e.multiplier,
                "description": e.description,
                "is_active": e.is_active,
                "impact": classify_multiplier(e.multiplier).value,
            }
            for e in self.table.entries()
        ]

    def summary(self) -> MultiplierSummary:
        return self.table.summary()

    async def set_multiplier(
        self, city_name: str, value: float, description: str | None = None
    ) -> SaveResult:
        table = self.table.copy()
        table.set_multiplier(city_name, value, description)
        result = await self.coordinator.save(table)
        self._table = table
        logger.info("Multiplier for %s set to %s", city_name, value)
        return result

    async def sync_from_remote(self) -> SyncResult:
        result = await self.coordinator.sync_from_remote()
        if result.success:
            await self.load()
        return result

    async def force_sync_to_remote(self) -> SyncResult:
        return await self.coordinator.force_sync_to_remote(self.table)
