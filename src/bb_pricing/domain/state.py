"""PricingState — the current PriceList and size list for this process.

The aggregate is never edited in place: callers take a snapshot(), change
the copy, and hand it to commit(). commit() persists first and only swaps
the in-memory reference once the local cache write has gone through.
"""

import asyncio
import copy
import logging
from collections.abc import Callable

from src.bb_common.enums import StorageTier
from src.bb_persistence.domain.backend import SaveResult
from src.bb_persistence.domain.coordinator import PersistenceCoordinator
from src.bb_pricing.domain.models import PriceList, default_packages

logger = logging.getLogger(__name__)


class PricingState:
    def __init__(
        self,
        prices: PersistenceCoordinator[PriceList],
        sizes: PersistenceCoordinator[list[str]],
        fallback: Callable[[], PriceList],
    ) -> None:
        self.prices = prices
        self.sizes = sizes
        self._fallback = fallback
        self._price_list: PriceList | None = None
        self._stored_sizes: list[str] | None = None

    async def load(self) -> StorageTier | None:
        """Read both aggregates through their tiers; returns the price list's source."""
        price_read, size_read = await asyncio.gather(self.prices.read(), self.sizes.read())
        if price_read.value is None:
            logger.info("No stored price list; generating from municipality data")
            self._price_list = self._fallback()
        else:
            self._price_list = price_read.value
            if not self._price_list.packages:
                self._price_list.packages = default_packages()
        self._stored_sizes = size_read.value or None
        return price_read.source

    @property
    def price_list(self) -> PriceList:
        if self._price_list is None:
            self._price_list = self._fallback()
        return self._price_list

    @property
    def stored_sizes(self) -> list[str] | None:
        return list(self._stored_sizes) if self._stored_sizes else None

    def snapshot(self) -> PriceList:
        return copy.deepcopy(self.price_list)

    async def commit(self, price_list: PriceList) -> SaveResult:
        result = await self.prices.save(price_list)
        self._price_list = price_list
        return result

    async def commit_sizes(self, sizes: list[str]) -> SaveResult:
        result = await self.sizes.save(list(sizes))
        self._stored_sizes = list(sizes)
        return result

    async def commit_with_sizes(self, price_list: PriceList, sizes: list[str]) -> SaveResult:
        """Persist the price list, then the size list; returns the weaker outcome.

        Prices go first so a stored size list never names a size with no prices.
        """
        result = await self.commit(price_list)
        size_result = await self.commit_sizes(sizes)
        return size_result if result.success else result
