"""ServiceContainer — every pricing service, built once per process.

The FastAPI lifespan builds the container and stores it on app.state;
routers reach it through the get_container dependency.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import Request

from config.settings import Settings
from src.bb_common.database import async_session_factory
from src.bb_common.enums import KVBackendKind, StorageTier
from src.bb_common.redis_client import get_redis
from src.bb_installation.application.service import InstallationApplicationService
from src.bb_installation.domain.models import (
    InstallationPricing,
    InstallationPricingCodec,
    default_installation_pricing,
)
from src.bb_installation.infrastructure.row_mappers import InstallationRowMapper
from src.bb_multiplier.application.matrix_service import CityPricingMatrix
from src.bb_multiplier.application.service import MultiplierService
from src.bb_multiplier.domain.table import MultiplierTable, MultiplierTableCodec
from src.bb_multiplier.infrastructure.matrix_repository import PricingMatrixRepository
from src.bb_multiplier.infrastructure.row_mappers import MultiplierRowMapper
from src.bb_persistence.domain.backend import DocumentCodec, PersistenceBackend
from src.bb_persistence.domain.coordinator import PersistenceCoordinator
from src.bb_persistence.infrastructure.kv_store import (
    HttpKeyValueStore,
    KeyValueBackend,
    KeyValueStore,
    RedisKeyValueStore,
)
from src.bb_persistence.infrastructure.local_cache import LocalCache, LocalCacheBackend
from src.bb_persistence.infrastructure.relational import RelationalBackend, RowMapper
from src.bb_pricing.application.service import PricingApplicationService
from src.bb_pricing.domain.baseline import generate_price_list
from src.bb_pricing.domain.models import PriceList, PriceListCodec, SizeListCodec
from src.bb_pricing.domain.quote import QuoteGenerator
from src.bb_pricing.domain.resolver import PriceResolver
from src.bb_pricing.domain.size_registry import SizeRegistry
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.domain.zone_registry import ZoneRegistry
from src.bb_pricing.infrastructure.municipalities import MunicipalityDirectory
from src.bb_pricing.infrastructure.row_mappers import PriceListRowMapper, SizeListRowMapper

logger = logging.getLogger(__name__)

# Aggregate name doubles as the KV key and the local cache slot.
RENTAL_PRICING = "rental_pricing"
PRICING_SIZES = "pricing_sizes"
CITY_MULTIPLIERS = "city_multipliers"
INSTALLATION_PRICING = "installation_pricing"


@dataclass
class ServiceContainer:
    settings: Settings
    state: PricingState
    directory: MunicipalityDirectory
    sizes: SizeRegistry
    zones: ZoneRegistry
    resolver: PriceResolver
    quotes: QuoteGenerator
    pricing: PricingApplicationService
    multipliers: MultiplierService
    matrix: CityPricingMatrix
    installation: InstallationApplicationService
    kv_store: KeyValueStore | None = None

    async def load(self) -> dict[str, StorageTier | None]:
        """Populate every aggregate; unreachable remote tiers are not fatal."""
        sources = {
            RENTAL_PRICING: await self.state.load(),
            CITY_MULTIPLIERS: await self.multipliers.load(),
            INSTALLATION_PRICING: await self.installation.load(),
        }
        for aggregate, source in sources.items():
            logger.info("Loaded %s from %s", aggregate, source.value if source else "defaults")
        return sources

    async def aclose(self) -> None:
        if isinstance(self.kv_store, HttpKeyValueStore):
            await self.kv_store.aclose()


def build_kv_store(settings: Settings) -> KeyValueStore | None:
    kind = KVBackendKind(settings.KV_BACKEND)
    if kind == KVBackendKind.HTTP:
        return HttpKeyValueStore(settings.KV_BASE_URL, timeout=settings.KV_TIMEOUT_SECONDS)
    if kind == KVBackendKind.REDIS:
        return RedisKeyValueStore(get_redis)
    return None


def _coordinator(
    aggregate: str,
    mapper: RowMapper[Any],
    codec: DocumentCodec[Any],
    session_factory: Callable[[], Any] | None,
    kv_store: KeyValueStore | None,
    cache: LocalCache,
) -> PersistenceCoordinator[Any]:
    remotes: list[PersistenceBackend[Any]] = []
    if session_factory is not None:
        remotes.append(RelationalBackend(session_factory, mapper))
    if kv_store is not None:
        remotes.append(KeyValueBackend(kv_store, aggregate, codec))
    return PersistenceCoordinator(aggregate, remotes, LocalCacheBackend(cache, aggregate, codec))


def build_container(
    settings: Settings,
    session_factory: Callable[[], Any] | None = async_session_factory,
    kv_store: KeyValueStore | None = None,
) -> ServiceContainer:
    """Wire the services. Pass session_factory=None to run without the relational tier."""
    if kv_store is None:
        kv_store = build_kv_store(settings)
    cache = LocalCache(settings.LOCAL_CACHE_DIR)

    prices: PersistenceCoordinator[PriceList] = _coordinator(
        RENTAL_PRICING, PriceListRowMapper(), PriceListCodec(), session_factory, kv_store, cache
    )
    size_list: PersistenceCoordinator[list[str]] = _coordinator(
        PRICING_SIZES, SizeListRowMapper(), SizeListCodec(), session_factory, kv_store, cache
    )
    multiplier_table: PersistenceCoordinator[MultiplierTable] = _coordinator(
        CITY_MULTIPLIERS, MultiplierRowMapper(), MultiplierTableCodec(), session_factory, kv_store, cache
    )
    installation_pricing: PersistenceCoordinator[InstallationPricing] = _coordinator(
        INSTALLATION_PRICING,
        InstallationRowMapper(),
        InstallationPricingCodec(),
        session_factory,
        kv_store,
        cache,
    )

    directory = MunicipalityDirectory(settings.MUNICIPALITIES)
    state = PricingState(
        prices,
        size_list,
        fallback=lambda: generate_price_list(directory.names(), settings.CURRENCY),
    )
    multipliers = MultiplierService(multiplier_table)
    sizes = SizeRegistry(state)
    zones = ZoneRegistry(state, directory, settings.DEFAULT_ZONE, sizes)
    resolver = PriceResolver(state, zones, multiplier_for=multipliers.get_multiplier)
    matrix = CityPricingMatrix(
        PricingMatrixRepository(session_factory) if session_factory is not None else None,
        multipliers,
        resolver,
        sizes,
        settings.DEFAULT_ZONE,
        zones=zones,
    )
    installation = InstallationApplicationService(
        installation_pricing,
        fallback=lambda: default_installation_pricing(directory.names(), settings.CURRENCY),
    )
    quotes = QuoteGenerator(state, zones, resolver)
    return ServiceContainer(
        settings=settings,
        state=state,
        directory=directory,
        sizes=sizes,
        zones=zones,
        resolver=resolver,
        quotes=quotes,
        pricing=PricingApplicationService(state, sizes, zones, resolver, quotes),
        multipliers=multipliers,
        matrix=matrix,
        installation=installation,
        kv_store=kv_store,
    )


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency."""
    return request.app.state.container
