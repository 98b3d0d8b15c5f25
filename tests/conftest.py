"""Shared test fixtures."""

import copy

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.bb_common.enums import StorageTier
from src.bb_common.errors import RemoteUnavailableError
from src.bb_persistence.domain.coordinator import PersistenceCoordinator
from src.bb_pricing.domain.baseline import generate_price_list
from src.bb_pricing.domain.state import PricingState
from src.bb_pricing.domain.zone_registry import ZoneRegistry
from src.bb_pricing.infrastructure.municipalities import MunicipalityDirectory
from src.container import build_container
from src.main import app

ZONES = ["مصراتة", "طرابلس", "بنغازي"]


class MemoryBackend:
    """In-process backend; `down=True` makes it behave like an unreachable remote."""

    def __init__(self, tier: StorageTier, value=None, down: bool = False) -> None:
        self.tier = tier
        self.value = value
        self.down = down
        self.writes = 0

    async def read(self):
        if self.down:
            raise RemoteUnavailableError(self.tier.value, "down")
        return copy.deepcopy(self.value)

    async def write_full(self, value) -> None:
        if self.down:
            raise RemoteUnavailableError(self.tier.value, "down")
        self.writes += 1
        self.value = copy.deepcopy(value)

    async def ping(self) -> bool:
        return not self.down


def make_coordinator(name: str = "rental_pricing", value=None, local_value=None):
    relational = MemoryBackend(StorageTier.RELATIONAL, value)
    kv = MemoryBackend(StorageTier.KEY_VALUE)
    local = MemoryBackend(StorageTier.LOCAL, local_value)
    return PersistenceCoordinator(name, [relational, kv], local), relational, kv, local


@pytest.fixture
def pricing_state() -> PricingState:
    prices, *_ = make_coordinator("rental_pricing")
    sizes, *_ = make_coordinator("pricing_sizes")
    return PricingState(prices, sizes, fallback=lambda: generate_price_list(ZONES))


@pytest.fixture
def zone_registry(pricing_state: PricingState) -> ZoneRegistry:
    return ZoneRegistry(pricing_state, MunicipalityDirectory(ZONES), "مصراتة")


@pytest.fixture
async def client(tmp_path) -> AsyncClient:
    """Async HTTP client for the FastAPI app, wired to the local cache tier only."""
    settings = Settings(KV_BACKEND="none", LOCAL_CACHE_DIR=str(tmp_path / "cache"))
    container = build_container(settings, session_factory=None)
    await container.load()
    app.state.container = container
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
