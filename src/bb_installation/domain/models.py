"""Domain models for bb_installation — pure dataclasses plus the document codec."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.bb_pricing.domain.baseline import DEFAULT_SIZES
from src.bb_pricing.domain.models import DEFAULT_CURRENCY

# One-off installation fee per size before the zone multiplier.
DEFAULT_INSTALLATION_PRICES: dict[str, int] = {
    "5x13": 1500,
    "4x12": 1200,
    "4x10": 1000,
    "3x8": 800,
    "3x6": 600,
    "3x4": 500,
}


@dataclass
class InstallationZone:
    name: str
    prices: dict[str, int] = field(default_factory=dict)
    multiplier: float = 1.0
    description: str | None = None


@dataclass
class InstallationPricing:
    zones: dict[str, InstallationZone] = field(default_factory=dict)
    sizes: list[str] = field(default_factory=list)
    base_prices: dict[str, int] = field(default_factory=dict)
    currency: str = DEFAULT_CURRENCY
    last_updated: datetime | None = None


@dataclass
class InstallationQuoteItem:
    size: str
    zone: str
    quantity: int
    unit_price: int
    total: int
    description: str | None = None


@dataclass
class InstallationQuote:
    id: str
    customer: str
    items: list[InstallationQuoteItem]
    subtotal: int
    discount_percent: float
    discount: int
    total: int
    currency: str
    notes: str | None
    created_at: str


@dataclass
class InstallationStatistics:
    zone_count: int
    size_count: int
    min_price: int
    max_price: int
    average_price: int


def default_installation_pricing(
    zone_names: list[str], currency: str = DEFAULT_CURRENCY
) -> InstallationPricing:
    sizes = list(DEFAULT_SIZES)
    base = {s: DEFAULT_INSTALLATION_PRICES[s] for s in sizes}
    zones = {name: InstallationZone(name=name, prices=dict(base)) for name in zone_names}
    return InstallationPricing(zones=zones, sizes=sizes, base_prices=base, currency=currency)


class InstallationPricingCodec:
    def to_document(self, value: InstallationPricing) -> dict[str, Any]:
        return {
            "zones": {
                name: {
                    "name": z.name,
                    "prices": dict(z.prices),
                    "multiplier": z.multiplier,
                    "description": z.description,
                }
                for name, z in value.zones.items()
            },
            "sizes": list(value.sizes),
            "basePrices": dict(value.base_prices),
            "currency": value.currency,
            "lastUpdated": value.last_updated.isoformat() if value.last_updated else None,
        }

    def from_document(self, document: Any) -> InstallationPricing:
        if not isinstance(document, dict):
            raise TypeError("installation pricing document must be an object")
        zones: dict[str, InstallationZone] = {}
        for name, raw in (document.get("zones") or {}).items():
            zones[name] = InstallationZone(
                name=raw.get("name", name),
                prices={str(k): int(v) for k, v in (raw.get("prices") or {}).items()},
                multiplier=float(raw.get("multiplier") or 1.0),
                description=raw.get("description"),
            )
        sizes = [str(s) for s in document.get("sizes") or []]
        base = {str(k): int(v) for k, v in (document.get("basePrices") or {}).items()}
        last_updated = document.get("lastUpdated")
        return InstallationPricing(
            zones=zones,
            sizes=sizes,
            base_prices=base,
            currency=document.get("currency") or DEFAULT_CURRENCY,
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
        )
