"""Domain models for bb_pricing — dataclasses plus their JSON document mapping.

Document shape (KV store and local cache):

    {
      "zones": {
        "<name>": {
          "name": "<name>",
          "prices":   {"marketers": {size: int}, "individuals": {...}, "companies": {...}},
          "abPrices": {"A": {"1": {size: int}, "3": {...}, "6": {...}, "12": {...}},
                       "B": {...}}
        }
      },
      "packages": [{"value": 1, "unit": "month", "label": "...", "discount": 0}, ...],
      "currency": "..."
    }
"""

from dataclasses import dataclass, field
from typing import Any

from src.bb_common.enums import CustomerType, PriceTier
from src.bb_pricing.domain.rules import duration_discount_percent

DEFAULT_CURRENCY = "د.ل"

SizePrices = dict[str, int]


@dataclass
class DurationPrices:
    """One tier's price table: all four duration slots always present."""

    m1: SizePrices = field(default_factory=dict)
    m3: SizePrices = field(default_factory=dict)
    m6: SizePrices = field(default_factory=dict)
    m12: SizePrices = field(default_factory=dict)

    def slot(self, duration: int) -> SizePrices | None:
        """Prices for a duration, or None for a duration with no slot."""
        return {1: self.m1, 3: self.m3, 6: self.m6, 12: self.m12}.get(duration)

    def slots(self) -> list[tuple[int, SizePrices]]:
        return [(1, self.m1), (3, self.m3), (6, self.m6), (12, self.m12)]


@dataclass
class TierPrices:
    a: DurationPrices = field(default_factory=DurationPrices)
    b: DurationPrices = field(default_factory=DurationPrices)

    def tier(self, tier: PriceTier) -> DurationPrices:
        return self.a if tier == PriceTier.A else self.b

    def replace(self, tier: PriceTier, prices: DurationPrices) -> None:
        if tier == PriceTier.A:
            self.a = prices
        else:
            self.b = prices


@dataclass
class CustomerPrices:
    marketers: SizePrices = field(default_factory=dict)
    individuals: SizePrices = field(default_factory=dict)
    companies: SizePrices = field(default_factory=dict)

    def for_type(self, customer_type: CustomerType) -> SizePrices:
        return getattr(self, customer_type.value)


@dataclass
class PriceZone:
    name: str
    prices: CustomerPrices = field(default_factory=CustomerPrices)
    ab_prices: TierPrices = field(default_factory=TierPrices)

    def size_tables(self) -> list[SizePrices]:
        """Every size -> price table of the zone (legacy + both tiers x durations)."""
        tables = [self.prices.for_type(ct) for ct in CustomerType]
        for tier in PriceTier:
            tables.extend(prices for _, prices in self.ab_prices.tier(tier).slots())
        return tables


@dataclass
class PackageDuration:
    value: int
    unit: str
    label: str

    @property
    def discount(self) -> int:
        return duration_discount_percent(self.value)


DEFAULT_PACKAGES: tuple[PackageDuration, ...] = (
    PackageDuration(1, "month", "شهر واحد"),
    PackageDuration(3, "months", "3 أشهر"),
    PackageDuration(6, "months", "6 أشهر"),
    PackageDuration(12, "year", "سنة كاملة"),
)


def default_packages() -> list[PackageDuration]:
    return [PackageDuration(p.value, p.unit, p.label) for p in DEFAULT_PACKAGES]


def package_for(months: int) -> PackageDuration:
    for pkg in DEFAULT_PACKAGES:
        if pkg.value == months:
            return PackageDuration(pkg.value, pkg.unit, pkg.label)
    return PackageDuration(months, "months", f"{months} أشهر")


@dataclass
class PriceList:
    zones: dict[str, PriceZone] = field(default_factory=dict)
    packages: list[PackageDuration] = field(default_factory=default_packages)
    currency: str = DEFAULT_CURRENCY


@dataclass
class Billboard:
    id: str
    name: str
    location: str
    size: str
    municipality: str
    price_category: str | None = None
    level: str | None = None
    image_url: str | None = None


@dataclass
class CustomerInfo:
    name: str
    email: str = ""
    phone: str = ""
    company: str | None = None


@dataclass
class QuoteItem:
    billboard_id: str
    name: str
    location: str
    size: str
    zone: str
    tier: PriceTier
    base_price: int
    final_price: int
    duration: int
    discount: int
    total: int
    image_url: str | None = None


@dataclass
class Quote:
    id: str
    customer: CustomerInfo
    package: PackageDuration
    items: list[QuoteItem]
    subtotal: int
    total_discount: int
    tax: int
    tax_rate: float
    total: int
    currency: str
    created_at: str
    valid_until: str


# ---------------------------------------------------------------------------
# Document mapping
# ---------------------------------------------------------------------------

def _int_prices(raw: Any) -> SizePrices:
    if not isinstance(raw, dict):
        return {}
    out: SizePrices = {}
    for size, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        out[str(size)] = int(value)
    return out


def _duration_prices_from_document(raw: Any) -> DurationPrices:
    raw = raw if isinstance(raw, dict) else {}
    return DurationPrices(
        m1=_int_prices(raw.get("1")),
        m3=_int_prices(raw.get("3")),
        m6=_int_prices(raw.get("6")),
        m12=_int_prices(raw.get("12")),
    )


def _duration_prices_to_document(prices: DurationPrices) -> dict[str, SizePrices]:
    return {str(d): dict(p) for d, p in prices.slots()}


def zone_to_document(zone: PriceZone) -> dict[str, Any]:
    return {
        "name": zone.name,
        "prices": {ct.value: dict(zone.prices.for_type(ct)) for ct in CustomerType},
        "abPrices": {
            tier.value: _duration_prices_to_document(zone.ab_prices.tier(tier))
            for tier in PriceTier
        },
    }


def zone_from_document(name: str, raw: dict[str, Any]) -> PriceZone:
    prices = raw.get("prices") or {}
    ab = raw.get("abPrices") or {}
    return PriceZone(
        name=raw.get("name") or name,
        prices=CustomerPrices(
            marketers=_int_prices(prices.get("marketers")),
            individuals=_int_prices(prices.get("individuals")),
            companies=_int_prices(prices.get("companies")),
        ),
        ab_prices=TierPrices(
            a=_duration_prices_from_document(ab.get("A")),
            b=_duration_prices_from_document(ab.get("B")),
        ),
    )


def price_list_to_document(price_list: PriceList) -> dict[str, Any]:
    return {
        "zones": {name: zone_to_document(z) for name, z in price_list.zones.items()},
        "packages": [
            {"value": p.value, "unit": p.unit, "label": p.label, "discount": p.discount}
            for p in price_list.packages
        ],
        "currency": price_list.currency,
    }


def price_list_from_document(document: dict[str, Any]) -> PriceList:
    if not isinstance(document, dict):
        raise TypeError(f"price list document must be an object, got {type(document).__name__}")
    zones_raw = document.get("zones") or {}
    packages = [
        PackageDuration(int(p["value"]), str(p.get("unit", "months")), str(p.get("label", "")))
        for p in document.get("packages") or []
    ]
    return PriceList(
        zones={name: zone_from_document(name, raw) for name, raw in zones_raw.items()},
        packages=packages or default_packages(),
        currency=document.get("currency") or DEFAULT_CURRENCY,
    )


class PriceListCodec:
    def to_document(self, value: PriceList) -> dict[str, Any]:
        return price_list_to_document(value)

    def from_document(self, document: Any) -> PriceList:
        return price_list_from_document(document)


class SizeListCodec:
    def to_document(self, value: list[str]) -> list[str]:
        return list(value)

    def from_document(self, document: Any) -> list[str]:
        if not isinstance(document, list):
            raise TypeError("size list document must be an array")
        return normalize_sizes(document)


def normalize_sizes(raw: list[Any]) -> list[str]:
    """Trim, drop blanks and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for item in raw:
        label = str(item or "").strip()
        if label:
            seen.setdefault(label, None)
    return list(seen)
