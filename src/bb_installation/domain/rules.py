"""Installation pricing rules.

Operations mutate the InstallationPricing they are given; callers pass a copy
and persist it afterwards.
"""

from src.bb_common.errors import (
    DuplicateSizeError,
    DuplicateZoneError,
    InvalidZoneNameError,
    LastSizeViolationError,
    LastZoneViolationError,
    SizeNotFoundError,
    ZoneNotFoundError,
)
from src.bb_common.rounding import scale
from src.bb_installation.domain.models import (
    InstallationPricing,
    InstallationStatistics,
    InstallationZone,
)
from src.bb_multiplier.domain.table import validate_multiplier
from src.bb_pricing.domain.rules import validate_price, validate_size


def base_price(pricing: InstallationPricing, zone: InstallationZone, size: str) -> int:
    if size in pricing.base_prices:
        return pricing.base_prices[size]
    return zone.prices.get(size, 0)


def final_price(pricing: InstallationPricing, zone_name: str, size: str) -> int:
    zone = pricing.zones.get(zone_name)
    if zone is None:
        raise ZoneNotFoundError(zone_name)
    return scale(base_price(pricing, zone, size), zone.multiplier)


def _write_base_price(pricing: InstallationPricing, size: str, value: int) -> None:
    pricing.base_prices[size] = value
    for zone in pricing.zones.values():
        zone.prices[size] = value


def set_base_price(pricing: InstallationPricing, size: str, value: int) -> None:
    size = validate_size(size)
    validate_price(value)
    if size not in pricing.sizes:
        raise SizeNotFoundError(size)
    _write_base_price(pricing, size, value)


def add_size(pricing: InstallationPricing, size: str, price: int) -> None:
    size = validate_size(size)
    validate_price(price)
    if size in pricing.sizes:
        raise DuplicateSizeError(size)
    pricing.sizes.append(size)
    _write_base_price(pricing, size, price)


def remove_size(pricing: InstallationPricing, size: str) -> None:
    if size not in pricing.sizes:
        raise SizeNotFoundError(size)
    if len(pricing.sizes) <= 1:
        raise LastSizeViolationError(size)
    pricing.sizes.remove(size)
    pricing.base_prices.pop(size, None)
    for zone in pricing.zones.values():
        zone.prices.pop(size, None)


def add_zone(
    pricing: InstallationPricing,
    name: str,
    multiplier: float = 1.0,
    description: str | None = None,
) -> None:
    cleaned = name.strip()
    if not cleaned:
        raise InvalidZoneNameError(name)
    name = cleaned
    if name in pricing.zones:
        raise DuplicateZoneError(name)
    validate_multiplier(multiplier)
    first = next(iter(pricing.zones.values()), None)
    prices = {
        s: pricing.base_prices.get(s, first.prices.get(s, 0) if first else 0)
        for s in pricing.sizes
    }
    pricing.zones[name] = InstallationZone(
        name=name, prices=prices, multiplier=float(multiplier), description=description
    )


def remove_zone(pricing: InstallationPricing, name: str) -> None:
    if name not in pricing.zones:
        raise ZoneNotFoundError(name)
    if len(pricing.zones) <= 1:
        raise LastZoneViolationError(name)
    del pricing.zones[name]


def update_zone_multiplier(pricing: InstallationPricing, name: str, multiplier: float) -> None:
    if name not in pricing.zones:
        raise ZoneNotFoundError(name)
    validate_multiplier(multiplier)
    pricing.zones[name].multiplier = float(multiplier)


def statistics(pricing: InstallationPricing) -> InstallationStatistics:
    finals = [
        final_price(pricing, zone_name, size)
        for zone_name in pricing.zones
        for size in pricing.sizes
    ]
    if not finals:
        return InstallationStatistics(len(pricing.zones), len(pricing.sizes), 0, 0, 0)
    return InstallationStatistics(
        zone_count=len(pricing.zones),
        size_count=len(pricing.sizes),
        min_price=min(finals),
        max_price=max(finals),
        average_price=round(sum(finals) / len(finals)),
    )
