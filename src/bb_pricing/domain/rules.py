"""Pricing rules — pure integer arithmetic, no state.

Duration discount (applied to the 1-month price):
  1 -> x1.00, 3 -> x0.95, 6 -> x0.90, 12 -> x0.80, anything else -> x1.00
B tier from A tier: round(A x 1.2)
Legacy customer prices from a reference price:
  individuals = ref, marketers = round(ref x 0.9), companies = round(ref x 1.15)
"""

import re
from decimal import Decimal

from src.bb_common.enums import CustomerType
from src.bb_common.errors import InvalidFormatError, InvalidPriceError
from src.bb_common.rounding import round_half_away, scale

DURATIONS: tuple[int, ...] = (1, 3, 6, 12)

_DURATION_FACTORS: dict[int, Decimal] = {
    1: Decimal("1.00"),
    3: Decimal("0.95"),
    6: Decimal("0.90"),
    12: Decimal("0.80"),
}

B_TIER_MARKUP = Decimal("1.2")

_CUSTOMER_RATIOS: dict[CustomerType, Decimal] = {
    CustomerType.MARKETERS: Decimal("0.9"),
    CustomerType.INDIVIDUALS: Decimal("1"),
    CustomerType.COMPANIES: Decimal("1.15"),
}

_SIZE_RE = re.compile(r"^\d+x\d+$")


def duration_factor(duration: int) -> Decimal:
    return _DURATION_FACTORS.get(duration, Decimal("1.00"))


def apply_duration_discount(base: int, duration: int) -> int:
    return scale(base, duration_factor(duration))


def duration_discount_percent(duration: int) -> int:
    """Displayed discount for a package, derived from the factor (3 -> 5)."""
    return round_half_away((1 - duration_factor(duration)) * 100)


def derive_b_from_a(a_price: int) -> int:
    return scale(a_price, B_TIER_MARKUP)


def legacy_customer_prices(reference: int) -> dict[CustomerType, int]:
    return {ct: scale(reference, ratio) for ct, ratio in _CUSTOMER_RATIOS.items()}


def is_valid_size(label: str) -> bool:
    return bool(_SIZE_RE.match(label))


def validate_size(label: str) -> str:
    """Return the trimmed label or raise InvalidFormatError."""
    cleaned = (label or "").strip()
    if not is_valid_size(cleaned):
        raise InvalidFormatError(label)
    return cleaned


def validate_price(price: int) -> None:
    if price < 0:
        raise InvalidPriceError(price)
