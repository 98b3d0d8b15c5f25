"""Integer price arithmetic.

All prices are int. Factors (duration discounts, tier markups, city
multipliers) are applied in Decimal and rounded half away from zero, so
re-computing a price from the same inputs never drifts.
"""

from decimal import ROUND_HALF_UP, Decimal


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    """Convert via str() so 0.95 is 0.95, not its binary approximation."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_away(value: Decimal) -> int:
    """Round to the nearest integer; ties go away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def scale(price: int | float, factor: int | float | str | Decimal) -> int:
    """round(price x factor)."""
    return round_half_away(to_decimal(price) * to_decimal(factor))


def undiscount(price: int, discount_percent: int | float) -> int:
    """Back-compute the pre-discount price: round(price / (1 - pct/100)).

    Returns price unchanged when there is no discount.
    """
    if discount_percent <= 0:
        return price
    remaining = 1 - to_decimal(discount_percent) / 100
    return round_half_away(to_decimal(price) / remaining)
