"""Domain models for bb_multiplier — pure dataclasses."""

from dataclasses import dataclass


@dataclass
class CityMultiplier:
    city_name: str
    multiplier: float = 1.0
    description: str | None = None
    is_active: bool = True


@dataclass
class MultiplierSummary:
    highest_city: str | None
    highest: float
    lowest_city: str | None
    lowest: float
    average: float


@dataclass
class PricingTableRow:
    """One size of the billboard_pricing matrix: duration -> {"A": int, "B": int}."""

    billboard_size: str
    prices: dict[int, dict[str, int]]


@dataclass
class MatrixUpdateResult:
    success: bool
    message: str
