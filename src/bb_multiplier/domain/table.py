"""MultiplierTable — per-city scalars applied on top of a reference price.

multiplier == 1.0 marks the reference city; > 1.0 raises, < 1.0 lowers.
Rounding is half away from zero (Decimal), the same rule the duration
discount uses, so composed prices are reproducible.
"""

import copy
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from src.bb_common.enums import MultiplierImpact
from src.bb_common.errors import InvalidMultiplierError
from src.bb_common.rounding import scale, to_decimal
from src.bb_multiplier.domain.models import CityMultiplier, MultiplierSummary

_HIGH_INCREASE_ABOVE = Decimal("1.10")
_HIGH_DECREASE_BELOW = Decimal("0.90")

DEFAULT_CITY_MULTIPLIERS: tuple[CityMultiplier, ...] = (
    CityMultiplier("طرابلس", 1.2, "العاصمة - سعر مرتفع"),
    CityMultiplier("بنغازي", 1.1, "المدينة الثانية - سعر متوسط مرتفع"),
    CityMultiplier("مصراتة", 1.0, "السعر الأساسي"),
    CityMultiplier("صبراتة", 0.9, "مدينة ساحلية - سعر منخفض"),
    CityMultiplier("سبها", 0.8, "مدينة جنوبية - سعر منخفض"),
    CityMultiplier("طبرق", 0.85, "مدينة شرقية - سعر منخفض"),
)


def apply_multiplier(base_price: int, multiplier: float) -> int:
    return scale(base_price, multiplier)


def classify_multiplier(multiplier: float) -> MultiplierImpact:
    m = to_decimal(multiplier)
    if m > _HIGH_INCREASE_ABOVE:
        return MultiplierImpact.HIGH_INCREASE
    if m > 1:
        return MultiplierImpact.MODERATE_INCREASE
    if m < _HIGH_DECREASE_BELOW:
        return MultiplierImpact.HIGH_DECREASE
    if m < 1:
        return MultiplierImpact.MODERATE_DECREASE
    return MultiplierImpact.BASE


def validate_multiplier(value: float) -> None:
    if not value > 0:
        raise InvalidMultiplierError(value)


class MultiplierTable:
    def __init__(self, entries: Iterable[CityMultiplier] = ()) -> None:
        self._entries: dict[str, CityMultiplier] = {}
        for entry in entries:
            self._entries[entry.city_name] = entry

    @classmethod
    def with_defaults(cls) -> "MultiplierTable":
        return cls(copy.deepcopy(list(DEFAULT_CITY_MULTIPLIERS)))

    def get_multiplier(self, city_name: str) -> float:
        entry = self._entries.get(city_name)
        if entry is None or not entry.is_active:
            return 1.0
        return entry.multiplier

    def set_multiplier(
        self, city_name: str, value: float, description: str | None = None
    ) -> None:
        validate_multiplier(value)
        entry = self._entries.get(city_name)
        if entry is None:
            self._entries[city_name] = CityMultiplier(city_name, float(value), description)
            return
        entry.multiplier = float(value)
        entry.is_active = True
        if description is not None:
            entry.description = description

    def entries(self) -> list[CityMultiplier]:
        return list(self._entries.values())

    def active(self) -> dict[str, float]:
        return {e.city_name: e.multiplier for e in self._entries.values() if e.is_active}

    def copy(self) -> "MultiplierTable":
        return MultiplierTable(copy.deepcopy(self.entries()))

    def summary(self) -> MultiplierSummary:
        active = self.active()
        if not active:
            return MultiplierSummary(None, 1.0, None, 1.0, 1.0)
        highest_city = max(active, key=lambda c: active[c])
        lowest_city = min(active, key=lambda c: active[c])
        average = sum(active.values()) / len(active)
        return MultiplierSummary(
            highest_city=highest_city,
            highest=active[highest_city],
            lowest_city=lowest_city,
            lowest=active[lowest_city],
            average=round(average, 2),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiplierTable):
            return NotImplemented
        return self.entries() == other.entries()


class MultiplierTableCodec:
    def to_document(self, value: MultiplierTable) -> list[dict[str, Any]]:
        return [
            {
                "city_name": e.city_name,
                "multiplier": e.multiplier,
                "description": e.description,
                "is_active": e.is_active,
            }
            for e in value.entries()
        ]

    def from_document(self, document: Any) -> MultiplierTable:
        if not isinstance(document, list):
            raise TypeError("multiplier document must be an array")
        return MultiplierTable(
            CityMultiplier(
                city_name=str(item["city_name"]),
                multiplier=float(item.get("multiplier", 1.0)),
                description=item.get("description"),
                is_active=bool(item.get("is_active", True)),
            )
            for item in document
        )
