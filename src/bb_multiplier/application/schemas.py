"""Pydantic schemas for the bb_multiplier API."""

from dataclasses import asdict

from pydantic import BaseModel, Field

from src.bb_common.enums import PriceTier
from src.bb_multiplier.application.matrix_service import PricingOverview
from src.bb_multiplier.domain.models import PricingTableRow


class SetMultiplierRequest(BaseModel):
    multiplier: float = Field(..., description="Must be > 0; 1.0 is the reference city")
    description: str | None = None


class MatrixPriceRequest(BaseModel):
    size: str
    duration: int = Field(..., ge=1)
    category: PriceTier
    zone: str
    price: int


class MatrixSizeRequest(BaseModel):
    size: str
    price_a: int = Field(..., description="1-month A price")
    price_b: int | None = Field(None, description="1-month B price; defaults to round(A x 1.2)")


class MultiplierResponse(BaseModel):
    city_name: str
    multiplier: float
    impact: str


def table_rows_to_list(rows: list[PricingTableRow]) -> list[dict]:
    return [
        {"billboard_size": r.billboard_size, "prices": {str(d): p for d, p in r.prices.items()}}
        for r in rows
    ]


def overview_to_dict(overview: PricingOverview) -> dict:
    return {
        "pricing_table": table_rows_to_list(overview.rows),
        "from_database": overview.from_database,
        "multipliers": overview.multipliers,
        "summary": asdict(overview.summary),
    }
