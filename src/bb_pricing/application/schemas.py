"""Pydantic schemas for the bb_pricing API."""

from dataclasses import asdict
from typing import Literal

from pydantic import BaseModel, Field

from src.bb_common.enums import CustomerType, PriceTier
from src.bb_pricing.domain.models import Billboard, CustomerInfo, Quote

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddSizeRequest(BaseModel):
    size: str = Field(..., description="Billboard size, e.g. 4x12")
    reference_price: int = Field(..., description="A-tier one-month price")


class SetSizesRequest(BaseModel):
    sizes: list[str]


class BulkSizeRow(BaseModel):
    size: str
    price: int


class BulkSizeRequest(BaseModel):
    rows: list[BulkSizeRow]


class AddZoneRequest(BaseModel):
    name: str


class RenameZoneRequest(BaseModel):
    new_name: str


class CopyTierRequest(BaseModel):
    source: PriceTier
    target: PriceTier


class CustomerPriceRequest(BaseModel):
    customer_type: CustomerType
    size: str
    price: int


class TierPriceRequest(BaseModel):
    tier: PriceTier
    duration: Literal[1, 3, 6, 12] = Field(..., description="Package length in months")
    size: str
    price: int


class CustomerSchema(BaseModel):
    name: str
    email: str = ""
    phone: str = ""
    company: str | None = None

    def to_domain(self) -> CustomerInfo:
        return CustomerInfo(**self.model_dump())


class BillboardSchema(BaseModel):
    id: str
    name: str
    location: str = ""
    size: str
    municipality: str = ""
    price_category: str | None = None
    level: str | None = None
    image_url: str | None = None

    def to_domain(self) -> Billboard:
        return Billboard(**self.model_dump())


class QuoteRequest(BaseModel):
    customer: CustomerSchema
    billboards: list[BillboardSchema] = Field(..., min_length=1)
    package_months: int = Field(1, description="Package length in months")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ResolvedPriceResponse(BaseModel):
    size: str
    zone: str
    tier: PriceTier
    duration: int
    price: int
    city: str | None = None
    city_price: int | None = None


class StorageStatusResponse(BaseModel):
    tiers: list[str]
    relational: bool | None = None
    key_value: bool | None = None
    local: bool = True


def quote_to_dict(quote: Quote) -> dict:
    data = asdict(quote)
    data["package"]["discount"] = quote.package.discount
    return data
