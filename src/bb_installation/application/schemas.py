"""Pydantic schemas for the bb_installation API."""

from dataclasses import asdict

from pydantic import BaseModel, Field

from src.bb_installation.domain.models import InstallationPricing, InstallationQuote


class BasePriceRequest(BaseModel):
    price: int


class AddInstallationSizeRequest(BaseModel):
    size: str
    price: int


class AddInstallationZoneRequest(BaseModel):
    name: str
    multiplier: float = 1.0
    description: str | None = None


class ZoneMultiplierRequest(BaseModel):
    multiplier: float


class InstallationQuoteLine(BaseModel):
    size: str
    zone: str
    quantity: int = Field(1, ge=1)
    description: str | None = None


class InstallationQuoteRequest(BaseModel):
    customer: str
    items: list[InstallationQuoteLine] = Field(..., min_length=1)
    discount_percent: float = Field(0, ge=0, le=100)
    notes: str | None = None


def pricing_to_dict(pricing: InstallationPricing) -> dict:
    return {
        "zones": {
            name: {
                "name": z.name,
                "multiplier": z.multiplier,
                "description": z.description,
                "prices": dict(z.prices),
            }
            for name, z in pricing.zones.items()
        },
        "sizes": list(pricing.sizes),
        "base_prices": dict(pricing.base_prices),
        "currency": pricing.currency,
        "last_updated": pricing.last_updated.isoformat() if pricing.last_updated else None,
    }


def quote_to_dict(quote: InstallationQuote) -> dict:
    return asdict(quote)
