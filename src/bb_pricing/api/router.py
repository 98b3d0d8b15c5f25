"""bb_pricing REST endpoints.

GET    /pricing/price-list                     — full price list document
GET    /pricing/sizes                          — ordered size list
POST   /pricing/sizes                          — add a size with a reference price
PUT    /pricing/sizes                          — replace the size list
POST   /pricing/sizes/bulk                     — apply (size, price) rows
DELETE /pricing/sizes/{size}                   — remove a size everywhere
GET    /pricing/zones                          — zone names
POST   /pricing/zones                          — add a zone with baseline prices
GET    /pricing/zones/{name}                   — one zone
PATCH  /pricing/zones/{name}                   — rename
DELETE /pricing/zones/{name}                   — remove
POST   /pricing/zones/{name}/copy-tier         — copy A <-> B
PUT    /pricing/zones/{name}/customer-prices   — set one legacy customer price
PUT    /pricing/zones/{name}/tier-prices       — set one A/B duration price
GET    /pricing/zone-for                       — zone for a municipality
GET    /pricing/resolve                        — effective price
POST   /pricing/quotes                         — rental quote
GET    /pricing/storage/status                 — remote tier reachability
POST   /pricing/storage/sync-from-remote
POST   /pricing/storage/sync-to-remote
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.bb_common.enums import PriceTier
from src.bb_common.response import ApiResponse, success_response
from src.bb_pricing.application.schemas import (
    AddSizeRequest,
    AddZoneRequest,
    BulkSizeRequest,
    CopyTierRequest,
    CustomerPriceRequest,
    QuoteRequest,
    RenameZoneRequest,
    SetSizesRequest,
    TierPriceRequest,
)
from src.bb_pricing.application.service import PricingApplicationService
from src.container import ServiceContainer, get_container

router = APIRouter(prefix="/pricing", tags=["pricing"])


def get_service(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> PricingApplicationService:
    return container.pricing


Service = Annotated[PricingApplicationService, Depends(get_service)]


def _respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/price-list")
async def get_price_list(request: Request, service: Service) -> ApiResponse:
    return _respond(request, service.get_price_list())


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------


@router.get("/sizes")
async def list_sizes(request: Request, service: Service) -> ApiResponse:
    return _respond(request, service.list_sizes())


@router.post("/sizes")
async def add_size(body: AddSizeRequest, request: Request, service: Service) -> ApiResponse:
    result = await service.add_size(body.size, body.reference_price)
    return _respond(request, result.model_dump(), result.message)


@router.put("/sizes")
async def set_sizes(body: SetSizesRequest, request: Request, service: Service) -> ApiResponse:
    result = await service.set_sizes(body.sizes)
    return _respond(request, result.model_dump(), result.message)


@router.post("/sizes/bulk")
async def bulk_apply_sizes(
    body: BulkSizeRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.bulk_apply([(r.size, r.price) for r in body.rows])
    return _respond(request, result.model_dump(), result.message)


@router.delete("/sizes/{size}")
async def remove_size(size: str, request: Request, service: Service) -> ApiResponse:
    result = await service.remove_size(size)
    return _respond(request, result.model_dump(), result.message)


# ---------------------------------------------------------------------------
# Zones
# ---------------------------------------------------------------------------


@router.get("/zones")
async def list_zones(request: Request, service: Service) -> ApiResponse:
    return _respond(request, service.list_zones())


@router.post("/zones")
async def add_zone(body: AddZoneRequest, request: Request, service: Service) -> ApiResponse:
    result = await service.add_zone(body.name)
    return _respond(request, result.model_dump(), result.message)


@router.get("/zones/{name}")
async def get_zone(name: str, request: Request, service: Service) -> ApiResponse:
    return _respond(request, service.get_zone(name))


@router.patch("/zones/{name}")
async def rename_zone(
    name: str, body: RenameZoneRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.rename_zone(name, body.new_name)
    return _respond(request, result.model_dump(), result.message)


@router.delete("/zones/{name}")
async def remove_zone(name: str, request: Request, service: Service) -> ApiResponse:
    result = await service.remove_zone(name)
    return _respond(request, result.model_dump(), result.message)


@router.post("/zones/{name}/copy-tier")
async def copy_tier(
    name: str, body: CopyTierRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.copy_tier(name, body.source, body.target)
    return _respond(request, result.model_dump(), result.message)


@router.put("/zones/{name}/customer-prices")
async def update_customer_price(
    name: str, body: CustomerPriceRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.update_customer_price(name, body.customer_type, body.size, body.price)
    return _respond(request, result.model_dump(), result.message)


@router.put("/zones/{name}/tier-prices")
async def update_tier_price(
    name: str, body: TierPriceRequest, request: Request, service: Service
) -> ApiResponse:
    result = await service.update_tier_price(
        name, body.tier, body.duration, body.size, body.price
    )
    return _respond(request, result.model_dump(), result.message)


@router.get("/zone-for")
async def zone_for(
    request: Request,
    service: Service,
    municipality: str = Query(..., description="Billboard municipality text"),
) -> ApiResponse:
    return _respond(request, {"municipality": municipality, "zone": service.zone_for(municipality)})


# ---------------------------------------------------------------------------
# Prices and quotes
# ---------------------------------------------------------------------------


@router.get("/resolve")
async def resolve_price(
    request: Request,
    service: Service,
    size: str = Query(...),
    zone: str = Query(...),
    tier: PriceTier = Query(PriceTier.A),
    duration: int = Query(1, ge=1),
    municipality: str | None = Query(None),
    city: str | None = Query(None, description="Apply this city's multiplier as well"),
) -> ApiResponse:
    result = await service.resolve(size, zone, tier, duration, municipality, city)
    return _respond(request, result.model_dump())


@router.post("/quotes")
async def generate_quote(body: QuoteRequest, request: Request, service: Service) -> ApiResponse:
    return _respond(request, await service.generate_quote(body))


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@router.get("/storage/status")
async def storage_status(request: Request, service: Service) -> ApiResponse:
    result = await service.storage_status()
    return _respond(request, result.model_dump())


@router.post("/storage/sync-from-remote")
async def sync_from_remote(request: Request, service: Service) -> ApiResponse:
    result = await service.sync_from_remote()
    return _respond(request, result.model_dump(), result.message)


@router.post("/storage/sync-to-remote")
async def sync_to_remote(request: Request, service: Service) -> ApiResponse:
    result = await service.force_sync_to_remote()
    return _respond(request, result.model_dump(), result.message)
