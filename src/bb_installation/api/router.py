"""bb_installation REST endpoints.

GET    /installation                        — sizes, base prices, zones
GET    /installation/final-price            — base x zone multiplier
GET    /installation/statistics
PUT    /installation/base-prices/{size}
POST   /installation/sizes
DELETE /installation/sizes/{size}
POST   /installation/zones
DELETE /installation/zones/{name}
PUT    /installation/zones/{name}/multiplier
POST   /installation/quotes
POST   /installation/storage/sync-from-remote
POST   /installation/storage/sync-to-remote
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.bb_common.response import ApiResponse, success_response
from src.bb_common.schemas import SaveResultResponse, SyncResultResponse
from src.bb_installation.application.schemas import (
    AddInstallationSizeRequest,
    AddInstallationZoneRequest,
    BasePriceRequest,
    InstallationQuoteRequest,
    ZoneMultiplierRequest,
    pricing_to_dict,
    quote_to_dict,
)
from src.bb_installation.application.service import InstallationApplicationService
from src.bb_persistence.domain.backend import SaveResult
from src.container import ServiceContainer, get_container

router = APIRouter(prefix="/installation", tags=["installation"])


def get_service(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> InstallationApplicationService:
    return container.installation


Service = Annotated[InstallationApplicationService, Depends(get_service)]


def _respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


def _saved(request: Request, result: SaveResult) -> ApiResponse:
    return _respond(request, SaveResultResponse.from_result(result).model_dump(), result.message)


@router.get("")
async def get_installation_pricing(request: Request, service: Service) -> ApiResponse:
    return _respond(request, pricing_to_dict(service.pricing))


@router.get("/final-price")
async def final_price(
    request: Request,
    service: Service,
    zone: str = Query(...),
    size: str = Query(...),
) -> ApiResponse:
    return _respond(request, {"zone": zone, "size": size, "price": service.final_price(zone, size)})


@router.get("/statistics")
async def statistics(request: Request, service: Service) -> ApiResponse:
    return _respond(request, asdict(service.statistics()))


@router.put("/base-prices/{size}")
async def set_base_price(
    size: str, body: BasePriceRequest, request: Request, service: Service
) -> ApiResponse:
    return _saved(request, await service.set_base_price(size, body.price))


@router.post("/sizes")
async def add_size(
    body: AddInstallationSizeRequest, request: Request, service: Service
) -> ApiResponse:
    return _saved(request, await service.add_size(body.size, body.price))


@router.delete("/sizes/{size}")
async def remove_size(size: str, request: Request, service: Service) -> ApiResponse:
    return _saved(request, await service.remove_size(size))


@router.post("/zones")
async def add_zone(
    body: AddInstallationZoneRequest, request: Request, service: Service
) -> ApiResponse:
    return _saved(request, await service.add_zone(body.name, body.multiplier, body.description))


@router.delete("/zones/{name}")
async def remove_zone(name: str, request: Request, service: Service) -> ApiResponse:
    return _saved(request, await service.remove_zone(name))


@router.put("/zones/{name}/multiplier")
async def update_zone_multiplier(
    name: str, body: ZoneMultiplierRequest, request: Request, service: Service
) -> ApiResponse:
    return _saved(request, await service.update_zone_multiplier(name, body.multiplier))


@router.post("/quotes")
async def generate_quote(
    body: InstallationQuoteRequest, request: Request, service: Service
) -> ApiResponse:
    quote = service.generate_quote(
        [(i.size, i.zone, i.quantity, i.description) for i in body.items],
        body.customer,
        body.discount_percent,
        body.notes,
    )
    return _respond(request, quote_to_dict(quote))


@router.post("/storage/sync-from-remote")
async def sync_from_remote(request: Request, service: Service) -> ApiResponse:
    result = await service.sync_from_remote()
    return _respond(request, SyncResultResponse.from_result(result).model_dump(), result.message)


@router.post("/storage/sync-to-remote")
async def sync_to_remote(request: Request, service: Service) -> ApiResponse:
    result = await service.force_sync_to_remote()
    return _respond(request, SyncResultResponse.from_result(result).model_dump(), result.message)
