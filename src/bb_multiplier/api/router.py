"""bb_multiplier REST endpoints.

GET  /multipliers                      — all cities with impact band
GET  /multipliers/summary              — highest / lowest / average
GET  /multipliers/calculate            — base price x city multiplier
GET  /multipliers/matrix               — size x duration x A/B grid
GET  /multipliers/matrix/overview      — grid and multipliers together
PUT  /multipliers/matrix/price         — update one grid cell
POST /multipliers/matrix/sizes         — insert every cell of a new size
GET  /multipliers/matrix/city-price    — grid price scaled for a city
POST /multipliers/storage/sync-from-remote
POST /multipliers/storage/sync-to-remote
GET  /multipliers/{city}               — one city
PUT  /multipliers/{city}               — set a city's multiplier
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.bb_common.enums import PriceTier
from src.bb_common.response import ApiResponse, success_response
from src.bb_common.schemas import SaveResultResponse, SyncResultResponse
from src.bb_multiplier.application.schemas import (
    MatrixPriceRequest,
    MatrixSizeRequest,
    MultiplierResponse,
    SetMultiplierRequest,
    overview_to_dict,
    table_rows_to_list,
)
from src.bb_multiplier.domain.table import classify_multiplier
from src.container import ServiceContainer, get_container

router = APIRouter(prefix="/multipliers", tags=["multipliers"])

Container = Annotated[ServiceContainer, Depends(get_container)]


def _respond(request: Request, data: object, message: str = "success") -> ApiResponse:
    resp = success_response(data, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_multipliers(request: Request, container: Container) -> ApiResponse:
    return _respond(request, container.multipliers.list_multipliers())


@router.get("/summary")
async def multiplier_summary(request: Request, container: Container) -> ApiResponse:
    return _respond(request, asdict(container.multipliers.summary()))


@router.get("/calculate")
async def calculate_city_price(
    request: Request,
    container: Container,
    base_price: int = Query(..., ge=0),
    city: str = Query(...),
) -> ApiResponse:
    multiplier = container.multipliers.get_multiplier(city)
    return _respond(request, {
        "base_price": base_price,
        "city": city,
        "multiplier": multiplier,
        "price": container.multipliers.calculate(base_price, city),
    })


@router.get("/matrix")
async def pricing_matrix(request: Request, container: Container) -> ApiResponse:
    rows, from_db = await container.matrix.get_pricing_table()
    return _respond(request, {"rows": table_rows_to_list(rows), "from_database": from_db})


@router.get("/matrix/overview")
async def pricing_overview(request: Request, container: Container) -> ApiResponse:
    overview = await container.matrix.load_overview()
    return _respond(request, overview_to_dict(overview))


@router.put("/matrix/price")
async def update_matrix_price(
    body: MatrixPriceRequest, request: Request, container: Container
) -> ApiResponse:
    result = await container.matrix.update_price(
        body.size, body.duration, body.category, body.zone, body.price
    )
    return _respond(request, asdict(result), result.message)


@router.post("/matrix/sizes")
async def add_matrix_size(
    body: MatrixSizeRequest, request: Request, container: Container
) -> ApiResponse:
    result = await container.matrix.add_size(body.size, body.price_a, body.price_b)
    return _respond(request, asdict(result), result.message)


@router.get("/matrix/city-price")
async def matrix_city_price(
    request: Request,
    container: Container,
    size: str = Query(...),
    duration: int = Query(1, ge=1),
    category: PriceTier = Query(PriceTier.A),
    zone: str = Query(...),
    city: str = Query(...),
) -> ApiResponse:
    price = await container.matrix.get_city_price(size, duration, category, zone, city)
    return _respond(request, {"size": size, "duration": duration, "city": city, "price": price})


@router.post("/storage/sync-from-remote")
async def sync_from_remote(request: Request, container: Container) -> ApiResponse:
    result = await container.multipliers.sync_from_remote()
    return _respond(request, SyncResultResponse.from_result(result).model_dump(), result.message)


@router.post("/storage/sync-to-remote")
async def sync_to_remote(request: Request, container: Container) -> ApiResponse:
    result = await container.multipliers.force_sync_to_remote()
    return _respond(request, SyncResultResponse.from_result(result).model_dump(), result.message)


@router.get("/{city}")
async def get_multiplier(city: str, request: Request, container: Container) -> ApiResponse:
    multiplier = container.multipliers.get_multiplier(city)
    data = MultiplierResponse(
        city_name=city,
        multiplier=multiplier,
        impact=classify_multiplier(multiplier).value,
    )
    return _respond(request, data.model_dump())


@router.put("/{city}")
async def set_multiplier(
    city: str, body: SetMultiplierRequest, request: Request, container: Container
) -> ApiResponse:
    result = await container.multipliers.set_multiplier(city, body.multiplier, body.description)
    return _respond(request, SaveResultResponse.from_result(result).model_dump(), result.message)
