"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bb_common.database import engine
from src.bb_common.errors import AppError
from src.bb_common.redis_client import close_redis
from src.bb_common.request_log import RequestLogMiddleware
from src.bb_common.response import error_response
from src.bb_installation.api.router import router as installation_router
from src.bb_multiplier.api.router import router as multiplier_router
from src.bb_pricing.api.router import router as pricing_router
from src.container import build_container


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build services and load every aggregate. Shutdown: dispose."""
    container = build_container(settings)
    # Remote tiers being down is not fatal; the local cache or defaults answer.
    await container.load()
    app.state.container = container
    yield
    await container.aclose()
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(pricing_router, prefix="/api/v1")
app.include_router(multiplier_router, prefix="/api/v1")
app.include_router(installation_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
