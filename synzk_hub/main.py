"""
SYNZK Hub API - HTTP surface for swap requests.

Provides REST endpoints for:
- Creating swaps (POST /api/swap)
- Fetching one swap (GET /api/status/{id})
- Listing recent swaps (GET /api/swaps?limit=N)
- Advancing a swap's status, dev helper (POST /api/swaps/{id}/advance)
- Health checks (GET /api/health)
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .log import configure_logging
from .middleware import (
    BodySizeLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from .models import (
    CreateSwapResponse,
    ErrorResponse,
    HealthResponse,
    SwapRecord,
)
from .service import SwapService
from .store import StoreInitError, SwapStore, create_store, mask_url

SERVICE_NAME = "synzk-hub"

logger = structlog.get_logger()


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(exclude_none=True),
    )


# ============================================================================
# Dependencies
# ============================================================================


def get_store(request: Request) -> SwapStore:
    """Store built by the lifespan handler."""
    return request.app.state.store


def get_service(store: SwapStore = Depends(get_store)) -> SwapService:
    return SwapService(store)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize storage before serving; abort startup if that fails."""
    settings: Settings = app.state.settings

    store = create_store(settings)
    try:
        store.initialize()
    except StoreInitError as e:
        logger.error(
            "store_init_failed",
            error=str(e),
            database_url=mask_url(settings.database_url),
        )
        raise

    app.state.store = store

    logger.info(
        "API started",
        version=__version__,
        host=settings.host,
        port=settings.port,
        storage=store.backend,
    )

    yield

    store.close()
    logger.info("API stopped")


# ============================================================================
# Routes
# ============================================================================

router = APIRouter(prefix="/api")


@router.get("/health", response_model=HealthResponse)
async def health_check(store: SwapStore = Depends(get_store)) -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        ok=True,
        service=SERVICE_NAME,
        time=int(time.time() * 1000),
        version=__version__,
        storage=store.backend,
    )


@router.post(
    "/swap",
    response_model=CreateSwapResponse,
    responses={400: {"model": ErrorResponse}},
)
def create_swap(
    payload: Any = Body(None),
    service: SwapService = Depends(get_service),
):
    """
    Create a swap request.

    The body is validated; on success the swap is stored as queued.
    """
    result = service.create(payload)
    if not isinstance(result, SwapRecord):
        return error_response(400, "invalid_request", result.details)

    return CreateSwapResponse(swap_id=result.id, status=result.status, mode=result.mode)


@router.get(
    "/status/{swap_id}",
    response_model=SwapRecord,
    responses={404: {"model": ErrorResponse}},
)
def get_swap_status(swap_id: str, service: SwapService = Depends(get_service)):
    """Fetch one swap record."""
    record = service.get(swap_id)
    if record is None:
        return error_response(404, "not_found")
    return record


@router.get("/swaps", response_model=list[SwapRecord])
def list_swaps(
    limit: Optional[str] = Query(None, description="Max records (1-100, default 50)"),
    service: SwapService = Depends(get_service),
) -> list[SwapRecord]:
    """List recent swaps, newest first."""
    return service.list(limit)


@router.post(
    "/swaps/{swap_id}/advance",
    response_model=SwapRecord,
    responses={404: {"model": ErrorResponse}},
)
def advance_swap(swap_id: str, service: SwapService = Depends(get_service)):
    """
    Dev helper: move a swap one step (queued -> sent -> confirmed).

    failed stays failed, confirmed stays confirmed.
    """
    record = service.advance(swap_id)
    if record is None:
        return error_response(404, "not_found")
    return record


# ============================================================================
# App Factory
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies (e.g. invalid JSON) are client errors."""
    errors = exc.errors()
    details = errors[0].get("msg") if errors else "invalid request"
    logger.warning("request_invalid", path=request.url.path, details=details)
    return error_response(400, "invalid_request", details)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="SYNZK Hub API",
        description="Backend for cross-chain swap requests",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Last added runs first: logging wraps everything
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.hsts)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(router)
    return app


app = create_app()


# ============================================================================
# Entry Point
# ============================================================================


def run(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: Optional[bool] = None,
) -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "synzk_hub.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=settings.debug if reload is None else reload,
        lifespan="on",
    )


if __name__ == "__main__":
    run()
