"""
FastAPI Application Entry Point

Comanda - restaurant order management.

Endpoints:
    - GET/POST/PUT/DELETE /api/menu: Menu catalog
    - GET/POST /api/orders, PUT/DELETE /api/orders/{id}: Order ledger
    - GET /api/orders/{id}/split: Split bill
    - GET /api/kitchen, /api/cashier: Polled boards
    - GET /api/reports/daily: Daily report
    - GET /health: System health check

Run from project root:
    uvicorn comanda.main:app --port 8001
    python -m comanda.main  # API_HOST / API_PORT from the settings

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any, List, Optional

import redis
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from comanda.core.config import get_settings, setup_logging
from comanda.core.exceptions import ComandaError, ValidationError
from comanda.database import dispose_db, init_db
from comanda.entities import OrderStatus
from comanda.schemas import (
    CashierBoardResponse,
    DailyReportResponse,
    ErrorResponse,
    HealthResponse,
    KitchenBoardResponse,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdateRequest,
    OrderCreate,
    OrderResponse,
    SplitBillResponse,
    StatusUpdate,
    SuccessResponse,
)
from comanda.seed import seed_menu
from comanda.services.boards import cashier_board, kitchen_board, split_bill
from comanda.services.catalog import MenuCatalog, get_menu_catalog
from comanda.services.excel_manager import order_payload
from comanda.services.ledger import OrderLedger, get_order_ledger, parse_status
from comanda.services.reporting import build_daily_report
from comanda.tasks import export_order_to_excel

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Storage: {settings.storage_backend.value}")
    logger.info("=" * 60)

    if settings.uses_database:
        await init_db()
        logger.info("✅ Database initialized")

    if settings.seed_default_menu:
        await seed_menu(get_menu_catalog())

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await dispose_db()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Menu, orders, kitchen and cashier for a small restaurant.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"🍽️ {settings.restaurant_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    catalog: MenuCatalog = Depends(get_menu_catalog),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> HealthResponse:
    """Verify storage and Redis are reachable."""

    storage_status = "healthy"
    try:
        await catalog.repository.health_check()
        await ledger.repository.health_check()
    except Exception as e:
        storage_status = f"unhealthy: {str(e)}"
        logger.error(f"Storage health check failed: {e}")

    redis_status = "healthy"
    try:
        r = redis.Redis.from_url(settings.redis_url, socket_timeout=2)
        r.ping()
        r.close()
    except Exception as e:
        redis_status = f"unhealthy: {str(e)}"
        logger.error(f"Redis health check failed: {e}")

    overall = "operational" if storage_status == "healthy" and redis_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall,
        storage=storage_status,
        redis=redis_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get("/api/menu", response_model=List[MenuItemResponse], tags=["Menu"])
async def list_menu(
    include_all: bool = Query(False, alias="all"),
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> List[MenuItemResponse]:
    """Active items; every item with ?all=true."""
    items = await catalog.list(include_inactive=include_all)
    return [MenuItemResponse.model_validate(item) for item in items]


@app.post(
    "/api/menu",
    response_model=MenuItemResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def create_menu_item(
    payload: MenuItemCreate,
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> MenuItemResponse:
    item = await catalog.create(
        name=payload.name,
        category=payload.category,
        price=payload.price,
        active=payload.active,
        sides=payload.sides,
        extras=[e.model_dump() for e in payload.extras] if payload.extras else None,
    )
    return MenuItemResponse.model_validate(item)


@app.put(
    "/api/menu",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def update_menu_item(
    payload: MenuItemUpdateRequest,
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> SuccessResponse:
    """Partial update by id; only the fields sent change."""
    if not payload.id:
        raise ValidationError("ID required", field="id")
    await catalog.update(payload.id, payload.to_mask())
    return SuccessResponse()


@app.put("/api/menu/{item_id}/toggle", response_model=SuccessResponse, tags=["Menu"])
async def toggle_menu_item(
    item_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> SuccessResponse:
    """Show or hide an item on the ordering screen."""
    await catalog.toggle_active(item_id)
    return SuccessResponse()


@app.post(
    "/api/menu/{item_id}/duplicate",
    response_model=MenuItemResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def duplicate_menu_item(
    item_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> MenuItemResponse:
    original = await catalog.get(item_id)
    copy = await catalog.duplicate(original)
    return MenuItemResponse.model_validate(copy)


@app.delete(
    "/api/menu",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Menu"],
)
async def delete_menu_item(
    item_id: Optional[str] = Query(None, alias="id"),
    catalog: MenuCatalog = Depends(get_menu_catalog),
) -> SuccessResponse:
    if not item_id:
        raise ValidationError("ID required", field="id")
    await catalog.delete(item_id)
    return SuccessResponse()


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@app.get("/api/orders", response_model=List[OrderResponse], tags=["Orders"])
async def list_orders(
    ledger: OrderLedger = Depends(get_order_ledger),
) -> List[OrderResponse]:
    """Every order, oldest first."""
    orders = await ledger.list()
    return [OrderResponse.model_validate(order) for order in orders]


@app.post(
    "/api/orders",
    response_model=OrderResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def create_order(
    payload: OrderCreate,
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderResponse:
    logger.info(f"Creating order for: {payload.customer}")
    items = [item.model_dump() for item in payload.items] if payload.items is not None else None
    order = await ledger.create(payload.customer, items)
    return OrderResponse.model_validate(order)


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    ledger: OrderLedger = Depends(get_order_ledger),
) -> OrderResponse:
    order = await ledger.get(order_id)
    return OrderResponse.model_validate(order)


@app.put(
    "/api/orders/{order_id}",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def update_order_status(
    order_id: str,
    payload: StatusUpdate,
    ledger: OrderLedger = Depends(get_order_ledger),
) -> SuccessResponse:
    """Kitchen sends the next step, cashier sends "paid"."""
    status = parse_status(payload.status)
    current = await ledger.repository.get(order_id)
    await ledger.update_status(order_id, status)

    # One sales row per order: only the move into paid is exported
    newly_paid = current is not None and not current.is_paid and status == OrderStatus.PAID
    if newly_paid and settings.export_paid_orders:
        order = await ledger.repository.get(order_id)
        if order is not None:
            try:
                export_order_to_excel.delay(order_payload(order))
            except Exception as e:
                logger.exception(f"Could not queue export of order {order_id}: {e}")

    return SuccessResponse()


@app.delete("/api/orders/{order_id}", response_model=SuccessResponse, tags=["Orders"])
async def delete_order(
    order_id: str,
    ledger: OrderLedger = Depends(get_order_ledger),
) -> SuccessResponse:
    await ledger.delete(order_id)
    return SuccessResponse()


@app.get(
    "/api/orders/{order_id}/split",
    response_model=SplitBillResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Cashier"],
)
async def split_order_bill(
    order_id: str,
    items: Optional[List[str]] = Query(None),
    people: int = Query(1),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> SplitBillResponse:
    """Share of the selected lines per person."""
    order = await ledger.get(order_id)
    return SplitBillResponse.model_validate(split_bill(order, items, people))


# =============================================================================
# BOARD & REPORT ENDPOINTS
# =============================================================================

@app.get("/api/kitchen", response_model=KitchenBoardResponse, tags=["Kitchen"])
async def kitchen(
    ledger: OrderLedger = Depends(get_order_ledger),
) -> KitchenBoardResponse:
    board = kitchen_board(await ledger.list(), datetime.now())
    return KitchenBoardResponse.model_validate(board)


@app.get("/api/cashier", response_model=CashierBoardResponse, tags=["Cashier"])
async def cashier(
    ledger: OrderLedger = Depends(get_order_ledger),
) -> CashierBoardResponse:
    board = cashier_board(await ledger.list(), date.today())
    return CashierBoardResponse.model_validate(board)


@app.get(
    "/api/reports/daily",
    response_model=DailyReportResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Reports"],
)
async def daily_report(
    day: Optional[date] = Query(None, alias="date"),
    status: Optional[str] = Query(None),
    top: Optional[int] = Query(None, ge=1),
    ledger: OrderLedger = Depends(get_order_ledger),
) -> DailyReportResponse:
    """Statistics of one calendar day, today by default."""
    report = build_daily_report(
        await ledger.list(),
        day or date.today(),
        status=parse_status(status) if status else None,
        top_n=top or settings.top_items_limit,
    )
    return DailyReportResponse.model_validate(report)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(ComandaError)
async def domain_exception_handler(request: Request, exc: ComandaError) -> JSONResponse:
    """ValidationError → 400, NotFoundError → 404."""
    logger.info(f"{request.method} {request.url.path} → {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors like missing fields."""
    errors: list[Any] = exc.errors()
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid data",
            detail="; ".join(
                f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in errors
            ),
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "comanda.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
