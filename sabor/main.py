"""
FastAPI Application Entry Point

Sabor & Cia - marmita ordering backend.

Endpoints:
    - POST /api/admin/login: Admin panel login
    - POST /api/orders: Create order (server-side pricing)
    - GET /api/orders: List orders
    - PUT /api/orders/status: Update status / delivered flag
    - GET /api/finances: Finance dashboard (totals + charts)
    - POST /api/finances/expense: Add expense with installments
    - GET /api/finances/export: Ledger spreadsheet export
    - /api/admin/ingredients, /api/admin/house-specials, /api/admin/drinks:
      catalog management
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from sabor.core.config import get_settings, setup_logging
from sabor.core.exceptions import AuthenticationError, NotFoundError, SaborError
from sabor.schemas import (
    AddExpenseRequest,
    AddExpenseResponse,
    AdminLoginRequest,
    AdminLoginResponse,
    CreateDrinkRequest,
    CreateHouseSpecialRequest,
    CreateIngredientRequest,
    CreateOrderRequest,
    CreateOrderResponse,
    DrinkResponse,
    ErrorResponse,
    ExportFormat,
    FinancesResponse,
    GetAvailableDrinksResponse,
    GetExpensesResponse,
    GetHouseSpecialsResponse,
    GetIngredientsResponse,
    GetOrdersResponse,
    HealthResponse,
    HouseSpecialResponse,
    IngredientResponse,
    OrderResponse,
    ToggleAvailabilityRequest,
    UpdateOrderStatusRequest,
    UpdateOrderStatusResponse,
)
from sabor.services import auth
from sabor.services.analytics import get_finances, normalize_period
from sabor.services.catalog import CatalogService
from sabor.services.excel_manager import ExcelManager
from sabor.services.expenses import ExpenseService, expense_message
from sabor.services.orders import OrderService
from sabor.services.storage import BaseStore, get_store

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

AVAILABILITY_UPDATED = "Disponibilidade atualizada com sucesso."


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
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    store = get_store()
    await store.init()
    logger.info(f"✅ Store: {store.provider_name}")

    problems = settings.validate_production_config()
    if problems:
        logger.warning(f"⚠️ Production config still on defaults: {problems}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await store.close()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Marmita ordering, menu management and financial ledger for Sabor & Cia.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/api/ping", tags=["Root"])
async def ping() -> dict[str, str]:
    return {"message": "Hello from Sabor & Cia API!"}


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(store: BaseStore = Depends(get_store)) -> HealthResponse:
    """Verify the store is reachable."""
    healthy = await store.health_check()
    return HealthResponse(
        status="operational" if healthy else "degraded",
        storage=f"{store.provider_name}: {'healthy' if healthy else 'unhealthy'}",
        timestamp=datetime.now(),
    )


# =============================================================================
# ADMIN LOGIN
# =============================================================================

@app.post(
    "/api/admin/login",
    response_model=AdminLoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    tags=["Admin"],
)
async def admin_login(payload: AdminLoginRequest) -> AdminLoginResponse:
    token = auth.login(payload.username, payload.password)
    return AdminLoginResponse(success=True, token=token, message="Login realizado com sucesso!")


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    status_code=201,
    response_model=CreateOrderResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    payload: CreateOrderRequest,
    store: BaseStore = Depends(get_store),
) -> CreateOrderResponse:
    """
    Create a new order.

    Prices are computed here from the size table and the drink catalog;
    any price sent by the client is ignored.
    """
    order = await OrderService(store).create_order(payload)
    return CreateOrderResponse(order=order)


@app.get(
    "/api/orders",
    response_model=GetOrdersResponse,
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(store: BaseStore = Depends(get_store)) -> GetOrdersResponse:
    """All orders, newest first."""
    return GetOrdersResponse(orders=await OrderService(store).list_orders())


@app.put(
    "/api/orders/status",
    response_model=UpdateOrderStatusResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def update_order_status(
    payload: UpdateOrderStatusRequest,
    store: BaseStore = Depends(get_store),
) -> UpdateOrderStatusResponse:
    order = await OrderService(store).update_status(
        payload.order_id,
        status=payload.status,
        delivered=payload.delivered,
    )
    return UpdateOrderStatusResponse(order=order)


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(order_id: str, store: BaseStore = Depends(get_store)) -> OrderResponse:
    """Get a specific order by ID."""
    return OrderResponse(order=await OrderService(store).get_order(order_id))


# =============================================================================
# FINANCE ENDPOINTS
# =============================================================================

@app.get(
    "/api/finances",
    response_model=FinancesResponse,
    tags=["Finances"],
    summary="Finance Dashboard",
)
async def finances(
    period: str = Query("mes", description="semana, mes or ano"),
    store: BaseStore = Depends(get_store),
) -> FinancesResponse:
    """Period-filtered ledger with totals and chart data."""
    records = await store.list_financial_records()
    report = get_finances(period, records)
    return FinancesResponse(**report.model_dump())


@app.post(
    "/api/finances/expense",
    status_code=201,
    response_model=AddExpenseResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Finances"],
)
async def add_expense(
    payload: AddExpenseRequest,
    store: BaseStore = Depends(get_store),
) -> AddExpenseResponse:
    expense = await ExpenseService(store).add_expense(
        payload.description,
        payload.amount,
        payload.installments,
    )
    return AddExpenseResponse(expense=expense, message=expense_message(expense))


@app.get(
    "/api/finances/expenses",
    response_model=GetExpensesResponse,
    tags=["Finances"],
)
async def list_expenses(store: BaseStore = Depends(get_store)) -> GetExpensesResponse:
    return GetExpensesResponse(expenses=await ExpenseService(store).list_expenses())


@app.get(
    "/api/finances/export",
    responses={500: {"model": ErrorResponse}},
    tags=["Finances"],
    summary="Export Ledger",
)
async def export_finances(
    period: str = Query("mes", description="semana, mes or ano"),
    format: ExportFormat = Query(ExportFormat.CSV),
    store: BaseStore = Depends(get_store),
):
    """Download the period-filtered records as CSV or XLSX."""
    now = datetime.now()
    records = await store.list_financial_records()
    report = get_finances(period, records, now=now)

    result = ExcelManager.export_finances(
        report.records,
        period=normalize_period(period).value,
        export_format=format,
        now=now,
    )
    if not result["success"]:
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": result["message"]},
        )

    file_path = result["file_path"]
    return FileResponse(
        file_path,
        media_type=EXPORT_MEDIA_TYPES[format],
        filename=file_path.name,
    )


# =============================================================================
# CATALOG ENDPOINTS
# =============================================================================

@app.get(
    "/api/admin/ingredients",
    response_model=GetIngredientsResponse,
    tags=["Catalog"],
)
async def list_ingredients(store: BaseStore = Depends(get_store)) -> GetIngredientsResponse:
    return GetIngredientsResponse(ingredients=await CatalogService(store).list_ingredients())


@app.post(
    "/api/admin/ingredients",
    status_code=201,
    response_model=IngredientResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def create_ingredient(
    payload: CreateIngredientRequest,
    store: BaseStore = Depends(get_store),
) -> IngredientResponse:
    ingredient = await CatalogService(store).create_ingredient(payload.name)
    return IngredientResponse(ingredient=ingredient, message="Ingrediente criado com sucesso!")


@app.patch(
    "/api/admin/ingredients/{ingredient_id}/toggle",
    response_model=IngredientResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def toggle_ingredient(
    ingredient_id: str,
    payload: Optional[ToggleAvailabilityRequest] = None,
    store: BaseStore = Depends(get_store),
) -> IngredientResponse:
    available = payload.available if payload else None
    ingredient = await CatalogService(store).toggle_ingredient(ingredient_id, available)
    return IngredientResponse(ingredient=ingredient, message=AVAILABILITY_UPDATED)


@app.get(
    "/api/admin/house-specials",
    response_model=GetHouseSpecialsResponse,
    tags=["Catalog"],
)
async def list_house_specials(store: BaseStore = Depends(get_store)) -> GetHouseSpecialsResponse:
    return GetHouseSpecialsResponse(house_specials=await CatalogService(store).list_house_specials())


@app.post(
    "/api/admin/house-specials",
    status_code=201,
    response_model=HouseSpecialResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def create_house_special(
    payload: CreateHouseSpecialRequest,
    store: BaseStore = Depends(get_store),
) -> HouseSpecialResponse:
    house_special = await CatalogService(store).create_house_special(
        payload.name,
        payload.description,
        payload.ingredients,
    )
    return HouseSpecialResponse(house_special=house_special, message="Moda da casa criada com sucesso!")


@app.patch(
    "/api/admin/house-specials/{house_special_id}/toggle",
    response_model=HouseSpecialResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def toggle_house_special(
    house_special_id: str,
    payload: Optional[ToggleAvailabilityRequest] = None,
    store: BaseStore = Depends(get_store),
) -> HouseSpecialResponse:
    available = payload.available if payload else None
    house_special = await CatalogService(store).toggle_house_special(house_special_id, available)
    return HouseSpecialResponse(house_special=house_special, message=AVAILABILITY_UPDATED)


@app.get(
    "/api/admin/drinks",
    response_model=GetAvailableDrinksResponse,
    tags=["Catalog"],
)
async def list_drinks(store: BaseStore = Depends(get_store)) -> GetAvailableDrinksResponse:
    return GetAvailableDrinksResponse(drinks=await CatalogService(store).list_drinks())


@app.post(
    "/api/admin/drinks",
    status_code=201,
    response_model=DrinkResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def create_drink(
    payload: CreateDrinkRequest,
    store: BaseStore = Depends(get_store),
) -> DrinkResponse:
    drink = await CatalogService(store).create_drink(payload.type, payload.name, payload.price)
    return DrinkResponse(drink=drink, message="Bebida criada com sucesso!")


@app.patch(
    "/api/admin/drinks/{drink_id}/toggle",
    response_model=DrinkResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Catalog"],
)
async def toggle_drink(
    drink_id: str,
    payload: Optional[ToggleAvailabilityRequest] = None,
    store: BaseStore = Depends(get_store),
) -> DrinkResponse:
    available = payload.available if payload else None
    drink = await CatalogService(store).toggle_drink(drink_id, available)
    return DrinkResponse(drink=drink, message=AVAILABILITY_UPDATED)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(SaborError)
async def domain_exception_handler(request: Request, exc: SaborError) -> JSONResponse:
    """Domain failures become {success: false, message}."""
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, AuthenticationError):
        status_code = 401
    else:
        status_code = 400

    logger.info(f"{request.method} {request.url.path} → {status_code}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies/queries are reported like domain validation errors."""
    errors = exc.errors()
    fields = [".".join(str(part) for part in error["loc"][1:]) for error in errors]
    logger.info(f"{request.method} {request.url.path} → 400: invalid {fields}")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": f"Dados inválidos: {', '.join(f for f in fields if f) or 'requisição'}.",
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": str(exc) if settings.debug else "Erro interno do servidor.",
        },
    )
