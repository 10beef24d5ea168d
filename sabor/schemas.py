"""
Pydantic Schemas for Domain Entities and Request/Response Validation

Field names are snake_case in Python and camelCase on the wire
(``customerName``, ``drinksTotal``...), matching the web client.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# ENUMS
# =============================================================================

class MarmitaSize(str, Enum):
    PEQUENA = "pequena"
    MEDIA = "media"
    GRANDE = "grande"


class OrderStatus(str, Enum):
    """Order status workflow."""
    PENDENTE = "pendente"
    PREPARANDO = "preparando"
    PRONTA = "pronta"
    ENTREGUE = "entregue"
    CANCELADO = "cancelado"


class DrinkType(str, Enum):
    COCA_LATA = "coca-lata"
    GUARANA_LATA = "guarana-lata"
    SPRITE_LATA = "sprite-lata"


class OrderingType(str, Enum):
    MODA_DA_CASA = "moda-da-casa"
    PERSONALIZADA = "personalizada"


class RecordType(str, Enum):
    """Credit (entrada) or debit (saida) ledger entry."""
    ENTRADA = "entrada"
    SAIDA = "saida"


class FinancePeriod(str, Enum):
    SEMANA = "semana"
    MES = "mes"
    ANO = "ano"


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


# =============================================================================
# CATALOG
# =============================================================================

class Ingredient(CamelModel):
    id: str
    name: str
    available: bool = True
    created_at: datetime


class HouseSpecial(CamelModel):
    """Preset ("moda da casa") combination of ingredient ids."""
    id: str
    name: str
    description: str
    ingredients: List[str]
    available: bool = True
    created_at: datetime


class AvailableDrink(CamelModel):
    id: str
    type: DrinkType
    name: str
    price: float
    available: bool = True
    created_at: datetime


# =============================================================================
# ORDERS
# =============================================================================

class DrinkOption(CamelModel):
    """
    Drink line of an order.

    ``type`` carries the catalog reference chosen by the client: the
    drink id (``drink_1``) or its type (``coca-lata``).
    """
    type: str
    quantity: int = 1


class MarmitaOptions(CamelModel):
    ordering_type: OrderingType
    house_special_id: Optional[str] = None
    selected_ingredients: Optional[List[str]] = None
    salada: bool = False
    torresmo: bool = False
    talheres: bool = False
    quantidade: int = 1
    wants_drinks: bool = False
    drinks: List[DrinkOption] = Field(default_factory=list)


class OrderItem(CamelModel):
    size: MarmitaSize
    options: MarmitaOptions
    unit_price: float
    drinks_total: float
    total_price: float


class Address(CamelModel):
    street: str
    number: str
    complement: Optional[str] = None
    neighborhood: str
    city: str
    zip_code: str


class Order(CamelModel):
    id: str
    item: OrderItem
    address: Address
    customer_name: str
    customer_phone: str
    total: float
    status: OrderStatus = OrderStatus.PENDENTE
    payment_method: str
    delivered: bool = False
    created_at: datetime
    updated_at: datetime


# =============================================================================
# LEDGER
# =============================================================================

class FinancialRecord(CamelModel):
    """Immutable ledger entry. ``order_id`` points to an order or an expense."""
    id: str
    order_id: str
    amount: float
    type: RecordType
    description: str
    date: datetime


class Expense(CamelModel):
    id: str
    description: str
    amount: float
    installments: int
    monthly_amount: float
    start_date: datetime
    created_at: datetime


class DailyPoint(CamelModel):
    date: str
    revenue: float
    orders: int


class MonthlyPoint(CamelModel):
    month: str
    revenue: float
    orders: int


class PaymentMethodSlice(CamelModel):
    method: str
    amount: float
    count: int


class SizeSlice(CamelModel):
    size: str
    count: int
    revenue: float


class ChartData(CamelModel):
    daily: List[DailyPoint] = Field(default_factory=list)
    monthly: List[MonthlyPoint] = Field(default_factory=list)
    payment_methods: List[PaymentMethodSlice] = Field(default_factory=list)
    sizes: List[SizeSlice] = Field(default_factory=list)


class FinancesReport(CamelModel):
    """Period-filtered ledger with totals and chart aggregates."""
    records: List[FinancialRecord]
    total_revenue: float
    total_expenses: float
    chart_data: ChartData


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemRequest(CamelModel):
    """Item as sent by the client; prices are computed server-side."""
    size: str
    options: MarmitaOptions


class CreateOrderRequest(CamelModel):
    item: Optional[OrderItemRequest] = None
    address: Optional[Address] = None
    customer_name: str = ""
    customer_phone: str = ""
    payment_method: str = ""


class UpdateOrderStatusRequest(CamelModel):
    order_id: Optional[str] = None
    status: Optional[OrderStatus] = None
    delivered: Optional[bool] = None


class AddExpenseRequest(CamelModel):
    description: str = ""
    amount: float = 0
    installments: int = 0


class CreateIngredientRequest(CamelModel):
    name: str = ""


class CreateHouseSpecialRequest(CamelModel):
    name: str = ""
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)


class CreateDrinkRequest(CamelModel):
    type: Optional[DrinkType] = None
    name: str = ""
    price: float = 0


class ToggleAvailabilityRequest(CamelModel):
    """Explicit value to set; omitted means flip the current flag."""
    available: Optional[bool] = None


class AdminLoginRequest(CamelModel):
    username: str = ""
    password: str = ""


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    message: str


class HealthResponse(CamelModel):
    status: str
    storage: str
    timestamp: datetime


class AdminLoginResponse(CamelModel):
    success: bool
    token: Optional[str] = None
    message: str


class CreateOrderResponse(CamelModel):
    order: Order
    success: bool = True
    message: str = "Pedido criado com sucesso!"


class OrderResponse(CamelModel):
    order: Order
    success: bool = True


class GetOrdersResponse(CamelModel):
    orders: List[Order]
    success: bool = True


class UpdateOrderStatusResponse(CamelModel):
    order: Order
    success: bool = True
    message: str = "Pedido atualizado com sucesso."


class FinancesResponse(FinancesReport):
    success: bool = True


class AddExpenseResponse(CamelModel):
    expense: Expense
    success: bool = True
    message: str


class GetExpensesResponse(CamelModel):
    expenses: List[Expense]
    success: bool = True


class IngredientResponse(CamelModel):
    ingredient: Ingredient
    success: bool = True
    message: str


class GetIngredientsResponse(CamelModel):
    ingredients: List[Ingredient]
    success: bool = True


class HouseSpecialResponse(CamelModel):
    house_special: HouseSpecial
    success: bool = True
    message: str


class GetHouseSpecialsResponse(CamelModel):
    house_specials: List[HouseSpecial]
    success: bool = True


class DrinkResponse(CamelModel):
    drink: AvailableDrink
    success: bool = True
    message: str


class GetAvailableDrinksResponse(CamelModel):
    drinks: List[AvailableDrink]
    success: bool = True
