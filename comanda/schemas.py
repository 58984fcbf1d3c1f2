"""
Pydantic Schemas for Request/Response Validation

The wire format is camelCase (createdAt, isMarmitex); snake_case is
accepted on input too. Required-field checks live in the services so
that a missing field answers 400 with the domain message.

Version: 1.0.0
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from comanda.entities import Extra, MenuCategory, MenuItemUpdate, OrderStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# MENU
# =============================================================================

class ExtraSchema(CamelModel):
    """Paid addition offered with a dish."""
    name: str = Field(..., min_length=1, max_length=100, examples=["Batata Frita"])
    price: float = Field(..., allow_inf_nan=False, examples=[12.0])


class MenuItemCreate(CamelModel):
    """Request schema for a new menu item."""
    name: Optional[str] = Field(None, max_length=120, examples=["PF Frango Grelhado"])
    category: Optional[str] = Field(None, examples=["pratos"])
    price: Optional[float] = Field(None, allow_inf_nan=False, examples=[16.0])
    active: Optional[bool] = None
    sides: Optional[List[str]] = Field(None, examples=[["Arroz", "Feijão", "Salada"]])
    extras: Optional[List[ExtraSchema]] = None


class MenuItemUpdateRequest(MenuItemCreate):
    """Partial update; only the fields sent are changed."""
    id: Optional[str] = None

    def to_mask(self) -> MenuItemUpdate:
        return MenuItemUpdate(
            name=self.name,
            category=self.category,
            price=self.price,
            active=self.active,
            sides=self.sides,
            extras=[Extra(e.name, e.price) for e in self.extras] if self.extras is not None else None,
        )


class MenuItemResponse(CamelModel):
    id: str
    name: str
    category: MenuCategory
    price: float
    active: bool
    sides: List[str]
    extras: List[ExtraSchema]


# =============================================================================
# ORDERS
# =============================================================================

class OrderItemCreate(CamelModel):
    """Single line of an order, priced by the ordering screen."""
    name: Optional[str] = Field(None, max_length=120, examples=["PF Calabresa"])
    price: Optional[float] = Field(None, allow_inf_nan=False, examples=[19.0])
    details: List[str] = Field(default_factory=list, examples=[["S/ Farofa", "+ Ovo Frito"]])
    observation: Optional[str] = Field(None, max_length=300)
    is_marmitex: bool = False
    quantity: int = 1


class OrderCreate(CamelModel):
    """Request schema for placing an order."""
    customer: Optional[str] = Field(None, max_length=100, examples=["Mesa 7"])
    items: Optional[List[OrderItemCreate]] = None


class StatusUpdate(CamelModel):
    status: Optional[str] = Field(None, examples=["preparing"])


class OrderItemResponse(CamelModel):
    id: str
    name: str
    price: float
    details: List[str]
    observation: Optional[str]
    is_marmitex: bool
    quantity: int


class OrderResponse(CamelModel):
    id: str
    customer: str
    items: List[OrderItemResponse]
    status: OrderStatus
    created_at: datetime
    total: float


# =============================================================================
# VIEWS
# =============================================================================

class KitchenTicketResponse(CamelModel):
    order: OrderResponse
    next_status: Optional[OrderStatus]
    elapsed: str


class KitchenBoardResponse(CamelModel):
    tickets: List[KitchenTicketResponse]
    pending: int
    preparing: int
    ready: int


class CashierBoardResponse(CamelModel):
    orders: List[OrderResponse]
    paid_today: int
    pending_today: int
    revenue_today: float
    pending_revenue: float


class SplitBillResponse(CamelModel):
    order_total: float
    selected_total: float
    people: int
    per_person: float


class ItemSalesResponse(CamelModel):
    name: str
    count: int
    revenue: float


class DailyReportResponse(CamelModel):
    day: date
    status: Optional[OrderStatus]
    total_orders: int
    paid_count: int
    pending_count: int
    gross_revenue: float
    revenue: float
    pending_revenue: float
    avg_ticket: float
    avg_items: float
    top_items: List[ItemSalesResponse]
    total_items: int
    peak_hour: Optional[int]
    peak_hour_orders: int
    previous_revenue: float
    revenue_change: float


# =============================================================================
# GENERIC
# =============================================================================

class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    storage: str
    redis: str
    timestamp: datetime
