"""
Domain Entities

Plain dataclasses shared by every storage backend and by the HTTP layer.

    - MenuItem: an orderable dish or drink with optional sides/extras
    - Order / OrderItem: a placed order and its frozen line items
    - MenuItemUpdate: field mask for partial menu edits

Line items are copies taken when the order is created. Editing or deleting
a menu item never touches them.
"""

import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


def new_id() -> str:
    """Opaque unique identifier."""
    return str(uuid.uuid4())


class MenuCategory(str, enum.Enum):
    """Closed set of menu sections."""
    PRATOS = "pratos"
    PORCOES = "porcoes"
    BEBIDAS = "bebidas"
    SOBREMESAS = "sobremesas"


class OrderStatus(str, enum.Enum):
    """
    Order status workflow.

    Kitchen moves pending → preparing → ready → delivered.
    Cashier moves any non-paid order to paid.
    """
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    PAID = "paid"

    def next_kitchen_status(self) -> Optional["OrderStatus"]:
        """Forward step issued by the kitchen, None when the kitchen is done."""
        return _KITCHEN_FLOW.get(self)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Whether target follows the intended workflow."""
        if target == OrderStatus.PAID:
            return self != OrderStatus.PAID
        return self.next_kitchen_status() == target

    @property
    def is_active(self) -> bool:
        """Still on the kitchen board."""
        return self not in (OrderStatus.DELIVERED, OrderStatus.PAID)


_KITCHEN_FLOW = {
    OrderStatus.PENDING: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
}


@dataclass
class Extra:
    """Paid addition to a dish."""
    name: str
    price: float

    def to_dict(self) -> dict:
        return {"name": self.name, "price": self.price}


@dataclass
class MenuItem:
    """Entry of the menu catalog."""
    name: str
    category: MenuCategory
    price: float
    active: bool = True
    sides: list[str] = field(default_factory=list)
    extras: list[Extra] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def is_customizable(self) -> bool:
        """Dishes with sides or extras go through the customization step."""
        return self.category == MenuCategory.PRATOS and bool(self.sides or self.extras)

    def extra_price(self, name: str) -> float:
        """Price of the named extra, 0 when the item has no such extra."""
        for extra in self.extras:
            if extra.name == name:
                return extra.price
        return 0.0


@dataclass
class OrderItem:
    """Line item frozen at order creation. price already includes extras."""
    name: str
    price: float
    details: list[str] = field(default_factory=list)
    observation: Optional[str] = None
    is_marmitex: bool = False
    quantity: int = 1
    id: str = field(default_factory=new_id)

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


@dataclass
class Order:
    """A placed order. Only status changes after creation."""
    customer: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    @property
    def total(self) -> float:
        """Sum of price × quantity over the line items."""
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID


@dataclass
class MenuItemUpdate:
    """
    Field mask for a partial menu item update.

    A field left as None is not applied. sides=[] and extras=[] are real
    values and clear the lists.
    """
    name: Optional[str] = None
    category: Optional[MenuCategory] = None
    price: Optional[float] = None
    active: Optional[bool] = None
    sides: Optional[list[str]] = None
    extras: Optional[list[Extra]] = None

    def provided(self) -> dict:
        """Fields present in the mask."""
        return {
            name: value
            for name, value in (
                ("name", self.name),
                ("category", self.category),
                ("price", self.price),
                ("active", self.active),
                ("sides", self.sides),
                ("extras", self.extras),
            )
            if value is not None
        }

    def is_empty(self) -> bool:
        return not self.provided()

    def apply(self, item: MenuItem) -> MenuItem:
        """Return a copy of item with the provided fields replaced."""
        changes = self.provided()
        if "sides" in changes:
            changes["sides"] = list(changes["sides"])
        if "extras" in changes:
            changes["extras"] = [Extra(e.name, e.price) for e in changes["extras"]]
        return replace(item, **changes)
