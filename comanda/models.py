"""
SQLAlchemy Database Models

Relational layout of the menu catalog and the order ledger:
- menu_items: sides/extras stored as JSON text
- orders: one row per order, status as plain text
- order_items: frozen line items, details stored as JSON text

Version: 1.0.0
"""

import json

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from comanda.database import Base
from comanda.entities import Extra, MenuCategory, MenuItem, Order, OrderItem, OrderStatus


class MenuItemRecord(Base):
    """
    Menu table - one row per orderable item.
    """
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True)
    name = Column(String(120), nullable=False, index=True)
    category = Column(String(20), nullable=False, index=True)
    price = Column(Float, nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    # =========================================================================
    # CUSTOMIZATION (JSON encoded lists)
    # =========================================================================
    sides = Column(Text, nullable=False, default="[]")
    extras = Column(Text, nullable=False, default="[]")

    @classmethod
    def from_entity(cls, item: MenuItem) -> "MenuItemRecord":
        record = cls(id=item.id)
        record.fill(item)
        return record

    def fill(self, item: MenuItem) -> None:
        """Copy every editable field from the entity."""
        self.name = item.name
        self.category = item.category.value
        self.price = item.price
        self.active = item.active
        self.sides = json.dumps(item.sides, ensure_ascii=False)
        self.extras = json.dumps([e.to_dict() for e in item.extras], ensure_ascii=False)

    def to_entity(self) -> MenuItem:
        return MenuItem(
            id=self.id,
            name=self.name,
            category=MenuCategory(self.category),
            price=self.price,
            active=self.active,
            sides=json.loads(self.sides or "[]"),
            extras=[Extra(e["name"], e["price"]) for e in json.loads(self.extras or "[]")],
        )

    def __repr__(self):
        return f"<MenuItem {self.name} - {self.category} - {self.price:.2f}>"


class OrderRecord(Base):
    """
    Orders table - the ledger.

    Only status is ever updated after insert.
    """
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    customer = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    created_at = Column(DateTime, nullable=False, index=True)

    items = relationship(
        "OrderItemRecord",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemRecord.position",
        lazy="selectin",
    )

    @classmethod
    def from_entity(cls, order: Order) -> "OrderRecord":
        return cls(
            id=order.id,
            customer=order.customer,
            status=order.status.value,
            created_at=order.created_at,
            items=[
                OrderItemRecord.from_entity(item, position)
                for position, item in enumerate(order.items)
            ],
        )

    def to_entity(self) -> Order:
        return Order(
            id=self.id,
            customer=self.customer,
            status=OrderStatus(self.status),
            created_at=self.created_at,
            items=[item.to_entity() for item in self.items],
        )

    def __repr__(self):
        return f"<Order {self.id} - {self.customer} - {self.status}>"


class OrderItemRecord(Base):
    """
    Line items of an order, frozen copies of the menu at order time.
    """
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(120), nullable=False)
    price = Column(Float, nullable=False)
    details = Column(Text, nullable=False, default="[]")
    observation = Column(Text, nullable=True)
    is_marmitex = Column(Boolean, nullable=False, default=False)
    quantity = Column(Integer, nullable=False, default=1)

    order = relationship("OrderRecord", back_populates="items")

    @classmethod
    def from_entity(cls, item: OrderItem, position: int) -> "OrderItemRecord":
        return cls(
            id=item.id,
            position=position,
            name=item.name,
            price=item.price,
            details=json.dumps(item.details, ensure_ascii=False),
            observation=item.observation,
            is_marmitex=item.is_marmitex,
            quantity=item.quantity,
        )

    def to_entity(self) -> OrderItem:
        return OrderItem(
            id=self.id,
            name=self.name,
            price=self.price,
            details=json.loads(self.details or "[]"),
            observation=self.observation,
            is_marmitex=self.is_marmitex,
            quantity=self.quantity,
        )

    def __repr__(self):
        return f"<OrderItem {self.name} x{self.quantity}>"
