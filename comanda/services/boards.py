"""
Kitchen and Cashier Boards

Read-only views the kitchen tablet and the cashier screen poll every few
seconds, plus the split-bill calculation used at the counter.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from comanda.core.exceptions import ValidationError
from comanda.entities import Order, OrderStatus


def elapsed_label(since: datetime, now: datetime) -> str:
    """Short waiting time: "agora", "12m" or "1h5m"."""
    minutes = int((now - since).total_seconds() // 60)
    if minutes < 1:
        return "agora"
    if minutes < 60:
        return f"{minutes}m"
    return f"{minutes // 60}h{minutes % 60}m"


@dataclass
class KitchenTicket:
    order: Order
    next_status: Optional[OrderStatus]
    elapsed: str


@dataclass
class KitchenBoard:
    tickets: list[KitchenTicket] = field(default_factory=list)
    pending: int = 0
    preparing: int = 0
    ready: int = 0


def kitchen_board(orders: Iterable[Order], now: datetime) -> KitchenBoard:
    """Orders still on the line, oldest first, with their next step."""
    active = sorted(
        (order for order in orders if order.status.is_active),
        key=lambda order: order.created_at,
    )
    board = KitchenBoard(
        tickets=[
            KitchenTicket(
                order=order,
                next_status=order.status.next_kitchen_status(),
                elapsed=elapsed_label(order.created_at, now),
            )
            for order in active
        ]
    )
    for order in active:
        if order.status == OrderStatus.PENDING:
            board.pending += 1
        elif order.status == OrderStatus.PREPARING:
            board.preparing += 1
        elif order.status == OrderStatus.READY:
            board.ready += 1
    return board


@dataclass
class CashierBoard:
    orders: list[Order] = field(default_factory=list)
    paid_today: int = 0
    pending_today: int = 0
    revenue_today: float = 0.0
    pending_revenue: float = 0.0


def cashier_board(orders: Iterable[Order], today: date) -> CashierBoard:
    """Unpaid orders first, newest first within each group; today's totals."""
    orders = list(orders)
    ordered = sorted(orders, key=lambda order: order.created_at, reverse=True)
    ordered.sort(key=lambda order: order.is_paid)

    todays = [order for order in orders if order.created_at.date() == today]
    paid = [order for order in todays if order.is_paid]
    pending = [order for order in todays if not order.is_paid]

    return CashierBoard(
        orders=ordered,
        paid_today=len(paid),
        pending_today=len(pending),
        revenue_today=round(sum(order.total for order in paid), 2),
        pending_revenue=round(sum(order.total for order in pending), 2),
    )


@dataclass
class SplitBill:
    order_total: float
    selected_total: float
    people: int
    per_person: float


def split_bill(order: Order, item_ids: Optional[Iterable[str]] = None, people: int = 1) -> SplitBill:
    """
    Divide the selected lines of an order between people.

    Args:
        order: Order being settled
        item_ids: Line item ids to include, None for every line
        people: How many people share the selection

    Raises:
        ValidationError: people below 1
    """
    if people < 1:
        raise ValidationError("People must be at least 1", field="people")

    if item_ids is None:
        selected = order.items
    else:
        wanted = set(item_ids)
        selected = [item for item in order.items if item.id in wanted]

    selected_total = round(sum(item.price * item.quantity for item in selected), 2)
    return SplitBill(
        order_total=order.total,
        selected_total=selected_total,
        people=people,
        per_person=round(selected_total / people, 2),
    )
