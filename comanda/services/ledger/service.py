"""
Order Ledger Service

Validation and logging on top of an order repository.

Operations:
    - create: materialize the cart lines into frozen order items
    - list: every order, oldest first
    - update_status: any status, any direction (strict mode optional)
    - delete: unconditional

Line prices are taken as given. They were computed by the pricing
resolver when the customer picked the item and are never looked up in
the catalog again.
"""

import logging
import math
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from comanda.core.exceptions import NotFoundError, ValidationError
from comanda.entities import Order, OrderItem, OrderStatus
from comanda.services.ledger.base import BaseOrderRepository
from comanda.services.pricing import CartLine

logger = logging.getLogger(__name__)


def parse_status(value: Any) -> OrderStatus:
    """Convert to OrderStatus or raise ValidationError."""
    if isinstance(value, OrderStatus):
        return value
    if value is None or not str(value).strip():
        raise ValidationError("Status required", field="status")
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        valid = [s.value for s in OrderStatus]
        raise ValidationError(f"Invalid status. Options: {valid}", field="status")


def _field(line: Any, *names: str, default: Any = None) -> Any:
    # Lines arrive as CartLine objects or as decoded JSON (camelCase or snake_case)
    for name in names:
        if isinstance(line, Mapping):
            if line.get(name) is not None:
                return line[name]
        elif getattr(line, name, None) is not None:
            return getattr(line, name)
    return default


def materialize_item(line: Any, position: int) -> OrderItem:
    """
    Freeze one incoming line into an OrderItem with a fresh id.

    Raises:
        ValidationError: Missing name or price, or quantity below 1
    """
    name = _field(line, "name")
    price = _field(line, "price")
    if not name or price is None:
        raise ValidationError(f"Item {position + 1}: name and price required", field="items")

    try:
        price = round(float(price), 2)
        quantity = int(_field(line, "quantity", default=1))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Item {position + 1}: invalid price or quantity", field="items")
    if not math.isfinite(price):
        raise ValidationError(f"Item {position + 1}: invalid price or quantity", field="items")
    if quantity < 1:
        raise ValidationError(f"Item {position + 1}: quantity must be at least 1", field="items")

    observation = str(_field(line, "observation", default="")).strip()
    return OrderItem(
        name=str(name),
        price=price,
        details=[str(d) for d in _field(line, "details", default=[])],
        observation=observation or None,
        is_marmitex=bool(_field(line, "is_marmitex", "isMarmitex", default=False)),
        quantity=quantity,
    )


class OrderLedger:
    """
    The placed orders and their status.

    Attributes:
        repository: Order storage backend
        strict_transitions: Reject status changes outside the workflow
        clock: Source of created_at timestamps
    """

    def __init__(
        self,
        repository: BaseOrderRepository,
        strict_transitions: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.strict_transitions = strict_transitions
        self.clock = clock

    async def create(
        self,
        customer: Optional[str],
        items: Optional[Sequence[Union[CartLine, Mapping[str, Any]]]],
    ) -> Order:
        """
        Place a new order with status pending.

        Args:
            customer: Table number or name (required)
            items: Non-empty list of cart lines

        Raises:
            ValidationError: Missing customer or empty/invalid items.
                Nothing is stored in that case.
        """
        if customer is None or not str(customer).strip():
            raise ValidationError("Customer required", field="customer")
        if not isinstance(items, (list, tuple)) or not items:
            raise ValidationError("Items must be a non-empty list", field="items")

        order_items = [materialize_item(line, position) for position, line in enumerate(items)]
        order = Order(
            customer=str(customer).strip(),
            items=order_items,
            status=OrderStatus.PENDING,
            created_at=self.clock(),
        )
        await self.repository.add(order)

        logger.info(
            f"Order {order.id} created for {order.customer}: "
            f"{order.item_count} items, total {order.total:.2f}"
        )
        return order

    async def list(self) -> list[Order]:
        """Every order, oldest first."""
        return await self.repository.list()

    async def get(self, order_id: str) -> Order:
        order = await self.repository.get(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    async def update_status(self, order_id: str, status: Any) -> None:
        """
        Overwrite the status of an order.

        Any transition is accepted, backwards included, unless the ledger
        runs with strict_transitions. An unknown id is a no-op.

        Unlike the transitions, the value itself is checked: a string that
        is not one of the OrderStatus values is refused instead of being
        stored as is.

        Raises:
            ValidationError: Status missing or not a known status
        """
        new_status = parse_status(status)

        if self.strict_transitions:
            current = await self.repository.get(order_id)
            if current is not None and not current.status.can_transition_to(new_status):
                raise ValidationError(
                    f"Cannot move order from {current.status.value} to {new_status.value}",
                    field="status",
                )

        if not await self.repository.set_status(order_id, new_status):
            logger.warning(f"Status update ignored, order {order_id} not found")
            return
        logger.info(f"Order {order_id} → {new_status.value}")

    async def delete(self, order_id: str) -> None:
        if not await self.repository.delete(order_id):
            logger.warning(f"Delete ignored, order {order_id} not found")
            return
        logger.info(f"Order {order_id} deleted")
