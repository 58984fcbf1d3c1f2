"""
In-Memory Order Repository

Process-wide list of orders guarded by an asyncio.Lock.
Used when STORAGE_BACKEND=memory and by the test-suite.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Optional

from comanda.entities import Order, OrderStatus
from comanda.services.ledger.base import BaseOrderRepository

logger = logging.getLogger(__name__)


def _copy(order: Order) -> Order:
    return replace(
        order,
        items=[replace(item, details=list(item.details)) for item in order.items],
    )


class InMemoryOrderRepository(BaseOrderRepository):
    """List-backed order storage."""

    def __init__(self):
        self._orders: list[Order] = []
        self._lock = asyncio.Lock()

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "memory"

    def _find(self, order_id: str) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    async def list(self) -> list[Order]:
        async with self._lock:
            orders = [_copy(order) for order in self._orders]
        # sorted() is stable, so equal timestamps keep insertion order
        return sorted(orders, key=lambda order: order.created_at)

    async def get(self, order_id: str) -> Optional[Order]:
        async with self._lock:
            order = self._find(order_id)
            return _copy(order) if order else None

    async def add(self, order: Order) -> Order:
        async with self._lock:
            self._orders.append(_copy(order))
        logger.debug(f"Memory: stored order {order.id}")
        return order

    async def set_status(self, order_id: str, status: OrderStatus) -> bool:
        async with self._lock:
            order = self._find(order_id)
            if order is None:
                return False
            order.status = status
            return True

    async def delete(self, order_id: str) -> bool:
        async with self._lock:
            order = self._find(order_id)
            if order is None:
                return False
            self._orders.remove(order)
            return True
