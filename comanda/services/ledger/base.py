"""
Order Repository Abstract Base Class

Defines the storage contract behind the order ledger.
Orders are inserted whole; afterwards only their status changes.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional

from comanda.entities import Order, OrderStatus


class BaseOrderRepository(ABC):
    """
    Abstract base class for order storage.

    Listing order is created_at ascending in every implementation.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of the storage backend."""
        pass

    @abstractmethod
    async def list(self) -> list[Order]:
        """Every stored order, oldest first."""
        pass

    @abstractmethod
    async def get(self, order_id: str) -> Optional[Order]:
        """Return the order or None when the id is unknown."""
        pass

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Store a new order with all its line items."""
        pass

    @abstractmethod
    async def set_status(self, order_id: str, status: OrderStatus) -> bool:
        """
        Overwrite the status of an order.

        Returns:
            bool: False when the id is unknown
        """
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> bool:
        """
        Remove the order and its line items.

        Returns:
            bool: False when the id is unknown
        """
        pass

    async def health_check(self) -> bool:
        """
        Verify the backend answers.

        Returns:
            bool: True if the store is reachable
        """
        await self.get("health-check")
        return True
