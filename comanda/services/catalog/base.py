"""
Menu Repository Abstract Base Class

Defines the storage contract behind the menu catalog.
Both InMemoryMenuRepository and SqlMenuRepository implement these methods,
so the catalog behaves the same whichever backend is configured.

Design Pattern: Repository
    - The catalog validates, the repository stores
    - Backends are swapped through STORAGE_BACKEND
    - Tests run against the in-memory backend

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional

from comanda.entities import MenuItem, MenuItemUpdate


class BaseMenuRepository(ABC):
    """
    Abstract base class for menu storage.

    Listing order is name ascending in every implementation.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the storage backend.

        Returns:
            str: Backend name (e.g., "memory", "sql")
        """
        pass

    @abstractmethod
    async def list(self, include_inactive: bool = False) -> list[MenuItem]:
        """
        Return menu items sorted by name.

        Args:
            include_inactive: Also return items with active=False
        """
        pass

    @abstractmethod
    async def get(self, item_id: str) -> Optional[MenuItem]:
        """Return the item or None when the id is unknown."""
        pass

    @abstractmethod
    async def add(self, item: MenuItem) -> MenuItem:
        """Store a new item and return it."""
        pass

    @abstractmethod
    async def update(self, item_id: str, changes: MenuItemUpdate) -> Optional[MenuItem]:
        """
        Apply the provided fields of changes to the stored item.

        Returns:
            MenuItem: The updated item, None when the id is unknown
        """
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> bool:
        """
        Remove the item.

        Returns:
            bool: False when the id is unknown
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of stored items, inactive included."""
        pass

    async def health_check(self) -> bool:
        """
        Verify the backend answers.

        Returns:
            bool: True if the store is reachable
        """
        await self.count()
        return True
