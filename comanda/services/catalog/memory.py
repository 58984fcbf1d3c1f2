"""
In-Memory Menu Repository

Keeps the menu in a process-wide dict guarded by an asyncio.Lock.
Contents live as long as the process; nothing survives a restart.

Used when STORAGE_BACKEND=memory and by the test-suite.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Iterable, Optional

from comanda.entities import MenuItem, MenuItemUpdate
from comanda.services.catalog.base import BaseMenuRepository

logger = logging.getLogger(__name__)


def _copy(item: MenuItem) -> MenuItem:
    # Callers never hold a reference into the store
    return replace(item, sides=list(item.sides), extras=[replace(e) for e in item.extras])


class InMemoryMenuRepository(BaseMenuRepository):
    """
    Dict-backed menu storage.

    Example:
        >>> repo = InMemoryMenuRepository()
        >>> await repo.add(MenuItem(name="Suco de Laranja", category=MenuCategory.BEBIDAS, price=9.0))
    """

    def __init__(self, items: Iterable[MenuItem] = ()):
        self._items: dict[str, MenuItem] = {item.id: _copy(item) for item in items}
        self._lock = asyncio.Lock()

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "memory"

    async def list(self, include_inactive: bool = False) -> list[MenuItem]:
        async with self._lock:
            items = [
                _copy(item)
                for item in self._items.values()
                if include_inactive or item.active
            ]
        return sorted(items, key=lambda item: item.name)

    async def get(self, item_id: str) -> Optional[MenuItem]:
        async with self._lock:
            item = self._items.get(item_id)
            return _copy(item) if item else None

    async def add(self, item: MenuItem) -> MenuItem:
        async with self._lock:
            self._items[item.id] = _copy(item)
        logger.debug(f"Memory: stored menu item {item.id}")
        return _copy(item)

    async def update(self, item_id: str, changes: MenuItemUpdate) -> Optional[MenuItem]:
        async with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None
            updated = changes.apply(current)
            self._items[item_id] = updated
            return _copy(updated)

    async def delete(self, item_id: str) -> bool:
        async with self._lock:
            return self._items.pop(item_id, None) is not None

    async def count(self) -> int:
        async with self._lock:
            return len(self._items)
