"""
Menu Catalog Service

Validation and logging on top of a menu repository.

Operations:
    - list: active items, or every item for the admin screen
    - create / duplicate: new items with a fresh id
    - update: field-mask merge, silent when the id is unknown
    - delete: unconditional, silent when the id is unknown
    - set_active / toggle_active: hide an item without deleting it
"""

import logging
import math
from dataclasses import replace
from typing import Any, Iterable, Optional

from comanda.core.exceptions import NotFoundError, ValidationError
from comanda.entities import Extra, MenuCategory, MenuItem, MenuItemUpdate
from comanda.services.catalog.base import BaseMenuRepository

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (cópia)"


def parse_category(value: Any) -> MenuCategory:
    """Convert to MenuCategory or raise ValidationError."""
    if isinstance(value, MenuCategory):
        return value
    try:
        return MenuCategory(str(value).strip().lower())
    except ValueError:
        valid = [c.value for c in MenuCategory]
        raise ValidationError(f"Invalid category. Must be one of: {valid}", field="category")


def parse_price(value: Any, field: str = "price") -> float:
    """Convert to a non-negative price rounded to cents."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}", field=field)
    if not math.isfinite(price):
        raise ValidationError(f"Invalid {field}", field=field)
    if price < 0:
        raise ValidationError(f"{field} must be >= 0", field=field)
    return round(price, 2)


def parse_extras(values: Iterable[Any]) -> list[Extra]:
    """Accept Extra objects or {name, price} mappings."""
    extras = []
    for value in values:
        if isinstance(value, Extra):
            name, price = value.name, value.price
        else:
            name, price = value.get("name"), value.get("price")
        if not name:
            raise ValidationError("Extra name required", field="extras")
        extras.append(Extra(name=name, price=parse_price(price, field="extras")))
    return extras


class MenuCatalog:
    """
    The orderable items of the restaurant.

    Example:
        >>> catalog = MenuCatalog(InMemoryMenuRepository())
        >>> item = await catalog.create(name="PF Bisteca", category="pratos", price=16)
        >>> await catalog.update(item.id, MenuItemUpdate(price=18))
    """

    def __init__(self, repository: BaseMenuRepository):
        self.repository = repository

    async def list(self, include_inactive: bool = False) -> list[MenuItem]:
        """Items sorted by name. Inactive items only on request."""
        return await self.repository.list(include_inactive=include_inactive)

    async def get(self, item_id: str) -> MenuItem:
        item = await self.repository.get(item_id)
        if item is None:
            raise NotFoundError("Menu item", item_id)
        return item

    async def create(
        self,
        name: Optional[str] = None,
        category: Any = None,
        price: Any = None,
        active: Optional[bool] = None,
        sides: Optional[Iterable[str]] = None,
        extras: Optional[Iterable[Any]] = None,
    ) -> MenuItem:
        """
        Add a new item to the menu.

        Args:
            name: Display name (required)
            category: One of pratos, porcoes, bebidas, sobremesas (required)
            price: Base price, >= 0 (required)
            active: Defaults to True unless explicitly False
            sides: Accompaniments a customer may remove
            extras: Paid additions as {name, price}

        Raises:
            ValidationError: Missing name, category or price
        """
        if not name or not str(name).strip() or not category or price is None:
            raise ValidationError("Missing fields: name, category and price are required")

        item = MenuItem(
            name=str(name).strip(),
            category=parse_category(category),
            price=parse_price(price),
            active=active is not False,
            sides=list(sides or []),
            extras=parse_extras(extras or []),
        )
        await self.repository.add(item)
        logger.info(f"Menu item created: {item.name} ({item.category.value}) - {item.price:.2f}")
        return item

    async def update(self, item_id: str, changes: MenuItemUpdate) -> None:
        """
        Merge the provided fields into the item.

        An unknown id is a no-op.
        """
        if changes.name is not None and not changes.name.strip():
            raise ValidationError("Name cannot be empty", field="name")
        normalized = {}
        if changes.category is not None:
            normalized["category"] = parse_category(changes.category)
        if changes.price is not None:
            normalized["price"] = parse_price(changes.price)
        if changes.extras is not None:
            normalized["extras"] = parse_extras(changes.extras)
        changes = replace(changes, **normalized)

        updated = await self.repository.update(item_id, changes)
        if updated is None:
            logger.warning(f"Update ignored, menu item {item_id} not found")
            return
        logger.info(f"Menu item {item_id} updated: {sorted(changes.provided())}")

    async def delete(self, item_id: str) -> None:
        """Remove the item. Orders already placed keep their copies."""
        if not await self.repository.delete(item_id):
            logger.warning(f"Delete ignored, menu item {item_id} not found")
            return
        logger.info(f"Menu item {item_id} deleted")

    async def duplicate(self, item: MenuItem) -> MenuItem:
        """Create a copy of item with " (cópia)" appended to the name."""
        return await self.create(
            name=f"{item.name}{COPY_SUFFIX}",
            category=item.category,
            price=item.price,
            active=item.active,
            sides=item.sides,
            extras=item.extras,
        )

    async def set_active(self, item_id: str, active: bool) -> None:
        await self.update(item_id, MenuItemUpdate(active=active))

    async def toggle_active(self, item_id: str) -> Optional[MenuItem]:
        """Flip the active flag. Returns the updated item, None when unknown."""
        item = await self.repository.get(item_id)
        if item is None:
            logger.warning(f"Toggle ignored, menu item {item_id} not found")
            return None
        updated = await self.repository.update(item_id, MenuItemUpdate(active=not item.active))
        if updated is None:
            return None
        logger.info(f"Menu item {item_id} active={updated.active}")
        return updated
