"""
SQL Menu Repository

Stores the menu in the menu_items table through SQLAlchemy async sessions.
Each call opens its own session and commits one transaction.

Used when STORAGE_BACKEND=database.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from comanda.entities import MenuItem, MenuItemUpdate
from comanda.models import MenuItemRecord
from comanda.services.catalog.base import BaseMenuRepository

logger = logging.getLogger(__name__)


class SqlMenuRepository(BaseMenuRepository):
    """
    Relational menu storage.

    Attributes:
        session_maker: Factory for AsyncSession objects
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "sql"

    async def list(self, include_inactive: bool = False) -> list[MenuItem]:
        query = select(MenuItemRecord)
        if not include_inactive:
            query = query.where(MenuItemRecord.active.is_(True))

        async with self.session_maker() as session:
            result = await session.execute(query)
            items = [record.to_entity() for record in result.scalars().all()]
        # Code-point order in Python, whatever the database collation
        return sorted(items, key=lambda item: item.name)

    async def get(self, item_id: str) -> Optional[MenuItem]:
        async with self.session_maker() as session:
            record = await session.get(MenuItemRecord, item_id)
            return record.to_entity() if record else None

    async def add(self, item: MenuItem) -> MenuItem:
        async with self.session_maker() as session:
            session.add(MenuItemRecord.from_entity(item))
            await session.commit()
        logger.debug(f"SQL: stored menu item {item.id}")
        return item

    async def update(self, item_id: str, changes: MenuItemUpdate) -> Optional[MenuItem]:
        async with self.session_maker() as session:
            async with session.begin():
                record = await session.get(MenuItemRecord, item_id)
                if record is None:
                    return None
                updated = changes.apply(record.to_entity())
                record.fill(updated)
            return updated

    async def delete(self, item_id: str) -> bool:
        async with self.session_maker() as session:
            result = await session.execute(
                delete(MenuItemRecord).where(MenuItemRecord.id == item_id)
            )
            await session.commit()
            return result.rowcount > 0

    async def count(self) -> int:
        async with self.session_maker() as session:
            result = await session.execute(select(func.count(MenuItemRecord.id)))
            return result.scalar() or 0
