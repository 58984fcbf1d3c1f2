"""
SQL Order Repository

Stores orders in the orders / order_items tables.
Line items are loaded eagerly (selectin) with their order.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from comanda.entities import Order, OrderStatus
from comanda.models import OrderRecord
from comanda.services.ledger.base import BaseOrderRepository

logger = logging.getLogger(__name__)


class SqlOrderRepository(BaseOrderRepository):
    """
    Relational order storage.

    Attributes:
        session_maker: Factory for AsyncSession objects
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "sql"

    async def list(self) -> list[Order]:
        query = select(OrderRecord).order_by(OrderRecord.created_at)
        async with self.session_maker() as session:
            result = await session.execute(query)
            return [record.to_entity() for record in result.scalars().all()]

    async def get(self, order_id: str) -> Optional[Order]:
        async with self.session_maker() as session:
            record = await session.get(OrderRecord, order_id)
            return record.to_entity() if record else None

    async def add(self, order: Order) -> Order:
        async with self.session_maker() as session:
            session.add(OrderRecord.from_entity(order))
            await session.commit()
        logger.debug(f"SQL: stored order {order.id} with {len(order.items)} items")
        return order

    async def set_status(self, order_id: str, status: OrderStatus) -> bool:
        async with self.session_maker() as session:
            result = await session.execute(
                update(OrderRecord)
                .where(OrderRecord.id == order_id)
                .values(status=status.value)
            )
            await session.commit()
            return result.rowcount > 0

    async def delete(self, order_id: str) -> bool:
        async with self.session_maker() as session:
            record = await session.get(OrderRecord, order_id)
            if record is None:
                return False
            # ORM delete so the cascade removes the line items
            await session.delete(record)
            await session.commit()
            return True
