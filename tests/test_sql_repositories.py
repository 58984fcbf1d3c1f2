import unittest
from datetime import datetime

from comanda.database import init_db, make_engine, make_session_maker
from comanda.entities import Extra, MenuCategory, MenuItem, MenuItemUpdate, Order, OrderItem, OrderStatus
from comanda.services.catalog.sql import SqlMenuRepository
from comanda.services.ledger.sql import SqlOrderRepository


class SqlTestCase(unittest.IsolatedAsyncioTestCase):
    """Fresh in-memory SQLite database for every test."""

    async def asyncSetUp(self):
        self.engine = make_engine("sqlite+aiosqlite:///:memory:")
        await init_db(self.engine)
        self.session_maker = make_session_maker(self.engine)

    async def asyncTearDown(self):
        await self.engine.dispose()


class TestSqlMenuRepository(SqlTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.repo = SqlMenuRepository(self.session_maker)

    async def test_add_and_get_keeps_lists(self):
        item = MenuItem(
            name="PF Frango Grelhado",
            category=MenuCategory.PRATOS,
            price=16.0,
            sides=["Arroz", "Feijão"],
            extras=[Extra("Batata Frita", 12.0)],
        )
        await self.repo.add(item)

        stored = await self.repo.get(item.id)
        self.assertEqual(stored, item)
        self.assertIsNone(await self.repo.get("missing"))

    async def test_list_filters_inactive_and_sorts(self):
        await self.repo.add(MenuItem(name="Suco", category=MenuCategory.BEBIDAS, price=8))
        await self.repo.add(MenuItem(name="Cerveja", category=MenuCategory.BEBIDAS, price=7, active=False))
        await self.repo.add(MenuItem(name="Guaraná", category=MenuCategory.BEBIDAS, price=6))

        self.assertEqual([i.name for i in await self.repo.list()], ["Guaraná", "Suco"])
        self.assertEqual(len(await self.repo.list(include_inactive=True)), 3)
        self.assertEqual(await self.repo.count(), 3)

    async def test_list_uses_code_point_order(self):
        await self.repo.add(MenuItem(name="acai", category=MenuCategory.SOBREMESAS, price=12))
        await self.repo.add(MenuItem(name="Zebra", category=MenuCategory.SOBREMESAS, price=10))
        await self.repo.add(MenuItem(name="Bolo", category=MenuCategory.SOBREMESAS, price=8))

        self.assertEqual([i.name for i in await self.repo.list()], ["Bolo", "Zebra", "acai"])

    async def test_update_and_delete(self):
        item = MenuItem(name="PF", category=MenuCategory.PRATOS, price=16, sides=["Arroz"])
        await self.repo.add(item)

        updated = await self.repo.update(item.id, MenuItemUpdate(price=18, sides=[]))
        self.assertEqual(updated.price, 18)
        self.assertEqual((await self.repo.get(item.id)).sides, [])
        self.assertIsNone(await self.repo.update("missing", MenuItemUpdate(price=1)))

        self.assertTrue(await self.repo.delete(item.id))
        self.assertFalse(await self.repo.delete(item.id))


class TestSqlOrderRepository(SqlTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.repo = SqlOrderRepository(self.session_maker)

    def make_order(self, customer: str, minute: int) -> Order:
        return Order(
            customer=customer,
            items=[
                OrderItem(name="PF Calabresa", price=19.0, details=["Completa", "+ Ovo Frito"]),
                OrderItem(name="Coca-Cola (Lata)", price=6.0, quantity=2, observation="Gelada"),
            ],
            created_at=datetime(2024, 5, 10, 12, minute),
        )

    async def test_add_and_get_keeps_item_order(self):
        order = self.make_order("Mesa 1", 0)
        await self.repo.add(order)

        stored = await self.repo.get(order.id)
        self.assertEqual(stored.customer, "Mesa 1")
        self.assertEqual(stored.status, OrderStatus.PENDING)
        self.assertEqual([i.name for i in stored.items], ["PF Calabresa", "Coca-Cola (Lata)"])
        self.assertEqual(stored.items[0].details, ["Completa", "+ Ovo Frito"])
        self.assertEqual(stored.total, 31.0)

    async def test_list_is_oldest_first(self):
        late = self.make_order("Mesa 2", 30)
        early = self.make_order("Mesa 1", 5)
        await self.repo.add(late)
        await self.repo.add(early)

        self.assertEqual([o.id for o in await self.repo.list()], [early.id, late.id])

    async def test_set_status_and_delete(self):
        order = self.make_order("Mesa 1", 0)
        await self.repo.add(order)

        self.assertTrue(await self.repo.set_status(order.id, OrderStatus.READY))
        self.assertEqual((await self.repo.get(order.id)).status, OrderStatus.READY)
        self.assertFalse(await self.repo.set_status("missing", OrderStatus.READY))

        self.assertTrue(await self.repo.delete(order.id))
        self.assertIsNone(await self.repo.get(order.id))
        self.assertFalse(await self.repo.delete(order.id))


if __name__ == "__main__":
    unittest.main()
