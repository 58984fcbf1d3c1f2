import unittest
from datetime import datetime, timedelta

from comanda.core.exceptions import NotFoundError, ValidationError
from comanda.entities import MenuCategory, MenuItem, OrderStatus
from comanda.services.catalog import InMemoryMenuRepository, MenuCatalog
from comanda.services.ledger import InMemoryOrderRepository, OrderLedger, parse_status
from comanda.services.pricing import Cart


class FakeClock:
    """Returns a fixed time, moved forward by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class TestOrderLedger(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.clock = FakeClock(datetime(2024, 5, 10, 12, 0))
        self.ledger = OrderLedger(InMemoryOrderRepository(), clock=self.clock)

    async def test_create_order_is_pending_with_fresh_ids(self):
        order = await self.ledger.create(
            "Mesa 4",
            [
                {"name": "PF Frango", "price": 28, "details": ["S/ Arroz", "+ Batata Frita"]},
                {"name": "Coca-Cola (Lata)", "price": 6, "quantity": 2},
            ],
        )

        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.created_at, datetime(2024, 5, 10, 12, 0))
        self.assertEqual(order.total, 40.0)
        self.assertEqual(order.item_count, 3)
        self.assertEqual(len({item.id for item in order.items}), 2)
        self.assertEqual(await self.ledger.get(order.id), order)

    async def test_create_accepts_camel_case_and_cart_lines(self):
        cart = Cart()
        cart.add(MenuItem(name="Suco de Laranja", category=MenuCategory.BEBIDAS, price=9.0))

        order = await self.ledger.create("Balcão", cart.lines)
        marmitex = await self.ledger.create(
            "João", [{"name": "PF Bisteca", "price": 16, "isMarmitex": True, "observation": "  "}]
        )

        self.assertEqual(order.items[0].name, "Suco de Laranja")
        self.assertTrue(marmitex.items[0].is_marmitex)
        self.assertIsNone(marmitex.items[0].observation)

    async def test_create_invalid_stores_nothing(self):
        """
        Cenário: Pedido sem cliente ou sem itens não é gravado.
        """
        invalid = [
            (None, [{"name": "Suco", "price": 8}]),
            ("   ", [{"name": "Suco", "price": 8}]),
            ("Mesa 1", []),
            ("Mesa 1", None),
            ("Mesa 1", [{"name": "Suco"}]),
            ("Mesa 1", [{"name": "Suco", "price": 8, "quantity": 0}]),
            ("Mesa 1", [{"name": "Suco", "price": float("nan")}]),
            ("Mesa 1", [{"name": "Suco", "price": 8, "quantity": float("inf")}]),
        ]
        for customer, items in invalid:
            with self.subTest(customer=customer, items=items):
                with self.assertRaises(ValidationError):
                    await self.ledger.create(customer, items)

        self.assertEqual(await self.ledger.list(), [])

    async def test_list_is_oldest_first(self):
        first = await self.ledger.create("Mesa 1", [{"name": "Suco", "price": 8}])
        self.clock.advance(minutes=5)
        second = await self.ledger.create("Mesa 2", [{"name": "Suco", "price": 8}])

        self.assertEqual([o.id for o in await self.ledger.list()], [first.id, second.id])

    async def test_update_status_keeps_everything_else(self):
        order = await self.ledger.create("Mesa 3", [{"name": "PF Calabresa", "price": 16}])

        await self.ledger.update_status(order.id, "preparing")

        updated = await self.ledger.get(order.id)
        self.assertEqual(updated.status, OrderStatus.PREPARING)
        self.assertEqual(updated.items, order.items)
        self.assertEqual(updated.created_at, order.created_at)
        self.assertEqual(updated.customer, "Mesa 3")

    async def test_backward_transition_is_accepted(self):
        order = await self.ledger.create("Mesa 3", [{"name": "PF", "price": 16}])

        await self.ledger.update_status(order.id, OrderStatus.PAID)
        await self.ledger.update_status(order.id, OrderStatus.PENDING)

        self.assertEqual((await self.ledger.get(order.id)).status, OrderStatus.PENDING)

    async def test_strict_mode_rejects_skipped_steps(self):
        ledger = OrderLedger(InMemoryOrderRepository(), strict_transitions=True)
        order = await ledger.create("Mesa 5", [{"name": "PF", "price": 16}])

        with self.assertRaises(ValidationError):
            await ledger.update_status(order.id, "ready")

        await ledger.update_status(order.id, "preparing")
        await ledger.update_status(order.id, "paid")
        with self.assertRaises(ValidationError):
            await ledger.update_status(order.id, "pending")

    async def test_invalid_status_fails(self):
        order = await self.ledger.create("Mesa 3", [{"name": "PF", "price": 16}])

        with self.assertRaises(ValidationError):
            await self.ledger.update_status(order.id, "cooking")
        with self.assertRaises(ValidationError):
            await self.ledger.update_status(order.id, None)

        self.assertEqual((await self.ledger.get(order.id)).status, OrderStatus.PENDING)

    async def test_update_unknown_order_is_noop(self):
        await self.ledger.update_status("missing", "paid")
        self.assertEqual(await self.ledger.list(), [])

    async def test_delete(self):
        order = await self.ledger.create("Mesa 3", [{"name": "PF", "price": 16}])

        await self.ledger.delete(order.id)
        await self.ledger.delete(order.id)

        with self.assertRaises(NotFoundError):
            await self.ledger.get(order.id)

    async def test_menu_changes_do_not_touch_placed_orders(self):
        """
        Cenário: Editar ou apagar o item do cardápio não altera pedidos.
        """
        catalog = MenuCatalog(InMemoryMenuRepository())
        item = await catalog.create(name="PF Bisteca", category="pratos", price=16)
        cart = Cart()
        cart.add(item)
        order = await self.ledger.create("Mesa 8", cart.lines)

        await catalog.delete(item.id)

        stored = await self.ledger.get(order.id)
        self.assertEqual(stored.items[0].name, "PF Bisteca")
        self.assertEqual(stored.items[0].price, 16.0)


class TestParseStatus(unittest.TestCase):

    def test_accepts_any_case(self):
        self.assertEqual(parse_status(" Ready "), OrderStatus.READY)
        self.assertEqual(parse_status(OrderStatus.PAID), OrderStatus.PAID)

    def test_rejects_unknown(self):
        with self.assertRaises(ValidationError):
            parse_status("done")
        with self.assertRaises(ValidationError):
            parse_status("")


if __name__ == "__main__":
    unittest.main()
