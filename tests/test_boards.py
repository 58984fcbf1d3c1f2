import unittest
from datetime import date, datetime

from comanda.core.exceptions import ValidationError
from comanda.entities import Order, OrderItem, OrderStatus
from comanda.services.boards import cashier_board, elapsed_label, kitchen_board, split_bill


def order(customer: str, status: OrderStatus, minute: int, total: float = 10.0, day: int = 10) -> Order:
    return Order(
        customer=customer,
        items=[OrderItem("PF", total)],
        status=status,
        created_at=datetime(2024, 5, day, 12, minute),
    )


class TestKitchenBoard(unittest.TestCase):

    def test_only_active_orders_oldest_first(self):
        orders = [
            order("Mesa 2", OrderStatus.PREPARING, 20),
            order("Mesa 1", OrderStatus.PENDING, 5),
            order("Mesa 3", OrderStatus.DELIVERED, 1),
            order("Mesa 4", OrderStatus.PAID, 2),
            order("Mesa 5", OrderStatus.READY, 30),
        ]

        board = kitchen_board(orders, datetime(2024, 5, 10, 13, 10))

        self.assertEqual([t.order.customer for t in board.tickets], ["Mesa 1", "Mesa 2", "Mesa 5"])
        self.assertEqual(
            [t.next_status for t in board.tickets],
            [OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED],
        )
        self.assertEqual(board.tickets[0].elapsed, "1h5m")
        self.assertEqual((board.pending, board.preparing, board.ready), (1, 1, 1))

    def test_elapsed_label(self):
        start = datetime(2024, 5, 10, 12, 0)
        self.assertEqual(elapsed_label(start, datetime(2024, 5, 10, 12, 0, 30)), "agora")
        self.assertEqual(elapsed_label(start, datetime(2024, 5, 10, 12, 12)), "12m")
        self.assertEqual(elapsed_label(start, datetime(2024, 5, 10, 14, 0)), "2h0m")


class TestCashierBoard(unittest.TestCase):

    def test_unpaid_first_then_newest(self):
        orders = [
            order("A", OrderStatus.PAID, 50, total=30),
            order("B", OrderStatus.PENDING, 10, total=12),
            order("C", OrderStatus.READY, 40, total=8),
            order("D", OrderStatus.PAID, 5, total=20),
            order("E", OrderStatus.PAID, 5, total=99, day=9),
        ]

        board = cashier_board(orders, date(2024, 5, 10))

        self.assertEqual([o.customer for o in board.orders], ["C", "B", "A", "D", "E"])
        self.assertEqual(board.paid_today, 2)
        self.assertEqual(board.pending_today, 2)
        self.assertEqual(board.revenue_today, 50.0)
        self.assertEqual(board.pending_revenue, 20.0)


class TestSplitBill(unittest.TestCase):

    def setUp(self):
        self.order = Order(
            customer="Mesa 6",
            items=[
                OrderItem("PF Bisteca", 20.0),
                OrderItem("Suco", 8.0, quantity=2),
                OrderItem("Pudim", 7.0),
            ],
        )

    def test_whole_order_between_people(self):
        bill = split_bill(self.order, people=3)

        self.assertEqual(bill.order_total, 43.0)
        self.assertEqual(bill.selected_total, 43.0)
        self.assertEqual(bill.per_person, 14.33)

    def test_selected_items(self):
        ids = [self.order.items[1].id, "unknown"]
        bill = split_bill(self.order, ids, people=2)

        self.assertEqual(bill.selected_total, 16.0)
        self.assertEqual(bill.per_person, 8.0)

    def test_people_must_be_positive(self):
        with self.assertRaises(ValidationError):
            split_bill(self.order, people=0)


if __name__ == "__main__":
    unittest.main()
