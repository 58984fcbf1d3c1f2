import unittest
from datetime import date, datetime

from comanda.entities import Order, OrderItem, OrderStatus
from comanda.services.reporting import build_daily_report, item_sales, peak_hour, percent_change

DAY = date(2024, 5, 10)


def order_at(hour: int, status: OrderStatus, *items: OrderItem, day: int = 10) -> Order:
    return Order(
        customer="Mesa",
        items=list(items),
        status=status,
        created_at=datetime(2024, 5, day, hour, 15),
    )


class TestDailyReport(unittest.TestCase):

    def setUp(self):
        self.orders = [
            order_at(12, OrderStatus.PAID, OrderItem("PF Bisteca", 20.0)),
            order_at(12, OrderStatus.PAID, OrderItem("Suco", 10.0), OrderItem("PF Bisteca", 20.0)),
            order_at(19, OrderStatus.PENDING, OrderItem("Coca", 6.0, quantity=2)),
            order_at(12, OrderStatus.PAID, OrderItem("PF Bisteca", 20.0), day=9),
            order_at(13, OrderStatus.PAID, OrderItem("PF Bisteca", 13.33), day=9),
        ]

    def test_revenue_counts_only_paid_orders(self):
        """
        Cenário: Dois pedidos pagos (20 e 30) e um pendente de 12.
        """
        report = build_daily_report(self.orders, DAY)

        self.assertEqual(report.total_orders, 3)
        self.assertEqual(report.paid_count, 2)
        self.assertEqual(report.pending_count, 1)
        self.assertEqual(report.revenue, 50.0)
        self.assertEqual(report.pending_revenue, 12.0)
        self.assertEqual(report.gross_revenue, 62.0)
        self.assertEqual(report.avg_ticket, 25.0)
        self.assertEqual(report.avg_items, 1.5)

    def test_previous_day_comparison(self):
        report = build_daily_report(self.orders, DAY)

        self.assertEqual(report.previous_revenue, 33.33)
        self.assertEqual(report.revenue_change, 50.02)

    def test_top_items_and_peak_hour(self):
        report = build_daily_report(self.orders, DAY, top_n=2)

        self.assertEqual([(i.name, i.count) for i in report.top_items], [("PF Bisteca", 2), ("Coca", 2)])
        self.assertEqual(report.total_items, 5)
        self.assertEqual(report.peak_hour, 12)
        self.assertEqual(report.peak_hour_orders, 2)

    def test_status_filter(self):
        report = build_daily_report(self.orders, DAY, status=OrderStatus.PENDING)

        self.assertEqual(report.total_orders, 1)
        self.assertEqual(report.revenue, 0.0)
        self.assertEqual(report.avg_ticket, 0.0)
        self.assertEqual(report.previous_revenue, 33.33)

    def test_empty_day(self):
        report = build_daily_report([], DAY)

        self.assertEqual(report.total_orders, 0)
        self.assertEqual(report.avg_ticket, 0.0)
        self.assertIsNone(report.peak_hour)
        self.assertEqual(report.top_items, [])
        self.assertEqual(report.revenue_change, 0.0)


class TestReportHelpers(unittest.TestCase):

    def test_item_sales_counts_units(self):
        sales = item_sales([order_at(10, OrderStatus.PAID, OrderItem("Coca", 6.0, quantity=3))])
        self.assertEqual(sales[0].count, 3)
        self.assertEqual(sales[0].revenue, 18.0)

    def test_peak_hour_tie_goes_to_earliest(self):
        orders = [order_at(20, OrderStatus.PAID), order_at(11, OrderStatus.PAID)]
        self.assertEqual(peak_hour(orders), (11, 1))

    def test_percent_change(self):
        self.assertEqual(percent_change(150, 100), 50.0)
        self.assertEqual(percent_change(50, 100), -50.0)
        self.assertEqual(percent_change(10, 0), 0.0)


if __name__ == "__main__":
    unittest.main()
