"""
Daily Report

Stateless reducer over the ledger contents. Every call recomputes from
the orders it is given; nothing is cached or persisted.

Usage:
    orders = await ledger.list()
    report = build_daily_report(orders, date.today())
    print(report.revenue, report.avg_ticket, report.peak_hour)
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from comanda.entities import Order, OrderStatus


@dataclass
class ItemSales:
    """Units sold and revenue of one item name."""
    name: str
    count: int = 0
    revenue: float = 0.0


@dataclass
class DailyReport:
    """
    Statistics for one calendar day.

    Attributes:
        day: Calendar day reported
        status: Status filter applied, None for every status
        total_orders: Orders on the day (after the status filter)
        paid_count / pending_count: Paid vs. everything else
        gross_revenue: Total of every order
        revenue: Total of paid orders (received)
        pending_revenue: Total of orders not paid yet
        avg_ticket: revenue / paid_count, 0 without paid orders
        avg_items: Units per paid order, 0 without paid orders
        top_items: Best sellers by units, highest first
        total_items: Units sold over every order
        peak_hour: Hour of day with most orders, None without orders
        peak_hour_orders: Orders placed in peak_hour
        previous_revenue: Paid revenue of the day before
        revenue_change: Percent change against previous_revenue
    """
    day: date
    status: Optional[OrderStatus] = None
    total_orders: int = 0
    paid_count: int = 0
    pending_count: int = 0
    gross_revenue: float = 0.0
    revenue: float = 0.0
    pending_revenue: float = 0.0
    avg_ticket: float = 0.0
    avg_items: float = 0.0
    top_items: list[ItemSales] = field(default_factory=list)
    total_items: int = 0
    peak_hour: Optional[int] = None
    peak_hour_orders: int = 0
    previous_revenue: float = 0.0
    revenue_change: float = 0.0


def orders_on(orders: Iterable[Order], day: date, status: Optional[OrderStatus] = None) -> list[Order]:
    """Orders created on the calendar day, optionally with the given status."""
    return [
        order for order in orders
        if order.created_at.date() == day and (status is None or order.status == status)
    ]


def paid_revenue(orders: Iterable[Order]) -> float:
    return round(sum(order.total for order in orders if order.is_paid), 2)


def item_sales(orders: Iterable[Order]) -> list[ItemSales]:
    """Units and revenue per item name, most sold first."""
    stats: dict[str, ItemSales] = {}
    for order in orders:
        for item in order.items:
            entry = stats.setdefault(item.name, ItemSales(item.name))
            entry.count += item.quantity
            entry.revenue += item.price * item.quantity
    for entry in stats.values():
        entry.revenue = round(entry.revenue, 2)
    # Stable sort keeps first-seen order among equal counts
    return sorted(stats.values(), key=lambda entry: entry.count, reverse=True)


def peak_hour(orders: Iterable[Order]) -> tuple[Optional[int], int]:
    """Hour of day with most orders and how many; earliest hour wins ties."""
    hours = Counter(order.created_at.hour for order in orders)
    if not hours:
        return None, 0
    hour, count = min(hours.items(), key=lambda pair: (-pair[1], pair[0]))
    return hour, count


def percent_change(current: float, previous: float) -> float:
    if previous <= 0:
        return 0.0
    return round((current - previous) / previous * 100, 2)


def build_daily_report(
    orders: Iterable[Order],
    day: date,
    status: Optional[OrderStatus] = None,
    top_n: int = 10,
) -> DailyReport:
    """
    Compute the statistics of one day from the full order list.

    Args:
        orders: Every order in the ledger
        day: Calendar day matched against created_at
        status: Only count orders with this status
        top_n: Length of the best sellers list

    Returns:
        DailyReport: Fresh statistics
    """
    orders = list(orders)
    selected = orders_on(orders, day, status)
    paid = [order for order in selected if order.is_paid]
    pending = [order for order in selected if not order.is_paid]

    revenue = paid_revenue(paid)
    paid_count = len(paid)
    sales = item_sales(selected)
    hour, hour_orders = peak_hour(selected)
    previous = paid_revenue(orders_on(orders, day - timedelta(days=1)))

    return DailyReport(
        day=day,
        status=status,
        total_orders=len(selected),
        paid_count=paid_count,
        pending_count=len(pending),
        gross_revenue=round(sum(order.total for order in selected), 2),
        revenue=revenue,
        pending_revenue=round(sum(order.total for order in pending), 2),
        avg_ticket=round(revenue / paid_count, 2) if paid_count else 0.0,
        avg_items=round(sum(order.item_count for order in paid) / paid_count, 2) if paid_count else 0.0,
        top_items=sales[:top_n],
        total_items=sum(entry.count for entry in sales),
        peak_hour=hour,
        peak_hour_orders=hour_orders,
        previous_revenue=previous,
        revenue_change=percent_change(revenue, previous),
    )
