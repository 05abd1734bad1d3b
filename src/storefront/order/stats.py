"""Headline numbers for the provider dashboard."""

from dataclasses import dataclass

from storefront.order.order import OrderStatus
from storefront.shared.money import round_currency

RECENT_ORDERS_LIMIT = 5


@dataclass(frozen=True)
class DashboardStats:
    total_orders: int
    total_revenue: float
    pending_orders: int
    recent_orders: tuple


def dashboard_stats(orders, recent_limit=RECENT_ORDERS_LIMIT) -> DashboardStats:
    """Summarise ``orders``, given in store order (most recent first)."""
    orders = list(orders)
    return DashboardStats(
        total_orders=len(orders),
        total_revenue=round_currency(sum(order.total_amount for order in orders)),
        pending_orders=sum(1 for order in orders if order.status == OrderStatus.PENDING.value),
        recent_orders=tuple(orders[:recent_limit]),
    )
