from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from analytics_service.domain.orders import Order
from analytics_service.domain.schemas import OrderStatusData, RevenueData, SalesReport, TopProduct

logger = logging.getLogger(__name__)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
UNKNOWN_PRODUCT = "Unknown Product"
TOP_PRODUCTS_LIMIT = 5

_STATUS_ALIASES = {
    "PENDING": "pending",
    "CONFIRMED": "processing",
    "PROCESSING": "processing",
    "SHIPPED": "shipped",
    "DELIVERED": "delivered",
    "CANCELLED": "cancelled",
}

_CENTS = Decimal("0.01")
_ZERO = Decimal("0")


@dataclass
class _ProductSales:
    name: str | None
    total_sales: Decimal = _ZERO
    units_sold: int = 0


@dataclass
class _MonthlyRevenue:
    revenue: Decimal = _ZERO
    orders: int = 0


def normalize_status(status: str | None) -> str:
    if status is None:
        return "unknown"
    return _STATUS_ALIASES.get(status.strip().upper(), "unknown")


def _top_products(orders: Iterable[Order], limit: int) -> list[TopProduct]:
    sales: dict[int, _ProductSales] = {}
    for order in orders:
        for item in order.order_items or []:
            if item.product_id is None:
                continue
            entry = sales.setdefault(item.product_id, _ProductSales(name=item.product_name))
            if entry.name is None:
                entry.name = item.product_name
            entry.total_sales += item.total_price if item.total_price is not None else _ZERO
            entry.units_sold += item.quantity if item.quantity is not None else 0

    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(sales.items(), key=lambda kv: kv[1].total_sales, reverse=True)
    return [
        TopProduct(
            product_id=str(product_id),
            product_name=entry.name or UNKNOWN_PRODUCT,
            total_sales=entry.total_sales,
            units_sold=entry.units_sold,
        )
        for product_id, entry in ranked[:limit]
    ]


def _revenue_by_month(orders: Iterable[Order]) -> list[RevenueData]:
    buckets: dict[str, _MonthlyRevenue] = {}
    for order in orders:
        if order.created_at is None:
            continue
        bucket = buckets.setdefault(MONTHS[order.created_at.month - 1], _MonthlyRevenue())
        amount = order.amount
        if amount is not None:
            bucket.revenue += amount
        bucket.orders += 1

    return [
        RevenueData(month=month, revenue=buckets[month].revenue, orders=buckets[month].orders)
        for month in MONTHS
        if month in buckets
    ]


def _orders_by_status(orders: list[Order]) -> list[OrderStatusData]:
    counts = Counter(normalize_status(order.order_status) for order in orders)
    total = len(orders)
    rows = [
        OrderStatusData(
            status=status,
            count=count,
            percentage=(count * 100.0 / total) if total > 0 else 0.0,
        )
        for status, count in counts.items()
    ]
    rows.sort(key=lambda row: row.count, reverse=True)
    return rows


def generate_sales_report(orders: Iterable[Order], top_limit: int = TOP_PRODUCTS_LIMIT) -> SalesReport:
    all_orders = list(orders)
    logger.info("calculating sales report from %s orders", len(all_orders))

    valid_orders = [order for order in all_orders if not order.is_cancelled]

    total_revenue = sum((order.amount for order in valid_orders if order.amount is not None), _ZERO)
    total_orders = len(valid_orders)
    average_order_value = (
        (total_revenue / total_orders).quantize(_CENTS, rounding=ROUND_HALF_UP) if total_orders > 0 else _ZERO
    )

    return SalesReport(
        total_revenue=total_revenue,
        total_orders=total_orders,
        average_order_value=average_order_value,
        top_products=_top_products(valid_orders, top_limit),
        revenue_by_month=_revenue_by_month(valid_orders),
        orders_by_status=_orders_by_status(all_orders),
    )
