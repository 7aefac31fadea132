from __future__ import annotations

import asyncio
import logging
from typing import Any

from analytics_service.clients.upstream import (
    OrderSource,
    StatsSource,
    build_order_client,
    build_product_client,
    build_user_client,
)
from analytics_service.core.config import Settings, get_settings
from analytics_service.domain.fetcher import fetch_all_orders
from analytics_service.domain.reports import generate_sales_report
from analytics_service.domain.schemas import DashboardStats, SalesReport

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(
        self,
        orders: OrderSource,
        order_stats: StatsSource,
        product_stats: StatsSource,
        user_stats: StatsSource,
        *,
        page_size: int = 100,
        top_limit: int = 5,
    ):
        self.orders = orders
        self.order_stats = order_stats
        self.product_stats = product_stats
        self.user_stats = user_stats
        self.page_size = page_size
        self.top_limit = top_limit

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AnalyticsService":
        cfg = settings or get_settings()
        order_client = build_order_client(cfg)
        return cls(
            orders=order_client,
            order_stats=order_client,
            product_stats=build_product_client(cfg),
            user_stats=build_user_client(cfg),
            page_size=cfg.order_page_size,
            top_limit=cfg.top_products_limit,
        )

    async def generate_sales_report(self) -> SalesReport:
        logger.info("generating sales report")
        orders = await fetch_all_orders(self.orders, page_size=self.page_size)
        report = generate_sales_report(orders, top_limit=self.top_limit)
        logger.info("generated sales report with total revenue: %s", report.total_revenue)
        return report

    async def dashboard_stats(self) -> DashboardStats:
        report = await self.generate_sales_report()
        return report.to_dashboard_stats()

    async def platform_statistics(self) -> dict[str, dict[str, Any]]:
        """Upstream statistics maps keyed by service; a failing upstream yields ``{}``."""
        sources = {
            "orders": self.order_stats,
            "products": self.product_stats,
            "users": self.user_stats,
        }
        results = await asyncio.gather(
            *(source.fetch_statistics() for source in sources.values()),
            return_exceptions=True,
        )

        merged: dict[str, dict[str, Any]] = {}
        for key, result in zip(sources, results):
            if isinstance(result, Exception):
                logger.warning("statistics unavailable for %s: %s", key, result)
                merged[key] = {}
            elif isinstance(result, BaseException):
                raise result
            else:
                merged[key] = result
        return merged


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService.from_settings()
