from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Amounts stay Decimal in Python and go out as JSON numbers, not strings.
# Doubles keep about 15 significant digits, enough for dashboard totals.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TopProduct(ReportModel):
    product_id: str
    product_name: str
    total_sales: Money
    units_sold: int


class RevenueData(ReportModel):
    month: str
    revenue: Money
    orders: int


class OrderStatusData(ReportModel):
    status: str
    count: int
    percentage: float


class DashboardStats(ReportModel):
    total_revenue: Money
    total_orders: int
    average_order_value: Money
    top_products_count: int


class SalesReport(ReportModel):
    total_revenue: Money = Decimal("0")
    total_orders: int = 0
    average_order_value: Money = Decimal("0")
    top_products: list[TopProduct] = Field(default_factory=list)
    revenue_by_month: list[RevenueData] = Field(default_factory=list)
    orders_by_status: list[OrderStatusData] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "SalesReport":
        return cls()

    def to_dashboard_stats(self) -> DashboardStats:
        return DashboardStats(
            total_revenue=self.total_revenue,
            total_orders=self.total_orders,
            average_order_value=self.average_order_value,
            top_products_count=len(self.top_products),
        )
