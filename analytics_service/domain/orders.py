from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UpstreamModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class OrderLineItem(UpstreamModel):
    id: int | None = None
    product_id: int | None = None
    product_name: str | None = None
    unit_price: Decimal | None = None
    quantity: int | None = None
    total_price: Decimal | None = None


class Order(UpstreamModel):
    id: int | None = None
    order_number: str | None = None
    user_id: int | None = None
    total_amount: Decimal | None = None
    final_amount: Decimal | None = None
    order_status: str | None = None
    created_at: datetime | None = None
    order_items: list[OrderLineItem] | None = None

    @property
    def amount(self) -> Decimal | None:
        """Final amount when present, else the raw total."""
        return self.final_amount if self.final_amount is not None else self.total_amount

    @property
    def is_cancelled(self) -> bool:
        return self.order_status is not None and self.order_status.strip().upper() == "CANCELLED"


class OrderPage(UpstreamModel):
    content: list[Order] | None = None
    page: int = 0
    size: int = 0
    total_elements: int = 0
    total_pages: int = 0
    first: bool = False
    last: bool = False
    number_of_elements: int = 0
