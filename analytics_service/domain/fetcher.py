from __future__ import annotations

import logging

from analytics_service.clients.upstream import OrderSource
from analytics_service.domain.orders import Order

logger = logging.getLogger(__name__)


async def fetch_all_orders(source: OrderSource, page_size: int = 100) -> list[Order]:
    """Collect every order from a paginated source, in arrival order.

    Pages are requested one at a time from page 0 until a page is flagged
    ``last`` or comes back without content. A failing page ends the walk:
    the orders gathered so far are returned and nothing is raised.
    """
    orders: list[Order] = []
    page = 0
    while True:
        try:
            result = await source.fetch_orders_page(page, page_size)
        except Exception as exc:
            logger.warning(
                "error fetching orders page %s, keeping %s orders fetched so far: %s",
                page,
                len(orders),
                exc,
            )
            break

        if result.content:
            orders.extend(result.content)
        if result.last or not result.content:
            break
        page += 1

    return orders
