from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from analytics_service.clients.upstream import UpstreamUnavailableError
from analytics_service.core.config import Settings, get_settings
from analytics_service.domain.orders import Order, OrderPage
from analytics_service.services.analytics import AnalyticsService, get_analytics_service


class FakeOrderSource:
    """Serves pre-built pages; pages listed in ``fail_on`` or ``errors`` raise instead."""

    def __init__(
        self,
        pages: list[list[dict]],
        fail_on: set[int] | None = None,
        delay: float = 0.0,
        errors: dict[int, Exception] | None = None,
    ):
        self.pages = pages
        self.fail_on = fail_on or set()
        self.errors = errors or {}
        self.delay = delay
        self.requested: list[tuple[int, int]] = []

    async def fetch_orders_page(self, page: int, size: int) -> OrderPage:
        self.requested.append((page, size))
        if self.delay:
            await asyncio.sleep(self.delay)
        if page in self.errors:
            raise self.errors[page]
        if page in self.fail_on:
            raise UpstreamUnavailableError("order-service", f"page {page} failed")
        if page >= len(self.pages):
            return OrderPage(content=[], page=page, size=size, last=True)
        return OrderPage(
            content=[Order.model_validate(row) for row in self.pages[page]],
            page=page,
            size=size,
            last=page == len(self.pages) - 1,
        )


class FakeStatsSource:
    def __init__(self, payload: dict[str, Any] | None = None, fail: bool = False, error: Exception | None = None):
        self.payload = payload or {}
        self.fail = fail
        self.error = error

    async def fetch_statistics(self) -> dict[str, Any]:
        if self.error is not None:
            raise self.error
        if self.fail:
            raise UpstreamUnavailableError("stats", "connection refused")
        return dict(self.payload)


def build_service(
    orders: FakeOrderSource,
    order_stats: FakeStatsSource | None = None,
    product_stats: FakeStatsSource | None = None,
    user_stats: FakeStatsSource | None = None,
) -> AnalyticsService:
    return AnalyticsService(
        orders=orders,
        order_stats=order_stats or FakeStatsSource(),
        product_stats=product_stats or FakeStatsSource(),
        user_stats=user_stats or FakeStatsSource(),
        page_size=2,
    )


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        env="dev",
        report_timeout_seconds=0.5,
        dashboard_timeout_seconds=0.5,
        upstream_timeout_seconds=0.5,
    )


@pytest.fixture()
def app_with(test_settings):
    """Returns a function that wires a service into the app and yields a TestClient."""
    from analytics_service.main import app

    clients: list[TestClient] = []

    def _wire(service: AnalyticsService) -> TestClient:
        app.dependency_overrides[get_analytics_service] = lambda: service
        app.dependency_overrides[get_settings] = lambda: test_settings
        client = TestClient(app)
        clients.append(client)
        return client

    yield _wire
    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def fake_orders():
    return FakeOrderSource


@pytest.fixture()
def fake_stats():
    return FakeStatsSource


@pytest.fixture()
def make_service():
    return build_service
