from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from analytics_service.core.config import Settings, get_settings
from analytics_service.domain.orders import OrderPage

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    def __init__(self, service: str, detail: str):
        super().__init__(f"{service}: {detail}")
        self.service = service
        self.detail = detail


class UpstreamUnavailableError(UpstreamError):
    """Timeout, connection failure or non-2xx answer from an upstream service."""


class UpstreamPayloadError(UpstreamError):
    """Upstream answered, but the body could not be parsed."""


class OrderSource(Protocol):
    async def fetch_orders_page(self, page: int, size: int) -> OrderPage:
        ...


class StatsSource(Protocol):
    async def fetch_statistics(self) -> dict[str, Any]:
        ...


class UpstreamClient:
    service_name = "upstream"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        api_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = max(1.0, timeout)
        self.api_token = api_token
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _get(self, path: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers=self._headers(), params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailableError(
                self.service_name, f"GET {path} returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(self.service_name, f"GET {path} failed: {exc!r}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamPayloadError(self.service_name, f"GET {path} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise UpstreamPayloadError(
                self.service_name, f"GET {path} returned {type(payload).__name__}, expected an object"
            )
        return payload


class OrderServiceClient(UpstreamClient):
    service_name = "order-service"

    async def fetch_orders_page(self, page: int, size: int) -> OrderPage:
        logger.info("fetching orders from %s: page=%s size=%s", self.service_name, page, size)
        payload = await self._get(
            "/api/admin/orders",
            params={"page": page, "size": size, "sortBy": "createdAt", "sortDirection": "desc"},
        )
        # the paginated list is nested under "orders" in the admin envelope
        nested = payload.get("orders")
        if not isinstance(nested, dict):
            raise UpstreamPayloadError(self.service_name, "response is missing the 'orders' page")
        try:
            return OrderPage.model_validate(nested)
        except ValidationError as exc:
            raise UpstreamPayloadError(
                self.service_name, f"malformed orders page {page}: {exc.error_count()} validation errors"
            ) from exc

    async def fetch_statistics(self) -> dict[str, Any]:
        logger.info("fetching order statistics from %s", self.service_name)
        return await self._get("/api/admin/orders/statistics")


class ProductServiceClient(UpstreamClient):
    service_name = "product-service"

    async def fetch_statistics(self) -> dict[str, Any]:
        logger.info("fetching product statistics from %s", self.service_name)
        return await self._get("/api/admin/products/stats")


class UserServiceClient(UpstreamClient):
    service_name = "user-service"

    async def fetch_statistics(self) -> dict[str, Any]:
        logger.info("fetching user statistics from %s", self.service_name)
        return await self._get("/api/admin/users/stats")


def _client_kwargs(settings: Settings) -> dict[str, Any]:
    return {"timeout": settings.upstream_timeout_seconds, "api_token": settings.upstream_api_token}


def build_order_client(settings: Settings | None = None) -> OrderServiceClient:
    cfg = settings or get_settings()
    return OrderServiceClient(cfg.order_service_url, **_client_kwargs(cfg))


def build_product_client(settings: Settings | None = None) -> ProductServiceClient:
    cfg = settings or get_settings()
    return ProductServiceClient(cfg.product_service_url, **_client_kwargs(cfg))


def build_user_client(settings: Settings | None = None) -> UserServiceClient:
    cfg = settings or get_settings()
    return UserServiceClient(cfg.user_service_url, **_client_kwargs(cfg))
