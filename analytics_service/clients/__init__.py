from analytics_service.clients.upstream import (
    OrderServiceClient,
    OrderSource,
    ProductServiceClient,
    StatsSource,
    UpstreamError,
    UpstreamPayloadError,
    UpstreamUnavailableError,
    UserServiceClient,
    build_order_client,
    build_product_client,
    build_user_client,
)

__all__ = [
    "OrderServiceClient",
    "OrderSource",
    "ProductServiceClient",
    "StatsSource",
    "UpstreamError",
    "UpstreamPayloadError",
    "UpstreamUnavailableError",
    "UserServiceClient",
    "build_order_client",
    "build_product_client",
    "build_user_client",
]
