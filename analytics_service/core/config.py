from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ORDER_SERVICE_URL = "http://localhost:8083"
DEFAULT_PRODUCT_SERVICE_URL = "http://localhost:8082"
DEFAULT_USER_SERVICE_URL = "http://localhost:8081"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ANALYTICS_", extra="ignore")

    app_name: str = "analytics-service"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 8085
    log_level: str = "INFO"

    order_service_url: str = DEFAULT_ORDER_SERVICE_URL
    product_service_url: str = DEFAULT_PRODUCT_SERVICE_URL
    user_service_url: str = DEFAULT_USER_SERVICE_URL
    upstream_api_token: str | None = Field(
        default=None,
        description="Bearer token forwarded to the admin endpoints of upstream services",
    )

    upstream_timeout_seconds: float = 30.0
    report_timeout_seconds: float = 60.0
    dashboard_timeout_seconds: float = 30.0

    order_page_size: int = Field(default=100, ge=1, le=1000)
    top_products_limit: int = Field(default=5, ge=1)

    cors_origins: list[str] = ["http://localhost:4200"]

    def model_post_init(self, __context) -> None:
        if self.env.lower() == "dev":
            return

        local_defaults: list[str] = []
        if self.order_service_url == DEFAULT_ORDER_SERVICE_URL:
            local_defaults.append("ANALYTICS_ORDER_SERVICE_URL")
        if self.product_service_url == DEFAULT_PRODUCT_SERVICE_URL:
            local_defaults.append("ANALYTICS_PRODUCT_SERVICE_URL")
        if self.user_service_url == DEFAULT_USER_SERVICE_URL:
            local_defaults.append("ANALYTICS_USER_SERVICE_URL")

        if local_defaults:
            raise ValueError(
                "localhost upstream defaults are not allowed outside dev mode; set env vars: "
                + ", ".join(sorted(local_defaults))
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
