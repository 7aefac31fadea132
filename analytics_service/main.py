from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analytics_service.api.routes_analytics import router as analytics_router
from analytics_service.core.config import get_settings
from analytics_service.core.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title="Analytics Service", description="Sales reporting for the e-commerce admin dashboard")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    logger.info(
        "analytics service ready: orders=%s products=%s users=%s",
        settings.order_service_url,
        settings.product_service_url,
        settings.user_service_url,
    )


app.include_router(analytics_router)
