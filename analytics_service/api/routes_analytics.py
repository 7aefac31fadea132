from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends

from analytics_service.api.utils import epoch_millis, with_deadline
from analytics_service.core.config import Settings, get_settings
from analytics_service.domain.schemas import SalesReport
from analytics_service.services.analytics import AnalyticsService, get_analytics_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

DASHBOARD_STATS_ERROR = {"error": "Unable to fetch statistics"}


@router.get("/sales-report", response_model=SalesReport)
async def get_sales_report(
    service: AnalyticsService = Depends(get_analytics_service),
    settings: Settings = Depends(get_settings),
):
    logger.info("fetching sales report for dashboard")
    try:
        return await with_deadline(service.generate_sales_report(), settings.report_timeout_seconds)
    except asyncio.TimeoutError:
        logger.error("sales report timed out after %ss, returning empty report", settings.report_timeout_seconds)
    except Exception as exc:
        logger.error("error generating sales report, returning empty report: %s", exc, exc_info=True)
    return SalesReport.empty()


@router.get("/dashboard-stats")
async def get_dashboard_stats(
    service: AnalyticsService = Depends(get_analytics_service),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    logger.info("fetching dashboard statistics")
    try:
        stats = await with_deadline(service.dashboard_stats(), settings.dashboard_timeout_seconds)
    except asyncio.TimeoutError:
        logger.error("dashboard stats timed out after %ss", settings.dashboard_timeout_seconds)
        return dict(DASHBOARD_STATS_ERROR)
    except Exception as exc:
        logger.error("error generating dashboard stats: %s", exc, exc_info=True)
        return dict(DASHBOARD_STATS_ERROR)
    return stats.model_dump(mode="json", by_alias=True)


@router.get("/platform-stats")
async def get_platform_stats(
    service: AnalyticsService = Depends(get_analytics_service),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    try:
        return await with_deadline(service.platform_statistics(), settings.upstream_timeout_seconds)
    except asyncio.TimeoutError:
        logger.error("platform statistics timed out after %ss", settings.upstream_timeout_seconds)
    return {"orders": {}, "products": {}, "users": {}}


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return {"status": "UP", "service": settings.app_name, "timestamp": epoch_millis()}
