from __future__ import annotations

import argparse
import asyncio
import json

from analytics_service.core.config import get_settings
from analytics_service.core.logging import configure_logging
from analytics_service.services.analytics import AnalyticsService


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="E-commerce analytics service")
    parser.add_argument("--log-level", default=None, help="Override ANALYTICS_LOG_LEVEL")
    top = parser.add_subparsers(dest="command", required=True)

    report = top.add_parser("report", help="Fetch all orders once and print the sales report")
    report.add_argument("--dashboard", action="store_true", help="Print the reduced dashboard stats instead")
    report.add_argument("--page-size", type=int, default=settings.order_page_size)

    serve = top.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)
    serve.add_argument("--reload", action="store_true")

    return parser


def _run_report(args: argparse.Namespace) -> int:
    service = AnalyticsService.from_settings()
    service.page_size = max(1, int(args.page_size))

    if args.dashboard:
        result = asyncio.run(service.dashboard_stats())
    else:
        result = asyncio.run(service.generate_sales_report())
    print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    return 0


def _run_server(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("analytics_service.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.command == "report":
        return _run_report(args)
    if args.command == "serve":
        return _run_server(args)

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
