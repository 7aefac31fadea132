#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json

import requests


def main() -> None:
    parser = argparse.ArgumentParser(description="Query a running analytics service and print its answers")
    parser.add_argument("--base-url", default="http://localhost:8085")
    parser.add_argument("--full", action="store_true", help="Also print the full sales report")
    args = parser.parse_args()

    health = requests.get(f"{args.base_url}/api/analytics/health", timeout=10)
    health.raise_for_status()
    print(json.dumps(health.json(), indent=2, ensure_ascii=False))

    stats = requests.get(f"{args.base_url}/api/analytics/dashboard-stats", timeout=40)
    stats.raise_for_status()
    data = stats.json()
    print(json.dumps(data, indent=2, ensure_ascii=False))
    if "error" in data:
        print("dashboard stats degraded: upstream order service unreachable or slow")

    if args.full:
        report = requests.get(f"{args.base_url}/api/analytics/sales-report", timeout=70)
        report.raise_for_status()
        print(json.dumps(report.json(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
