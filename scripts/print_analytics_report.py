from __future__ import annotations

import argparse
import json
import os
from typing import Any, Dict, Optional


VIEWS = ("revenue", "profit", "dashboard", "summary")


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a booking analytics report as JSON.")
    parser.add_argument("--view", choices=VIEWS, default="summary", help="Report to print.")
    parser.add_argument("--start-date", default=None, help="Inclusive creation date lower bound.")
    parser.add_argument("--end-date", default=None, help="Inclusive creation date upper bound.")
    parser.add_argument("--city", default=None, help="Makkah or Madinah.")
    parser.add_argument("--status", default=None, help="pending, confirmed or cancelled.")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Environment file path (default: .env).",
    )
    return parser.parse_args()


def build_report(
    view: str, params: Dict[str, Optional[str]], service: Optional[Any] = None, strict: bool = False
) -> dict:
    from hotel_analytics.analytics.filters import normalize_filters

    filters = normalize_filters(params, strict=strict)
    if service is None:
        from hotel_analytics.api.dependencies import get_analytics_service

        service = get_analytics_service()
    if view == "revenue":
        report = service.get_revenue_data(filters)
    elif view == "profit":
        report = service.get_profit_data(filters)
    elif view == "dashboard":
        report = service.get_analytics_data(filters)
    else:
        report = service.get_summary(filters)
    return {
        "filters": filters.model_dump(mode="json", by_alias=True),
        "data": report.model_dump(mode="json", by_alias=True),
    }


def main() -> None:
    args = parse_args()
    load_env_file(args.env_file)

    from hotel_analytics.core.logging import configure_logging

    configure_logging(os.environ.get("LOG_LEVEL"))
    params = {
        "startDate": args.start_date,
        "endDate": args.end_date,
        "city": args.city,
        "status": args.status,
    }
    from hotel_analytics.core.config import get_settings

    report = build_report(args.view, params, strict=get_settings().analytics_strict_filters)
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
