"""Read-only distribution report over raw Notion pages."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Iterable

from locator_export.common.constants import RECENT_WINDOW_DAYS
from locator_export.common.models import AnalysisReport, PropertyNames, RecentCustomer
from locator_export.common.time_utils import parse_iso_datetime, utc_now
from locator_export.pipeline.properties import (
    get_place_coordinates,
    get_rollup_date,
    get_status,
    get_title,
)

UNKNOWN_LABEL = "Unknown"


def build_analysis_report(
    pages: Iterable[dict[str, Any]],
    property_names: PropertyNames,
    *,
    now: datetime | None = None,
    window_days: int = RECENT_WINDOW_DAYS,
    customer_status: str = "Customer",
) -> AnalysisReport:
    cutoff = (now or utc_now()) - timedelta(days=window_days)

    statuses: Counter[str] = Counter()
    total = 0
    with_coordinates = 0
    with_orders = 0
    customers_with_coordinates = 0
    recent: list[RecentCustomer] = []

    for page in pages:
        total += 1
        props = page.get("properties") if isinstance(page, dict) else None

        status = get_status(props, property_names.status) or UNKNOWN_LABEL
        statuses[status] += 1

        coordinates = get_place_coordinates(props, property_names.map_location)
        if coordinates is not None:
            with_coordinates += 1

        last_order = get_rollup_date(props, property_names.last_order_date)
        last_delivery = get_rollup_date(props, property_names.last_delivery_date)
        if last_order or last_delivery:
            with_orders += 1

        if status != customer_status or coordinates is None:
            continue
        customers_with_coordinates += 1

        order_date = last_delivery or last_order
        parsed = parse_iso_datetime(order_date)
        if parsed is not None and parsed >= cutoff:
            recent.append(
                RecentCustomer(
                    name=get_title(props, property_names.name) or UNKNOWN_LABEL,
                    last_order=order_date,
                    lat=coordinates.lat,
                    lng=coordinates.lng,
                )
            )

    return AnalysisReport(
        total_records=total,
        status_counts=statuses.most_common(),
        with_coordinates=with_coordinates,
        with_orders=with_orders,
        customers_with_coordinates=customers_with_coordinates,
        recent_customers=recent,
    )


def format_analysis_report(report: AnalysisReport, *, sample_size: int = 5, window_days: int = RECENT_WINDOW_DAYS) -> list[str]:
    lines = [f"Total records: {report.total_records}", "", "=== Account Status Distribution ==="]
    lines.extend(f"  {status}: {count}" for status, count in report.status_counts)

    lines.extend(
        [
            "",
            "=== Data Completeness ===",
            f"  Records with coordinates: {report.with_coordinates}",
            f"  Records with orders: {report.with_orders}",
            f"  Customers with coordinates: {report.customers_with_coordinates}",
            "",
            f"=== Recent Customers ({window_days} days) with Coords ===",
            f"  Count: {len(report.recent_customers)}",
        ]
    )
    if report.recent_customers:
        lines.extend(["", "  Sample records:"])
        for customer in report.recent_customers[:sample_size]:
            lines.append(f"    - {customer.name} ({customer.lat}, {customer.lng}) - Last order: {customer.last_order}")
    return lines
