"""Named time ranges (Daily/Weekly/Monthly/Total) relative to an injected today."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Iterable, TypeVar

from examprep.dates import as_date, month_day

R = TypeVar("R")


def resolve_range(range_name: str, today: date | datetime | str) -> dict[str, Any]:
    """Map a range name to its inclusive start day and display label.

    Unknown names fall back to Total.
    """
    day = as_date(today)

    if range_name == "Daily":
        return {
            "range": "Daily",
            "start_date_inclusive": day.isoformat(),
            "end_date_inclusive": day.isoformat(),
            "label": f"Daily - {month_day(day)}",
        }

    if range_name == "Weekly":
        # isoweekday: Mon=1 .. Sun=7, so Sunday goes back 6 days
        start = day - timedelta(days=day.isoweekday() - 1)
        end = start + timedelta(days=6)
        return {
            "range": "Weekly",
            "start_date_inclusive": start.isoformat(),
            "end_date_inclusive": end.isoformat(),
            "label": f"{month_day(start)} - {month_day(end)}",
        }

    if range_name == "Monthly":
        start = day.replace(day=1)
        end = day.replace(day=calendar.monthrange(day.year, day.month)[1])
        return {
            "range": "Monthly",
            "start_date_inclusive": start.isoformat(),
            "end_date_inclusive": end.isoformat(),
            "label": f"{month_day(start)} - {month_day(end)}",
        }

    return {
        "range": "Total",
        "start_date_inclusive": None,
        "end_date_inclusive": None,
        "label": "All Time",
    }


def filter_by_range(
    records: Iterable[R] | None,
    range_name: str,
    today: date | datetime | str,
) -> list[R]:
    """Records dated on or after the range start (string comparison)."""
    items = list(records or [])
    start = resolve_range(range_name, today)["start_date_inclusive"]
    if start is None:
        return items
    return [r for r in items if r.date >= start]


def filter_between(records: Iterable[R] | None, start: str, end: str) -> list[R]:
    """Records with start <= date <= end."""
    return [r for r in (records or []) if start <= r.date <= end]
