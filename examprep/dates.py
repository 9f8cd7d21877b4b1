"""Calendar-day helpers for ExamPrep.

Dates travel through the system as ``YYYY-MM-DD`` strings. Range checks
compare those strings directly, which is only valid because the format is
fixed-width and zero-padded; callers must keep it that way.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
HHMM_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

MINUTES_PER_DAY = 1440


class InvalidDateFormat(ValueError):
    """Raised when a date string is not a valid ``YYYY-MM-DD`` day."""


def is_iso_date(s: str) -> bool:
    if not isinstance(s, str) or not ISO_DATE_RE.match(s):
        return False
    try:
        date.fromisoformat(s)
    except ValueError:
        return False
    return True


def parse_date(s: str) -> date:
    """Strict parse for boundary code. Raises InvalidDateFormat."""
    if not is_iso_date(s):
        raise InvalidDateFormat(f"Invalid date format: {s!r} (expected YYYY-MM-DD)")
    return date.fromisoformat(s)


def try_parse_date(s: str) -> date | None:
    try:
        return parse_date(s)
    except InvalidDateFormat:
        return None


def as_date(value: date | datetime | str) -> date:
    """Normalize an injected 'today' value to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def shift(day: date | datetime | str, days: int) -> str:
    """Return the ISO string *days* away from *day* (negative goes back)."""
    return (as_date(day) + timedelta(days=days)).isoformat()


def day_span(start: date | str, count: int) -> list[str]:
    """*count* consecutive ISO dates starting at *start*."""
    first = as_date(start)
    return [(first + timedelta(days=i)).isoformat() for i in range(count)]


def parse_hhmm(s: str) -> int | None:
    """'06:30' -> 390. Returns None for empty or malformed values."""
    m = HHMM_RE.match((s or "").strip())
    if not m:
        return None
    return int(m.group(1)) * 60 + int(m.group(2))


def minutes_between(start_time: str, end_time: str) -> int | None:
    """Clock minutes from start to end, wrapping past midnight."""
    start = parse_hhmm(start_time)
    end = parse_hhmm(end_time)
    if start is None or end is None:
        return None
    diff = end - start
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


# ── Labels ────────────────────────────────────────────────────


def month_day(day: date) -> str:
    """Jan 5"""
    return f"{day:%b} {day.day}"


def weekday_label(iso: str) -> str:
    """'2024-01-01' -> 'MON, JAN 01'. Malformed input is returned as-is."""
    d = try_parse_date(iso)
    if d is None:
        return iso
    return d.strftime("%a, %b %d").upper()


def short_weekday(iso: str) -> str:
    d = try_parse_date(iso)
    return d.strftime("%a") if d else iso
