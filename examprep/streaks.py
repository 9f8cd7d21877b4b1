"""Consecutive-day study streaks.

A day counts as studied when it has at least one logged session,
whatever its duration.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterable

from examprep.dates import as_date, try_parse_date
from examprep.models import StudySession


def studied_dates(sessions: Iterable[StudySession] | None) -> set[str]:
    return {s.date for s in (sessions or []) if s.date}


def calculate_streak(
    sessions: Iterable[StudySession] | None,
    today: date | datetime | str,
) -> dict[str, Any]:
    """Current streak (ending today), best streak ever, and last study date."""
    dates = studied_dates(sessions)
    if not dates:
        return {"current_streak": 0, "best_streak": 0, "last_study_date": None}

    current = 0
    cursor = as_date(today)
    while cursor.isoformat() in dates:
        current += 1
        cursor -= timedelta(days=1)

    ordered = sorted(dates)
    best = 0
    run = 0
    prev: date | None = None
    for ds in ordered:
        d = try_parse_date(ds)
        if prev is not None and d is not None and (d - prev).days == 1:
            run += 1
        else:
            run = 1
        best = max(best, run)
        prev = d

    return {
        "current_streak": current,
        "best_streak": best,
        "last_study_date": ordered[-1],
    }
