"""Calendar heatmap: a gap-free day series with 0-4 intensity levels."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Any, Iterable

from examprep.dates import day_span, shift
from examprep.models import StudySession

# (upper bound exclusive, level)
INTENSITY_STEPS = ((30, 1), (90, 2), (150, 3))


def intensity_level(minutes: float) -> int:
    if minutes <= 0:
        return 0
    for bound, level in INTENSITY_STEPS:
        if minutes < bound:
            return level
    return 4


def build_heatmap(
    sessions: Iterable[StudySession] | None,
    window_days: int,
    today: date | datetime | str,
) -> list[dict[str, Any]]:
    """Exactly *window_days* entries, oldest first, ending today."""
    if window_days <= 0:
        return []
    days = day_span(shift(today, -(window_days - 1)), window_days)
    wanted = set(days)

    minutes: dict[str, int] = defaultdict(int)
    for s in sessions or []:
        if s.date in wanted:
            minutes[s.date] += s.duration_minutes

    return [
        {"date": d, "minutes": minutes[d], "intensity_level": intensity_level(minutes[d])}
        for d in days
    ]


def heatmap_weeks(cells: list[dict[str, Any]]) -> list[list[dict[str, Any]]]:
    """Chunk a heatmap into rows of seven days for grid display."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
