"""Week-over-week subject trend classification.

The recent window is the seven days ending today; the prior window is the
seven days before it. Neither overlaps the other.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from examprep.dates import shift
from examprep.models import StudySession

TREND_THRESHOLD_PCT = 10

STATUS_ICONS = {
    "Strong": "\U0001f525",
    "Active": "\U0001f7ea",
    "Improving": "\U0001f4c8",
    "Needs Work": "⚠️",
    "Stable": "\U0001f9e0",
}


def window_totals(
    sessions: Iterable[StudySession] | None,
    today: date | datetime | str,
) -> tuple[dict[str, int], dict[str, int]]:
    """Per-subject minutes for (recent, prior) windows, in first-seen order."""
    today_str = shift(today, 0)
    recent_start = shift(today, -6)
    prior_start = shift(today, -13)

    recent: dict[str, int] = {}
    prior: dict[str, int] = {}
    for s in sessions or []:
        if recent_start <= s.date <= today_str:
            recent[s.subject_label] = recent.get(s.subject_label, 0) + s.duration_minutes
        elif prior_start <= s.date < recent_start:
            prior[s.subject_label] = prior.get(s.subject_label, 0) + s.duration_minutes
    return recent, prior


def change_percent(recent: float, prior: float) -> float:
    """Relative change from prior to recent; prior must be positive."""
    return (recent - prior) * 100 / prior


def classify_subject_trends(
    sessions: Iterable[StudySession] | None,
    today: date | datetime | str,
) -> dict[str, dict[str, Any]]:
    recent, prior = window_totals(sessions, today)

    strongest = None
    for subject, minutes in recent.items():
        if strongest is None or minutes > recent[strongest]:
            strongest = subject

    trends: dict[str, dict[str, Any]] = {}
    for subject in list(recent) + [s for s in prior if s not in recent]:
        current = recent.get(subject, 0)
        previous = prior.get(subject, 0)

        if subject == strongest and current > 0:
            status, change = "Strong", 0.0
        elif previous == 0 and current > 0:
            status, change = "Active", 100.0
        elif previous > 0:
            change = change_percent(current, previous)
            if change >= TREND_THRESHOLD_PCT:
                status = "Improving"
            elif change <= -TREND_THRESHOLD_PCT:
                status = "Needs Work"
            else:
                status = "Stable"
        else:
            # zero minutes in both windows
            status, change = "Stable", 0.0

        trends[subject] = {
            "status": status,
            "icon": STATUS_ICONS[status],
            "change_percent": round(change, 1),
        }
    return trends
