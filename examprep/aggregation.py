"""Aggregation engine: per-day, per-subject, per-chapter and per-hour rollups.

Every function here is a pure transform over a list of StudySession
records. Empty or None input gives zero totals and empty containers.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Any, Iterable

from examprep.dates import MINUTES_PER_DAY, parse_hhmm, shift
from examprep.mathutil import percent_of, round_half_up
from examprep.models import Chapter, MockResult, StudySession

DAILY_GOAL_MINUTES = 180
BIN_SIZES = (30, 60)


# ── Daily ─────────────────────────────────────────────────────


def daily_totals(sessions: Iterable[StudySession] | None) -> list[dict[str, Any]]:
    """Minutes per date, oldest first."""
    totals: dict[str, int] = defaultdict(int)
    for s in sessions or []:
        totals[s.date] += s.duration_minutes
    return [{"date": d, "minutes": totals[d]} for d in sorted(totals)]


def cumulative_series(sessions: Iterable[StudySession] | None) -> list[dict[str, Any]]:
    """Daily totals with a running sum, for progress-over-time charts."""
    running = 0
    series = []
    for row in daily_totals(sessions):
        running += row["minutes"]
        series.append({**row, "cumulative_minutes": running})
    return series


def _bin_label(start_minute: int, bin_minutes: int) -> str:
    end_minute = start_minute + bin_minutes
    sh, sm = divmod(start_minute, 60)
    eh, em = divmod(end_minute, 60)
    return f"{sh}:{sm:02d} – {eh}:{em:02d}"


def bucket_by_hour(
    sessions: Iterable[StudySession] | None,
    bin_minutes: int = 60,
) -> list[dict[str, Any]]:
    """Spread each session's minutes over the clock bins it overlaps.

    Returns one bucket per bin of the day. Overnight sessions wrap into
    the early bins of the same day. Sessions without a parseable
    start/end time are skipped.
    """
    if bin_minutes not in BIN_SIZES:
        raise ValueError(f"bin_minutes must be one of {BIN_SIZES}, got {bin_minutes}")

    buckets = [
        {
            "label": _bin_label(start, bin_minutes),
            "start_minute": start,
            "total_minutes": 0.0,
            "subject_minutes": defaultdict(float),
            "sessions": [],
        }
        for start in range(0, MINUTES_PER_DAY, bin_minutes)
    ]

    for s in sessions or []:
        start = parse_hhmm(s.start_time)
        end = parse_hhmm(s.end_time)
        if start is None or end is None:
            continue
        span = end - start
        if span < 0:
            span += MINUTES_PER_DAY

        if span == 0:
            # Zero-length clock range: book everything on the start bin
            bucket = buckets[start // bin_minutes]
            bucket["total_minutes"] += s.duration_minutes
            bucket["subject_minutes"][s.subject_label] += s.duration_minutes
            bucket["sessions"].append(s)
            continue

        segments = [(start, min(start + span, MINUTES_PER_DAY))]
        if start + span > MINUTES_PER_DAY:
            segments.append((0, start + span - MINUTES_PER_DAY))

        for seg_start, seg_end in segments:
            first = seg_start // bin_minutes
            last = (seg_end - 1) // bin_minutes
            for idx in range(first, last + 1):
                bucket = buckets[idx]
                bin_start = bucket["start_minute"]
                overlap = min(seg_end, bin_start + bin_minutes) - max(seg_start, bin_start)
                if overlap <= 0:
                    continue
                share = s.duration_minutes * overlap / span
                bucket["total_minutes"] += share
                bucket["subject_minutes"][s.subject_label] += share
                if not bucket["sessions"] or bucket["sessions"][-1] is not s:
                    bucket["sessions"].append(s)

    for bucket in buckets:
        bucket["total_minutes"] = round(bucket["total_minutes"], 1)
        bucket["subject_minutes"] = {k: round(v, 1) for k, v in bucket["subject_minutes"].items()}
    return buckets


def time_of_day_hotspots(buckets: list[dict[str, Any]], limit: int = 3) -> list[dict[str, Any]]:
    """Busiest non-empty bins, most minutes first."""
    busy = [b for b in buckets if b["total_minutes"] > 0]
    busy.sort(key=lambda b: b["total_minutes"], reverse=True)
    return [{"label": b["label"], "minutes": b["total_minutes"]} for b in busy[:limit]]


# ── Subjects ──────────────────────────────────────────────────


def subject_totals(sessions: Iterable[StudySession] | None) -> list[dict[str, Any]]:
    """Per-subject minutes, share of total and average session length.

    Sorted by minutes descending; ties keep first-seen order.
    """
    minutes: dict[str, int] = {}
    counts: dict[str, int] = {}
    for s in sessions or []:
        key = s.subject_label
        minutes[key] = minutes.get(key, 0) + s.duration_minutes
        counts[key] = counts.get(key, 0) + 1

    grand_total = sum(minutes.values())
    rows = [
        {
            "subject": subject,
            "minutes": total,
            "session_count": counts[subject],
            "percentage": percent_of(total, grand_total),
            "avg_per_session": round_half_up(total / counts[subject]) if counts[subject] else 0,
        }
        for subject, total in minutes.items()
    ]
    rows.sort(key=lambda r: r["minutes"], reverse=True)
    return rows


# ── Weekly report ─────────────────────────────────────────────


def build_weekly_report(
    sessions: Iterable[StudySession] | None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    """Per-day and per-subject breakdown of a week of sessions.

    When bounds are given, sessions dated outside [start_date, end_date]
    are left out.
    """
    items = [
        s for s in (sessions or [])
        if (start_date is None or s.date >= start_date)
        and (end_date is None or s.date <= end_date)
    ]
    if not items:
        return {"daily_breakdown": {}, "subject_totals": {}, "week_total": 0}

    daily: dict[str, dict[str, Any]] = {}
    subject_day_minutes: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    subjects: dict[str, dict[str, Any]] = {}
    week_total = 0

    for s in items:
        duration = s.duration_minutes
        subject = s.subject_label
        day = daily.setdefault(s.date, {"sessions": [], "total_minutes": 0, "subjects": []})
        day["sessions"].append(s)
        day["total_minutes"] += duration
        if subject not in day["subjects"]:
            day["subjects"].append(subject)

        entry = subjects.setdefault(subject, {"total_minutes": 0, "session_count": 0})
        entry["total_minutes"] += duration
        entry["session_count"] += 1
        subject_day_minutes[subject][s.date] += duration
        week_total += duration

    for subject, entry in subjects.items():
        best = {"date": None, "minutes": 0}
        for day_str in sorted(subject_day_minutes[subject]):
            mins = subject_day_minutes[subject][day_str]
            if mins > best["minutes"]:
                best = {"date": day_str, "minutes": mins}
        entry["best_day"] = best
        entry["percentage"] = percent_of(entry["total_minutes"], week_total)
        entry["avg_per_session"] = round_half_up(entry["total_minutes"] / entry["session_count"])

    return {
        "daily_breakdown": {d: daily[d] for d in sorted(daily)},
        "subject_totals": subjects,
        "week_total": week_total,
    }


def session_stats(sessions: Iterable[StudySession] | None) -> dict[str, Any]:
    """Count, mean, median and longest session."""
    items = list(sessions or [])
    if not items:
        return {
            "count": 0,
            "total_minutes": 0,
            "avg_length": 0,
            "median_length": 0,
            "longest_session": None,
        }

    durations = sorted(s.duration_minutes for s in items)
    total = sum(durations)
    mid = len(durations) // 2
    if len(durations) % 2 == 0:
        median = round_half_up((durations[mid - 1] + durations[mid]) / 2)
    else:
        median = durations[mid]

    longest = items[0]
    for s in items[1:]:
        if s.duration_minutes > longest.duration_minutes:
            longest = s

    return {
        "count": len(items),
        "total_minutes": total,
        "avg_length": round_half_up(total / len(items)),
        "median_length": median,
        "longest_session": longest,
    }


# ── Chapters ──────────────────────────────────────────────────


def chapter_progress(target_hours: float, total_minutes: float) -> float:
    """Percent of the chapter's target hours covered, capped at 100."""
    if not target_hours or target_hours <= 0:
        return 0.0
    return min(100.0, (total_minutes / 60) / target_hours * 100)


def chapter_stats(chapter: Chapter, sessions: Iterable[StudySession] | None) -> dict[str, Any]:
    """Progress and history for one chapter (matched on subject + name)."""
    mine = [
        s for s in (sessions or [])
        if s.subject == chapter.subject and s.chapter == chapter.chapter_name
    ]
    total_minutes = sum(s.duration_minutes for s in mine)
    return {
        **chapter.to_dict(),
        "hours_done": round(total_minutes / 60, 2),
        "progress_percent": round(chapter_progress(chapter.target_hours, total_minutes), 1),
        "sessions_count": len(mine),
        "last_studied_on": max((s.date for s in mine), default=None),
        "history": cumulative_series(mine),
    }


def top_chapters(sessions: Iterable[StudySession] | None, limit: int = 3) -> list[dict[str, Any]]:
    """Most-studied 'Subject - Chapter' pairs; missing chapters count as General."""
    minutes: dict[str, int] = {}
    for s in sessions or []:
        key = f"{s.subject_label} - {s.chapter or 'General'}"
        minutes[key] = minutes.get(key, 0) + s.duration_minutes
    ranked = sorted(minutes.items(), key=lambda kv: kv[1], reverse=True)
    return [{"key": k, "minutes": m} for k, m in ranked[:limit]]


# ── Goals & dashboard ─────────────────────────────────────────


def daily_goal_progress(today_minutes: int, target: int = DAILY_GOAL_MINUTES) -> dict[str, Any]:
    if target <= 0:
        percentage = 0
    else:
        percentage = min(100, round_half_up(today_minutes / target * 100))

    if percentage >= 100:
        status, color = "Goal crushed! \U0001f389", "emerald"
    elif percentage >= 70:
        status, color = "Almost there!", "emerald"
    elif percentage >= 40:
        status, color = "You're on track!", "amber"
    else:
        status, color = "Let's get started!", "red"

    return {"percentage": percentage, "status": status, "color": color, "target": target}


def minutes_on(sessions: Iterable[StudySession] | None, day: str) -> int:
    return sum(s.duration_minutes for s in (sessions or []) if s.date == day)


def dashboard_stats(
    sessions: Iterable[StudySession] | None,
    mocks: Iterable[MockResult] | None,
    today: date | datetime | str,
) -> dict[str, Any]:
    """Headline numbers: today, last 7 days (inclusive), mocks in 30 days."""
    items = list(sessions or [])
    today_str = shift(today, 0)
    week_start = shift(today, -6)
    month_start = shift(today, -30)

    week_min = sum(s.duration_minutes for s in items if week_start <= s.date <= today_str)
    return {
        "today_min": minutes_on(items, today_str),
        "yesterday_min": minutes_on(items, shift(today, -1)),
        "week_min": week_min,
        "avg_daily_min": round_half_up(week_min / 7),
        "mocks_30d": sum(1 for m in (mocks or []) if m.date >= month_start),
    }
