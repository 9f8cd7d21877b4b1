"""Plain-text daily and weekly summaries for copy/export."""

from __future__ import annotations

from typing import Iterable

from examprep.aggregation import DAILY_GOAL_MINUTES, build_weekly_report, session_stats
from examprep.dates import try_parse_date, weekday_label
from examprep.models import StudySession

EMPTY_WEEK = "No study sessions logged this week."
EMPTY_DAY = "No study sessions logged today."


def format_minutes(minutes: int) -> str:
    """95 -> '1h 35m', 45 -> '45m'."""
    minutes = max(0, int(minutes or 0))
    hours, mins = divmod(minutes, 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"


def _time_range(session: StudySession) -> str:
    return f"{session.start_time or '?'}–{session.end_time or '?'}"


def format_session_line(session: StudySession) -> str:
    """'06:30–07:30 | Quant | Percentage | 60 min | 25 questions'"""
    parts = [
        _time_range(session),
        session.subject_label,
        session.chapter,
        f"{session.duration_minutes} min",
        f"{session.questions_solved} questions" if session.questions_solved else "",
    ]
    return " | ".join(p for p in parts if p and p != "-")


def _by_start_time(sessions: Iterable[StudySession]) -> list[StudySession]:
    return sorted(sessions, key=lambda s: s.start_time or "")


def format_weekly_report(
    sessions: Iterable[StudySession] | None,
    start_date: str,
    end_date: str,
    daily_goal: int = DAILY_GOAL_MINUTES,
) -> str:
    items = list(sessions or [])
    if not items:
        return EMPTY_WEEK

    report = build_weekly_report(items)
    stats = session_stats(items)

    lines = [
        f"WEEK: {start_date} → {end_date}",
        "",
        f"TOTAL SESSIONS: {stats['count']}",
        f"TOTAL TIME: {report['week_total']} min",
        f"AVERAGE SESSION: {stats['avg_length']} min",
        f"MEDIAN SESSION: {stats['median_length']} min",
        "",
        "DAILY BREAKDOWN:",
    ]

    for day_str, day in report["daily_breakdown"].items():
        glyph = "✔" if day["total_minutes"] >= daily_goal else "✖"
        lines.append("")
        lines.append(
            f"{weekday_label(day_str)} — {day['total_minutes']} min "
            f"({len(day['sessions'])} sessions) {glyph}"
        )
        for s in _by_start_time(day["sessions"]):
            lines.append(f"  - {format_session_line(s)}")
            if s.notes:
                lines.append(f"    Notes: {s.notes}")

    lines.append("")
    lines.append("SUBJECT BREAKDOWN:")
    ranked = sorted(
        report["subject_totals"].items(),
        key=lambda kv: kv[1]["total_minutes"],
        reverse=True,
    )
    for subject, data in ranked:
        lines.append(
            f"- {subject}: {data['total_minutes']} min ({data['percentage']}% of week, "
            f"avg {data['avg_per_session']} min/session)"
        )

    longest = stats["longest_session"]
    if longest is not None:
        line = f"LONGEST SESSION: {longest.duration_minutes} min — {longest.subject_label}"
        if longest.chapter:
            line += f" ({longest.chapter})"
        d = try_parse_date(longest.date)
        line += f" on {d:%b} {d.day}" if d else f" on {longest.date}"
        lines.append("")
        lines.append(line)

    return "\n".join(lines) + "\n"


def format_daily_summary(sessions: Iterable[StudySession] | None, day: str) -> str:
    """One day's sessions, totals and notes. Sessions from other days are ignored."""
    items = _by_start_time(s for s in (sessions or []) if s.date == day)
    if not items:
        return EMPTY_DAY

    lines = [f"DATE: {day}", "", "SESSIONS:"]
    notes = []
    for s in items:
        parts = [
            _time_range(s),
            s.subject_label,
            s.chapter,
            s.source,
            f"{s.questions_solved} questions" if s.questions_solved else "",
        ]
        lines.append("- " + " | ".join(p for p in parts if p and p != "-"))
        if s.notes:
            notes.append(s.notes)

    lines.append("")
    lines.append(f"TOTAL TIME: {sum(s.duration_minutes for s in items)} min")
    lines.append(f"TOTAL QUESTIONS: {sum(s.questions_solved for s in items)}")
    if notes:
        lines.append("")
        lines.append("NOTES:")
        lines.extend(f"- {n}" for n in notes)
    return "\n".join(lines) + "\n"
