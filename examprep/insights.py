"""Insight generation for ExamPrep.

Turns streak, subject and trend numbers into a short, ranked list of
human-readable observations, plus the adaptive banner message and the
weekly-summary tips.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from examprep.aggregation import DAILY_GOAL_MINUTES, top_chapters
from examprep.dates import shift, short_weekday
from examprep.mathutil import percent_of, round_half_up
from examprep.models import StudySession
from examprep.streaks import calculate_streak
from examprep.trends import TREND_THRESHOLD_PCT, change_percent, window_totals

MAX_INSIGHTS = 4


def _insight(icon: str, text: str, category: str) -> dict[str, str]:
    return {"icon": icon, "text": text, "category": category}


def generate_insights(
    sessions: Iterable[StudySession] | None,
    today: date | datetime | str,
) -> list[dict[str, str]]:
    """Up to four insights, most important first."""
    items = list(sessions or [])
    if not items:
        return [_insight("\U0001f4da", "Start logging sessions to see insights", "neutral")]

    insights = []
    recent, prior = window_totals(items, today)
    recent_total = sum(recent.values())

    # 1. Strongest subject by share of the last 7 days
    if recent_total > 0:
        strongest = max(recent, key=lambda k: recent[k])
        share = percent_of(recent[strongest], recent_total)
        insights.append(_insight(
            "\U0001f4aa",
            f"{strongest} is your strongest subject ({share}% of study time)",
            "positive",
        ))

    # 2. Biggest week-over-week mover among subjects studied in both windows
    movers = [
        (subject, change_percent(recent[subject], prior[subject]))
        for subject in recent
        if recent[subject] > 0 and prior.get(subject, 0) > 0
    ]
    movers.sort(key=lambda m: abs(m[1]), reverse=True)
    if movers:
        subject, change = movers[0]
        if change > TREND_THRESHOLD_PCT:
            insights.append(_insight(
                "\U0001f4c8",
                f"{subject} trending up — +{round_half_up(change)}% from last week",
                "positive",
            ))
        elif change < -TREND_THRESHOLD_PCT:
            insights.append(_insight(
                "⚠️",
                f"{subject} dropped {abs(round_half_up(change))}% — consider focusing tomorrow",
                "warning",
            ))

    # 3. Daily average over active days
    recent_start = shift(today, -6)
    today_str = shift(today, 0)
    active_days = {s.date for s in items if recent_start <= s.date <= today_str}
    if active_days:
        avg = round_half_up(recent_total / len(active_days))
        insights.append(_insight(
            "\U0001f4ca",
            f"Daily average: {avg} min/day ({len(active_days)} active days this week)",
            "neutral",
        ))

    # 4. Streak milestone
    current = calculate_streak(items, today)["current_streak"]
    if current >= 7:
        insights.append(_insight(
            "\U0001f525",
            f"Amazing! {current}-day streak — you're unstoppable",
            "positive",
        ))
    elif current >= 3:
        insights.append(_insight(
            "✨",
            f"{current}-day streak — keep the momentum going",
            "positive",
        ))

    return insights[:MAX_INSIGHTS]


def motivational_message(
    today_min: int,
    yesterday_min: int,
    streak: int,
    daily_goal: int = DAILY_GOAL_MINUTES,
) -> dict[str, str]:
    """Banner message keyed on today vs yesterday and the current streak."""
    if streak == 0 and yesterday_min > 0:
        return {
            "message": "New day, new streak. Start strong today ✨",
            "sub_message": "Every expert was once a beginner. Let's build momentum.",
            "icon": "\U0001f3af",
            "type": "recovery",
        }

    if today_min > yesterday_min and yesterday_min > 0:
        return {
            "message": "You're on fire! You've already beaten yesterday \U0001f451",
            "sub_message": f"{today_min} min today vs {yesterday_min} min yesterday. Keep crushing it!",
            "icon": "\U0001f525",
            "type": "success",
        }

    if today_min < 30 and yesterday_min > 60:
        return {
            "message": "Slow start today. A 20-minute sprint will help you hit target!",
            "sub_message": f"You did {yesterday_min} min yesterday. You've got this.",
            "icon": "⚡",
            "type": "motivate",
        }

    if today_min >= 60:
        remaining = max(0, daily_goal - today_min)
        if remaining == 0:
            return {
                "message": "Goal crushed! You're a study machine \U0001f389",
                "sub_message": f"{today_min} minutes logged. Exceptional work today.",
                "icon": "\U0001f3c6",
                "type": "success",
            }
        return {
            "message": f"Great momentum! {remaining} min to hit your daily goal",
            "sub_message": f"You're {percent_of(today_min, daily_goal)}% there. Keep going!",
            "icon": "\U0001f4aa",
            "type": "progress",
        }

    return {
        "message": "Let's make today count!",
        "sub_message": "Consistency is the key to success. Start your first session.",
        "icon": "\U0001f3af",
        "type": "neutral",
    }


def weekly_insights(report: dict[str, Any], daily_goal: int = DAILY_GOAL_MINUTES) -> list[str]:
    """Tips for the weekly summary, built from build_weekly_report() output."""
    tips = []
    daily = report.get("daily_breakdown") or {}
    subjects = report.get("subject_totals") or {}

    above = [d for d in sorted(daily) if daily[d]["total_minutes"] >= daily_goal]
    below = [d for d in sorted(daily) if 0 < daily[d]["total_minutes"] < daily_goal]
    if above:
        tips.append(f"✅ Met daily goal on {len(above)} day{'s' if len(above) > 1 else ''}")
    if below:
        tips.append(f"⚠️ Below goal on {len(below)} day{'s' if len(below) > 1 else ''}")

    week_sessions = [s for d in sorted(daily) for s in daily[d]["sessions"]]
    top = top_chapters(week_sessions)
    if top:
        listing = ", ".join(f"{c['key']} ({c['minutes']} min)" for c in top)
        tips.append(f"\U0001f4da Top chapters: {listing}")

    ranked = sorted(subjects.items(), key=lambda kv: kv[1]["total_minutes"], reverse=True)
    if len(ranked) >= 2:
        strongest_name, strongest = ranked[0]
        weakest_name, weakest = ranked[-1]
        best_day = strongest["best_day"]
        if best_day["date"] and strongest["total_minutes"] > weakest["total_minutes"] * 2:
            tips.append(
                f"\U0001f4a1 You studied most in {strongest_name} on {short_weekday(best_day['date'])} "
                f"({best_day['minutes']} min) — try balancing with {weakest_name} next week"
            )
    return tips
