"""Tests for examprep/insights.py — insights, banner and weekly tips."""

from examprep.aggregation import build_weekly_report
from examprep.insights import generate_insights, motivational_message, weekly_insights
from examprep.models import StudySession

TODAY = "2024-01-14"


def _s(day, minutes, subject="Quant", **kw):
    return StudySession(date=day, duration_minutes=minutes, subject=subject, **kw)


def test_empty_sessions_placeholder():
    insights = generate_insights([], TODAY)
    assert len(insights) == 1
    assert insights[0]["text"] == "Start logging sessions to see insights"
    assert insights[0]["category"] == "neutral"


def test_full_insight_set():
    sessions = [
        _s("2024-01-12", 60),
        _s("2024-01-13", 60),
        _s("2024-01-14", 60),
        _s("2024-01-14", 60, "Reasoning"),
        _s("2024-01-05", 90),
        _s("2024-01-05", 60, "Reasoning"),
    ]
    texts = [i["text"] for i in generate_insights(sessions, TODAY)]
    assert texts == [
        "Quant is your strongest subject (75% of study time)",
        "Quant trending up — +100% from last week",
        "Daily average: 80 min/day (3 active days this week)",
        "3-day streak — keep the momentum going",
    ]


def test_never_more_than_four():
    sessions = [_s("2024-01-%02d" % d, 60) for d in range(1, 15)]
    assert len(generate_insights(sessions, TODAY)) <= 4


def test_drop_warning():
    sessions = [_s("2024-01-14", 100), _s("2024-01-04", 200)]
    insights = generate_insights(sessions, TODAY)
    warning = [i for i in insights if i["category"] == "warning"]
    assert warning[0]["text"] == "Quant dropped 50% — consider focusing tomorrow"


def test_long_streak_milestone():
    sessions = [_s("2024-01-%02d" % d, 30) for d in range(8, 15)]
    texts = [i["text"] for i in generate_insights(sessions, TODAY)]
    assert "Amazing! 7-day streak — you're unstoppable" in texts


def test_no_recent_activity():
    insights = generate_insights([_s("2024-01-01", 30)], TODAY)
    assert insights == []


def test_motivational_message_branches():
    assert motivational_message(0, 30, 0)["type"] == "recovery"
    assert motivational_message(90, 60, 2)["type"] == "success"
    assert motivational_message(10, 90, 1)["type"] == "motivate"
    assert motivational_message(200, 0, 1, 180)["message"].startswith("Goal crushed")
    assert motivational_message(0, 0, 0)["type"] == "neutral"


def test_motivational_message_progress():
    banner = motivational_message(90, 0, 1, 180)
    assert banner["type"] == "progress"
    assert banner["message"] == "Great momentum! 90 min to hit your daily goal"
    assert banner["sub_message"] == "You're 50% there. Keep going!"


def test_weekly_insights():
    sessions = [
        _s("2024-01-08", 150, chapter="Percentage"),
        _s("2024-01-09", 40, "GK", chapter="Polity"),
        _s("2024-01-10", 30, chapter="Percentage"),
    ]
    tips = weekly_insights(build_weekly_report(sessions), daily_goal=120)
    assert tips[0] == "✅ Met daily goal on 1 day"
    assert tips[1] == "⚠️ Below goal on 2 days"
    assert tips[2] == "\U0001f4da Top chapters: Quant - Percentage (180 min), GK - Polity (40 min)"
    assert tips[3].startswith("\U0001f4a1 You studied most in Quant on Mon (150 min)")
    assert tips[3].endswith("try balancing with GK next week")


def test_weekly_insights_empty_report():
    assert weekly_insights(build_weekly_report([])) == []


def test_zero_minute_recent_subject_is_not_a_mover():
    sessions = [
        _s("2024-01-14", 60),
        _s("2024-01-13", 0, "English"),
        _s("2024-01-05", 60, "English"),
    ]
    insights = generate_insights(sessions, TODAY)
    assert not [i for i in insights if i["category"] == "warning"]
    assert not any("English" in i["text"] for i in insights)
