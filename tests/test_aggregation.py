"""Tests for examprep/aggregation.py — daily, subject, hourly and chapter rollups."""

import copy

import pytest

from examprep.aggregation import (
    bucket_by_hour,
    build_weekly_report,
    chapter_progress,
    chapter_stats,
    cumulative_series,
    daily_goal_progress,
    daily_totals,
    dashboard_stats,
    session_stats,
    subject_totals,
    time_of_day_hotspots,
    top_chapters,
)
from examprep.models import Chapter, MockResult, StudySession


def _s(day, minutes, subject="Quant", **kw):
    return StudySession(date=day, duration_minutes=minutes, subject=subject, **kw)


# ── Daily ─────────────────────────────────────────────────────


def test_daily_totals_sorted_oldest_first():
    sessions = [_s("2024-01-10", 30), _s("2024-01-08", 60), _s("2024-01-10", 15)]
    assert daily_totals(sessions) == [
        {"date": "2024-01-08", "minutes": 60},
        {"date": "2024-01-10", "minutes": 45},
    ]


def test_cumulative_series():
    sessions = [_s("2024-01-08", 60), _s("2024-01-09", 30)]
    series = cumulative_series(sessions)
    assert [row["cumulative_minutes"] for row in series] == [60, 90]


def test_empty_inputs():
    assert daily_totals(None) == []
    assert subject_totals([]) == []
    assert build_weekly_report([]) == {"daily_breakdown": {}, "subject_totals": {}, "week_total": 0}
    assert session_stats([])["longest_session"] is None


# ── Subjects ──────────────────────────────────────────────────


def test_subject_percentages():
    sessions = [_s("2024-01-10", 40, "Quant"), _s("2024-01-10", 60, "Reasoning")]
    rows = subject_totals(sessions)
    assert [(r["subject"], r["minutes"], r["percentage"]) for r in rows] == [
        ("Reasoning", 60, 60),
        ("Quant", 40, 40),
    ]


def test_subject_totals_conserve_minutes():
    sessions = [
        _s("2024-01-08", 37, "Quant"),
        _s("2024-01-08", 41, "English"),
        _s("2024-01-09", 13, ""),
        _s("2024-01-10", 55, "Quant"),
    ]
    rows = subject_totals(sessions)
    assert sum(r["minutes"] for r in rows) == sum(s.duration_minutes for s in sessions)
    assert {r["subject"] for r in rows} == {"Quant", "English", "Unknown"}


def test_subject_totals_avg_and_ties():
    sessions = [_s("2024-01-08", 30, "GK"), _s("2024-01-08", 30, "English"), _s("2024-01-09", 15, "GK")]
    rows = subject_totals(sessions)
    assert rows[0]["subject"] == "GK"
    assert rows[0]["session_count"] == 2
    assert rows[0]["avg_per_session"] == 23  # 22.5 rounds up

    tied = subject_totals([_s("2024-01-08", 30, "English"), _s("2024-01-08", 30, "GK")])
    assert [r["subject"] for r in tied] == ["English", "GK"]


def test_aggregation_is_idempotent():
    sessions = [_s("2024-01-08", 40, "Quant"), _s("2024-01-09", 60, "Reasoning", start_time="06:00", end_time="07:00")]
    snapshot = copy.deepcopy(sessions)
    assert subject_totals(sessions) == subject_totals(snapshot)
    assert build_weekly_report(sessions) == build_weekly_report(sessions)
    assert bucket_by_hour(sessions) == bucket_by_hour(sessions)
    assert sessions == snapshot


# ── Hourly ────────────────────────────────────────────────────


def test_bucket_by_hour_splits_proportionally():
    s = _s("2024-01-10", 60, start_time="06:30", end_time="07:30")
    buckets = bucket_by_hour([s])
    assert len(buckets) == 24
    assert buckets[6]["label"] == "6:00 – 7:00"
    assert buckets[6]["total_minutes"] == 30.0
    assert buckets[7]["total_minutes"] == 30.0
    assert buckets[7]["subject_minutes"] == {"Quant": 30.0}
    assert buckets[6]["sessions"] == [s]
    assert buckets[8]["total_minutes"] == 0


def test_bucket_by_hour_half_hour_bins():
    s = _s("2024-01-10", 90, start_time="06:30", end_time="08:00")
    buckets = bucket_by_hour([s], 30)
    assert len(buckets) == 48
    assert buckets[13]["label"] == "6:30 – 7:00"
    assert [buckets[i]["total_minutes"] for i in (13, 14, 15)] == [30.0, 30.0, 30.0]


def test_bucket_by_hour_overnight_wraps():
    s = _s("2024-01-10", 45, "English", start_time="23:30", end_time="00:15")
    buckets = bucket_by_hour([s])
    assert buckets[23]["total_minutes"] == 30.0
    assert buckets[0]["total_minutes"] == 15.0
    assert sum(b["total_minutes"] for b in buckets) == pytest.approx(45)


def test_bucket_by_hour_zero_span_uses_start_bin():
    s = _s("2024-01-10", 20, start_time="10:00", end_time="10:00")
    buckets = bucket_by_hour([s])
    assert buckets[10]["total_minutes"] == 20


def test_bucket_by_hour_skips_sessions_without_times():
    buckets = bucket_by_hour([_s("2024-01-10", 60)])
    assert all(b["total_minutes"] == 0 for b in buckets)


def test_bucket_by_hour_keeps_identical_sessions_apart():
    a = _s("2024-01-10", 30, start_time="09:00", end_time="09:30")
    b = _s("2024-01-10", 30, start_time="09:00", end_time="09:30")
    buckets = bucket_by_hour([a, b])
    assert len(buckets[9]["sessions"]) == 2
    assert buckets[9]["total_minutes"] == 60.0


def test_bucket_by_hour_rejects_bad_bin():
    with pytest.raises(ValueError):
        bucket_by_hour([], 45)


def test_time_of_day_hotspots():
    sessions = [
        _s("2024-01-10", 60, start_time="06:00", end_time="07:00"),
        _s("2024-01-10", 90, start_time="18:00", end_time="19:30"),
    ]
    hot = time_of_day_hotspots(bucket_by_hour(sessions), limit=2)
    assert hot == [
        {"label": "6:00 – 7:00", "minutes": 60.0},
        {"label": "18:00 – 19:00", "minutes": 60.0},
    ]


# ── Weekly report ─────────────────────────────────────────────


def test_weekly_report_best_day_first_max_wins():
    sessions = [
        _s("2024-01-08", 40),
        _s("2024-01-09", 60),
        _s("2024-01-10", 60),
        _s("2024-01-10", 20, "GK"),
    ]
    report = build_weekly_report(sessions)
    quant = report["subject_totals"]["Quant"]
    assert quant["best_day"] == {"date": "2024-01-09", "minutes": 60}
    assert quant["total_minutes"] == 160
    assert quant["percentage"] == 89
    assert report["week_total"] == 180
    assert report["daily_breakdown"]["2024-01-10"]["subjects"] == ["Quant", "GK"]
    assert list(report["daily_breakdown"]) == ["2024-01-08", "2024-01-09", "2024-01-10"]


def test_weekly_report_respects_bounds():
    sessions = [_s("2024-01-07", 30), _s("2024-01-08", 40), _s("2024-01-15", 50)]
    report = build_weekly_report(sessions, "2024-01-08", "2024-01-14")
    assert report["week_total"] == 40


def test_session_stats_even_count_median():
    sessions = [_s("2024-01-08", 30), _s("2024-01-08", 60), _s("2024-01-09", 45), _s("2024-01-09", 90)]
    stats = session_stats(sessions)
    assert stats["count"] == 4
    assert stats["total_minutes"] == 225
    assert stats["avg_length"] == 56
    assert stats["median_length"] == 53
    assert stats["longest_session"] is sessions[3]


def test_session_stats_longest_tie_keeps_first():
    first = _s("2024-01-08", 90, "Quant")
    second = _s("2024-01-09", 90, "GK")
    stats = session_stats([first, _s("2024-01-08", 10), second])
    assert stats["longest_session"] is first
    assert stats["median_length"] == 90


# ── Chapters ──────────────────────────────────────────────────


def test_chapter_progress():
    assert chapter_progress(0, 600) == 0.0
    assert chapter_progress(2, 60) == 50.0
    assert chapter_progress(1, 90) == 100.0


def test_chapter_stats():
    chapter = Chapter(subject="Quant", chapter_name="Percentage", target_hours=5)
    sessions = [
        _s("2024-01-08", 60, chapter="Percentage"),
        _s("2024-01-10", 30, chapter="Percentage"),
        _s("2024-01-09", 45, chapter="Geometry"),
        _s("2024-01-09", 45, "Reasoning", chapter="Percentage"),
    ]
    stats = chapter_stats(chapter, sessions)
    assert stats["chapter_name"] == "Percentage"
    assert stats["hours_done"] == 1.5
    assert stats["progress_percent"] == 30.0
    assert stats["sessions_count"] == 2
    assert stats["last_studied_on"] == "2024-01-10"
    assert stats["history"][-1]["cumulative_minutes"] == 90


def test_top_chapters():
    sessions = [
        _s("2024-01-08", 60, chapter="Percentage"),
        _s("2024-01-08", 30, "GK"),
        _s("2024-01-09", 45, chapter="Percentage"),
    ]
    assert top_chapters(sessions) == [
        {"key": "Quant - Percentage", "minutes": 105},
        {"key": "GK - General", "minutes": 30},
    ]


# ── Goals & dashboard ─────────────────────────────────────────


def test_daily_goal_progress_bands():
    assert daily_goal_progress(200, 180)["percentage"] == 100
    assert daily_goal_progress(200, 180)["status"].startswith("Goal crushed")
    assert daily_goal_progress(126, 180)["status"] == "Almost there!"
    assert daily_goal_progress(90, 180)["color"] == "amber"
    assert daily_goal_progress(10, 180)["color"] == "red"
    assert daily_goal_progress(10, 0)["percentage"] == 0


def test_dashboard_stats():
    sessions = [
        _s("2024-01-10", 60),
        _s("2024-01-09", 30),
        _s("2024-01-04", 20),
        _s("2024-01-03", 100),
    ]
    mocks = [
        MockResult(date="2023-12-11", mock_name="A", score=100),
        MockResult(date="2023-12-10", mock_name="B", score=90),
    ]
    stats = dashboard_stats(sessions, mocks, "2024-01-10")
    assert stats == {
        "today_min": 60,
        "yesterday_min": 30,
        "week_min": 110,
        "avg_daily_min": 16,
        "mocks_30d": 1,
    }
