"""Tests for examprep/ranges.py — named range resolution and filtering."""

from dataclasses import dataclass

from examprep.models import StudySession
from examprep.ranges import filter_between, filter_by_range, resolve_range


def _s(day, minutes=30):
    return StudySession(date=day, duration_minutes=minutes, subject="Quant")


def test_daily_range():
    r = resolve_range("Daily", "2024-01-10")
    assert r["start_date_inclusive"] == "2024-01-10"
    assert r["end_date_inclusive"] == "2024-01-10"
    assert r["label"] == "Daily - Jan 10"


def test_weekly_range_starts_monday():
    # 2024-01-10 is a Wednesday
    r = resolve_range("Weekly", "2024-01-10")
    assert r["start_date_inclusive"] == "2024-01-08"
    assert r["end_date_inclusive"] == "2024-01-14"
    assert r["label"] == "Jan 8 - Jan 14"


def test_weekly_range_on_sunday_goes_back_six_days():
    r = resolve_range("Weekly", "2024-01-14")
    assert r["start_date_inclusive"] == "2024-01-08"


def test_weekly_range_on_monday_is_today():
    r = resolve_range("Weekly", "2024-01-08")
    assert r["start_date_inclusive"] == "2024-01-08"


def test_monthly_range():
    r = resolve_range("Monthly", "2024-02-15")
    assert r["start_date_inclusive"] == "2024-02-01"
    assert r["end_date_inclusive"] == "2024-02-29"
    assert r["label"] == "Feb 1 - Feb 29"


def test_total_and_unknown_ranges():
    for name in ("Total", "Yearly", ""):
        r = resolve_range(name, "2024-01-10")
        assert r["range"] == "Total"
        assert r["start_date_inclusive"] is None
        assert r["label"] == "All Time"


def test_filter_by_range():
    sessions = [_s("2023-12-31"), _s("2024-01-07"), _s("2024-01-08"), _s("2024-01-10")]
    assert [s.date for s in filter_by_range(sessions, "Weekly", "2024-01-10")] == ["2024-01-08", "2024-01-10"]
    assert [s.date for s in filter_by_range(sessions, "Daily", "2024-01-10")] == ["2024-01-10"]
    assert len(filter_by_range(sessions, "Monthly", "2024-01-10")) == 3
    assert filter_by_range(sessions, "Total", "2024-01-10") == sessions


def test_filtered_subset_of_total():
    sessions = [_s("2024-01-%02d" % d) for d in range(1, 20)]
    total = filter_by_range(sessions, "Total", "2024-01-19")
    for name in ("Daily", "Weekly", "Monthly"):
        subset = filter_by_range(sessions, name, "2024-01-19")
        assert all(s in total for s in subset)


def test_filter_by_range_none_input():
    assert filter_by_range(None, "Weekly", "2024-01-10") == []


def test_filter_works_on_any_dated_record():
    @dataclass
    class Row:
        date: str

    rows = [Row("2024-01-01"), Row("2024-01-10")]
    assert filter_by_range(rows, "Daily", "2024-01-10") == [rows[1]]


def test_filter_between_inclusive():
    sessions = [_s("2024-01-07"), _s("2024-01-08"), _s("2024-01-14"), _s("2024-01-15")]
    kept = filter_between(sessions, "2024-01-08", "2024-01-14")
    assert [s.date for s in kept] == ["2024-01-08", "2024-01-14"]
