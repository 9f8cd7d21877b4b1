"""Tests for examprep/mocks.py — mock feedback and summaries."""

from examprep.mocks import accuracy_feedback, mock_summary, mock_trend, section_analysis
from examprep.models import MockResult


def _m(day, score, **kw):
    return MockResult.from_dict({"date": day, "mockName": f"Mock {day}", "maxMarks": 200, "score": score, **kw})


def test_accuracy_feedback_bands():
    assert accuracy_feedback(95) == "Excellent accuracy! Focus on speed now."
    assert accuracy_feedback(90) == "Balanced performance."
    assert accuracy_feedback(75) == "Balanced performance."
    assert accuracy_feedback(74.9) == "Accuracy is low. Avoid guessing."


def test_section_analysis_ignores_zero_sections():
    m = _m("2024-01-07", 120, sectionalScores={"Quant": 40, "Reasoning": 45, "English": 35, "GK": 0})
    result = section_analysis(m)
    assert result["best"] == {"subject": "Reasoning", "score": 45.0}
    assert result["weakest"] == {"subject": "English", "score": 35.0}


def test_section_analysis_without_sections():
    result = section_analysis(_m("2024-01-07", 120))
    assert result["best"] is None
    assert result["weakest"] is None


def test_mock_trend_sorted_by_date():
    trend = mock_trend([_m("2024-01-14", 150), _m("2024-01-07", 120)])
    assert [t["date"] for t in trend] == ["2024-01-07", "2024-01-14"]
    assert trend[0]["score"] == 120.0


def test_mock_summary():
    mocks = [
        _m("2024-01-07", 120, attemptsTotal=70, qa_score=30),
        _m("2024-01-14", 150, attemptsTotal=80, qa_score=40),
    ]
    summary = mock_summary(mocks)
    assert summary["count"] == 2
    assert summary["avg_score"] == 135.0
    assert summary["best_score"]["score"] == 150.0
    assert summary["latest"] is mocks[1]
    assert summary["section_averages"] == {"Quant": 35.0}


def test_mock_summary_empty():
    summary = mock_summary([])
    assert summary["count"] == 0
    assert summary["best_score"] is None
