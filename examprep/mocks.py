"""Mock-test analytics: per-mock section analysis and cross-mock summaries."""

from __future__ import annotations

from typing import Any, Iterable

from examprep.models import MockResult


def accuracy_feedback(accuracy: float) -> str:
    if accuracy > 90:
        return "Excellent accuracy! Focus on speed now."
    if accuracy < 75:
        return "Accuracy is low. Avoid guessing."
    return "Balanced performance."


def section_analysis(mock: MockResult) -> dict[str, Any]:
    """Best and weakest section among those with a positive score."""
    scored = [(name, score) for name, score in mock.sectional_scores.items() if score > 0]
    if not scored:
        return {"sections": dict(mock.sectional_scores), "best": None, "weakest": None}
    ranked = sorted(scored, key=lambda kv: kv[1], reverse=True)
    return {
        "sections": dict(mock.sectional_scores),
        "best": {"subject": ranked[0][0], "score": ranked[0][1]},
        "weakest": {"subject": ranked[-1][0], "score": ranked[-1][1]},
    }


def mock_trend(mocks: Iterable[MockResult] | None) -> list[dict[str, Any]]:
    """Score series, oldest first."""
    ordered = sorted(mocks or [], key=lambda m: m.date)
    return [{"date": m.date, "mock_name": m.mock_name, "score": m.score} for m in ordered]


def mock_summary(mocks: Iterable[MockResult] | None) -> dict[str, Any]:
    items = list(mocks or [])
    if not items:
        return {
            "count": 0,
            "avg_score": 0.0,
            "best_score": None,
            "avg_accuracy": 0.0,
            "latest": None,
            "section_averages": {},
        }

    best = items[0]
    for m in items[1:]:
        if m.score > best.score:
            best = m
    latest = max(items, key=lambda m: m.date)

    section_sum: dict[str, float] = {}
    section_count: dict[str, int] = {}
    for m in items:
        for subject, score in m.sectional_scores.items():
            section_sum[subject] = section_sum.get(subject, 0.0) + score
            section_count[subject] = section_count.get(subject, 0) + 1

    return {
        "count": len(items),
        "avg_score": round(sum(m.score for m in items) / len(items), 2),
        "best_score": {"date": best.date, "mock_name": best.mock_name, "score": best.score},
        "avg_accuracy": round(sum(m.accuracy for m in items) / len(items), 1),
        "latest": latest,
        "section_averages": {
            subject: round(section_sum[subject] / section_count[subject], 2)
            for subject in section_sum
        },
    }
