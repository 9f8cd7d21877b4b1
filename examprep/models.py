"""Typed dataclasses for the ExamPrep data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python; snake_case keys
written by older exports are accepted too. Unknown keys are ignored;
missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from examprep.dates import minutes_between
from examprep.mathutil import round_half_up, safe_float, safe_int

RECOMMENDED_SUBJECTS = ("Quant", "Reasoning", "English", "GK", "Mock")
CHAPTER_STATUSES = ("Not Started", "Learning", "Revising", "Strong")
RANGE_NAMES = ("Daily", "Weekly", "Monthly", "Total")

# SSC marking scheme
MARKS_PER_CORRECT = 2.0
NEGATIVE_PER_WRONG = 0.5

# Legacy flat sectional score columns -> subject
SECTIONAL_COLUMNS = {
    "qa_score": "Quant",
    "reasoning_score": "Reasoning",
    "english_score": "English",
    "gk_score": "GK",
}


def _pick(d: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present, non-None value among *keys*."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _text(d: dict[str, Any], *keys: str) -> str:
    return str(_pick(d, *keys, default="")).strip()


# ── Study Session ─────────────────────────────────────────────


@dataclass(frozen=True)
class StudySession:
    """One logged block of study time."""

    date: str = ""
    start_time: str = ""
    end_time: str = ""
    duration_minutes: int = 0
    subject: str = ""
    chapter: str = ""
    topic_type: str = ""
    source: str = ""
    questions_solved: int = 0
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> StudySession:
        if not d or not isinstance(d, dict):
            return cls()
        start = _text(d, "startTime", "start_time")
        end = _text(d, "endTime", "end_time")
        raw = _pick(d, "durationMinutes", "duration_minutes", "duration_min")
        if raw is not None and raw != "":
            duration = max(0, safe_int(raw))
        else:
            duration = minutes_between(start, end) or 0
        return cls(
            date=_text(d, "date"),
            start_time=start,
            end_time=end,
            duration_minutes=duration,
            subject=_text(d, "subject"),
            chapter=_text(d, "chapter"),
            topic_type=_text(d, "topicType", "topic_type"),
            source=_text(d, "source"),
            questions_solved=max(0, safe_int(_pick(d, "questionsSolved", "questions_solved"))),
            notes=_text(d, "notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "durationMinutes": self.duration_minutes,
            "subject": self.subject,
            "questionsSolved": self.questions_solved,
        }
        if self.chapter:
            d["chapter"] = self.chapter
        if self.topic_type:
            d["topicType"] = self.topic_type
        if self.source:
            d["source"] = self.source
        if self.notes:
            d["notes"] = self.notes
        return d

    @property
    def subject_label(self) -> str:
        return self.subject or "Unknown"


# ── Mock Result ───────────────────────────────────────────────


def derive_marks(score: float, attempts: int) -> tuple[int, int]:
    """Back out (correct, wrong) from a net score under +2/-0.5 marking.

    score = 2C - 0.5(A - C)  =>  C = (score + 0.5A) / 2.5
    """
    if attempts <= 0:
        return 0, 0
    per_q = MARKS_PER_CORRECT + NEGATIVE_PER_WRONG
    correct = max(0, round_half_up((score + NEGATIVE_PER_WRONG * attempts) / per_q))
    wrong = max(0, attempts - correct)
    return correct, wrong


@dataclass(frozen=True)
class MockResult:
    """A simulated exam attempt."""

    date: str = ""
    mock_name: str = ""
    platform: str = ""
    tier: str = ""
    max_marks: float = 0.0
    score: float = 0.0
    time_taken_min: int = 0
    attempts_total: int = 0
    correct_total: int = 0
    wrong_total: int = 0
    negative_marks: float = 0.0
    accuracy: float = 0.0
    sectional_scores: dict[str, float] = field(default_factory=dict)
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MockResult:
        if not d or not isinstance(d, dict):
            return cls()
        score = safe_float(_pick(d, "score"))
        attempts = max(0, safe_int(_pick(d, "attemptsTotal", "attempts_total")))
        correct = _pick(d, "correctTotal", "correct_total")
        wrong = _pick(d, "wrongTotal", "wrong_total")
        if correct is None or wrong is None or correct == "" or wrong == "":
            correct, wrong = derive_marks(score, attempts)
        else:
            correct, wrong = max(0, safe_int(correct)), max(0, safe_int(wrong))

        sectional: dict[str, float] = {}
        raw_sections = _pick(d, "sectionalScores", "sectional_scores")
        if not isinstance(raw_sections, dict):
            raw_sections = {}
        for subject, value in raw_sections.items():
            sectional[str(subject)] = safe_float(value)
        for column, subject in SECTIONAL_COLUMNS.items():
            if d.get(column) not in (None, "") and subject not in sectional:
                sectional[subject] = safe_float(d[column])

        return cls(
            date=_text(d, "date"),
            mock_name=_text(d, "mockName", "mock_name"),
            platform=_text(d, "platform"),
            tier=_text(d, "tier"),
            max_marks=safe_float(_pick(d, "maxMarks", "max_marks")),
            score=score,
            time_taken_min=max(0, safe_int(_pick(d, "timeTakenMin", "time_taken_min"))),
            attempts_total=attempts,
            correct_total=correct,
            wrong_total=wrong,
            negative_marks=wrong * NEGATIVE_PER_WRONG,
            accuracy=(correct / attempts * 100) if attempts > 0 else 0.0,
            sectional_scores=sectional,
            notes=_text(d, "notes"),
        )

    @property
    def percent_score(self) -> float:
        if self.max_marks <= 0:
            return 0.0
        return self.score / self.max_marks * 100

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "date": self.date,
            "mockName": self.mock_name,
            "platform": self.platform,
            "tier": self.tier,
            "maxMarks": self.max_marks,
            "score": self.score,
            "timeTakenMin": self.time_taken_min,
            "attemptsTotal": self.attempts_total,
            "correctTotal": self.correct_total,
            "wrongTotal": self.wrong_total,
            "negativeMarks": self.negative_marks,
            "accuracy": round(self.accuracy, 1),
            "percentScore": round(self.percent_score, 1),
        }
        if self.sectional_scores:
            d["sectionalScores"] = dict(self.sectional_scores)
        if self.notes:
            d["notes"] = self.notes
        return d


# ── Chapter ───────────────────────────────────────────────────


@dataclass
class Chapter:
    subject: str = ""
    chapter_name: str = ""
    target_hours: float = 0.0
    status: str = "Not Started"  # Not Started, Learning, Revising, Strong
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Chapter:
        if not d or not isinstance(d, dict):
            return cls()
        status = _text(d, "status") or "Not Started"
        if status not in CHAPTER_STATUSES:
            status = "Not Started"
        return cls(
            subject=_text(d, "subject"),
            chapter_name=_text(d, "chapterName", "chapter_name", "name"),
            target_hours=max(0.0, safe_float(_pick(d, "targetHours", "target_hours"))),
            status=status,
            notes=_text(d, "notes"),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "subject": self.subject,
            "chapter_name": self.chapter_name,
            "target_hours": self.target_hours,
            "status": self.status,
        }
        if self.notes:
            d["notes"] = self.notes
        return d


# ── Preferences ───────────────────────────────────────────────


@dataclass
class UserPreferences:
    """Dashboard settings, passed explicitly into the functions that need them."""

    daily_goal_minutes: int = 180
    weekly_target_minutes: int = 1200
    study_trend_range: str = "Total"
    subject_breakdown_range: str = "Total"
    heatmap_days: int = 30
    hourly_bin_minutes: int = 60
    timezone: str = "UTC"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> UserPreferences:
        if not d or not isinstance(d, dict):
            return cls()
        defaults = cls()
        trend_range = str(d.get("study_trend_range", defaults.study_trend_range))
        subject_range = str(d.get("subject_breakdown_range", defaults.subject_breakdown_range))
        bin_minutes = safe_int(d.get("hourly_bin_minutes"), defaults.hourly_bin_minutes)
        return cls(
            daily_goal_minutes=max(1, safe_int(d.get("daily_goal_minutes"), defaults.daily_goal_minutes)),
            weekly_target_minutes=max(0, safe_int(d.get("weekly_target_minutes"), defaults.weekly_target_minutes)),
            study_trend_range=trend_range if trend_range in RANGE_NAMES else "Total",
            subject_breakdown_range=subject_range if subject_range in RANGE_NAMES else "Total",
            heatmap_days=max(1, safe_int(d.get("heatmap_days"), defaults.heatmap_days)),
            hourly_bin_minutes=bin_minutes if bin_minutes in (30, 60) else 60,
            timezone=str(d.get("timezone", defaults.timezone)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "daily_goal_minutes": self.daily_goal_minutes,
            "weekly_target_minutes": self.weekly_target_minutes,
            "study_trend_range": self.study_trend_range,
            "subject_breakdown_range": self.subject_breakdown_range,
            "heatmap_days": self.heatmap_days,
            "hourly_bin_minutes": self.hourly_bin_minutes,
            "timezone": self.timezone,
        }
