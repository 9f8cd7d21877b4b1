"""Boundary validation and the file-backed record store.

Raw dicts coming from the API or from disk are checked here before they
become StudySession / MockResult values; the analytics modules never
validate again.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from examprep.dates import is_iso_date, parse_hhmm
from examprep.fileio import read_record_list, read_yaml, write_json_atomic, write_yaml_atomic
from examprep.models import Chapter, MockResult, StudySession, UserPreferences
from examprep.workspace import chapters_path, mocks_path, preferences_path, sessions_path

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


def _first(d: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if d.get(k) not in (None, ""):
            return d[k]
    return None


def _is_number(value: Any) -> bool:
    """Finite int, float or numeric string. Booleans, inf and nan are rejected."""
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError, OverflowError):
        return False


def _check_date(d: dict[str, Any], errors: list[str]) -> None:
    day = d.get("date")
    if not day:
        errors.append("Missing required field: date")
    elif not is_iso_date(str(day)):
        errors.append(f"Invalid date format: {day!r} (expected YYYY-MM-DD)")


def validate_session(d: dict[str, Any]) -> list[str]:
    """Validate a raw session dict and return list of errors (empty if valid)."""
    errors: list[str] = []
    _check_date(d, errors)
    if not str(d.get("subject") or "").strip():
        errors.append("Missing required field: subject")

    start = _first(d, "startTime", "start_time")
    end = _first(d, "endTime", "end_time")
    for label, value in (("startTime", start), ("endTime", end)):
        if value is not None and parse_hhmm(str(value)) is None:
            errors.append(f"{label} must be HH:MM, got {value!r}")

    duration = _first(d, "durationMinutes", "duration_minutes", "duration_min")
    if duration is None:
        if start is None or end is None:
            errors.append("Provide durationMinutes or both startTime and endTime")
    elif not _is_number(duration) or float(duration) < 0:
        errors.append("durationMinutes must be a non-negative number")

    questions = _first(d, "questionsSolved", "questions_solved")
    if questions is not None and (not _is_number(questions) or float(questions) < 0):
        errors.append("questionsSolved must be a non-negative number")
    return errors


def validate_mock(d: dict[str, Any]) -> list[str]:
    """Validate a raw mock dict and return list of errors (empty if valid)."""
    errors: list[str] = []
    _check_date(d, errors)
    if not str(_first(d, "mockName", "mock_name") or "").strip():
        errors.append("Missing required field: mockName")

    score = d.get("score")
    if score is None or score == "":
        errors.append("Missing required field: score")
    elif not _is_number(score):
        errors.append("score must be numeric")

    for label, keys in (
        ("maxMarks", ("maxMarks", "max_marks")),
        ("attemptsTotal", ("attemptsTotal", "attempts_total")),
        ("timeTakenMin", ("timeTakenMin", "time_taken_min")),
    ):
        value = _first(d, *keys)
        if value is not None and (not _is_number(value) or float(value) < 0):
            errors.append(f"{label} must be a non-negative number")

    sections = _first(d, "sectionalScores", "sectional_scores")
    if sections is not None and not isinstance(sections, dict):
        errors.append("sectionalScores must be an object")
    elif sections:
        bad = [str(k) for k, v in sections.items() if v not in (None, "") and not _is_number(v)]
        if bad:
            errors.append(f"sectionalScores must be numeric: {', '.join(bad)}")
    return errors


# ── Sessions ──────────────────────────────────────────────────


def _load(path: Path, key: str, validate, build) -> list:
    records = []
    for i, raw in enumerate(read_record_list(path, key)):
        errors = validate(raw)
        if errors:
            logger.warning("Skipping %s[%d] in %s: %s", key, i, path.name, "; ".join(errors))
            continue
        records.append(build(raw))
    return records


def load_sessions(root: Path | None = None) -> list[StudySession]:
    return _load(sessions_path(root), "sessions", validate_session, StudySession.from_dict)


def add_session(data: dict[str, Any], root: Path | None = None) -> tuple[StudySession | None, list[str]]:
    """Validate and append a session. Returns (session, errors)."""
    errors = validate_session(data)
    if errors:
        return None, errors
    session = StudySession.from_dict(data)
    path = sessions_path(root)
    raw = read_record_list(path, "sessions")
    raw.append(session.to_dict())
    write_json_atomic(path, {"sessions": raw})
    logger.info("Logged %d min of %s on %s", session.duration_minutes, session.subject, session.date)
    return session, []


# ── Mocks ─────────────────────────────────────────────────────


def load_mocks(root: Path | None = None) -> list[MockResult]:
    return _load(mocks_path(root), "mocks", validate_mock, MockResult.from_dict)


def add_mock(data: dict[str, Any], root: Path | None = None) -> tuple[MockResult | None, list[str]]:
    """Validate and append a mock result. Returns (mock, errors)."""
    errors = validate_mock(data)
    if errors:
        return None, errors
    mock = MockResult.from_dict(data)
    path = mocks_path(root)
    raw = read_record_list(path, "mocks")
    raw.append(mock.to_dict())
    write_json_atomic(path, {"mocks": raw})
    logger.info("Logged mock %r on %s: %s/%s", mock.mock_name, mock.date, mock.score, mock.max_marks)
    return mock, []


# ── Chapters & preferences ────────────────────────────────────


def load_chapters(root: Path | None = None) -> list[Chapter]:
    data = read_yaml(chapters_path(root))
    return [Chapter.from_dict(c) for c in (data.get("chapters") or []) if isinstance(c, dict)]


def save_preferences(prefs: UserPreferences, root: Path | None = None) -> None:
    write_yaml_atomic(preferences_path(root), prefs.to_dict())
