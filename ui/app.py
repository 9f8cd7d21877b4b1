from __future__ import annotations

import logging
import os
import time
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from examprep import (
    InvalidDateFormat,
    UserPreferences,
    accuracy_feedback,
    add_mock,
    add_session,
    build_heatmap,
    build_weekly_report,
    bucket_by_hour,
    calculate_streak,
    chapter_stats,
    classify_subject_trends,
    daily_goal_progress,
    dashboard_stats,
    filter_between,
    filter_by_range,
    format_daily_summary,
    format_weekly_report,
    generate_insights,
    load_chapters,
    load_mocks,
    load_preferences,
    load_sessions,
    mock_summary,
    mock_trend,
    motivational_message,
    parse_date,
    resolve_range,
    save_preferences,
    section_analysis,
    session_stats,
    subject_totals,
    time_of_day_hotspots,
    today_str,
    weekly_insights,
    workspace_root,
)
from examprep.dates import shift
from examprep.logging_config import init_logging
from examprep.models import MockResult, StudySession

init_logging(
    os.environ.get("EXAMPREP_LOG_LEVEL", "INFO"),
    os.environ.get("EXAMPREP_LOG_FORMAT", "text"),
)
logger = logging.getLogger("examprep.ui")

app = FastAPI(title="ExamPrep API", version="0.1.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.time()
    response = await call_next(request)
    logger.info(
        "%s %s %s %.0fms",
        request.method,
        request.url.path,
        response.status_code,
        (time.time() - started) * 1000,
    )
    return response


# ── Helpers ───────────────────────────────────────────────────


def _jsonable(x: Any) -> Any:
    """Swap record values for their camelCase dicts, recursively."""
    if isinstance(x, (StudySession, MockResult)):
        return x.to_dict()
    if isinstance(x, dict):
        return {k: _jsonable(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_jsonable(v) for v in x]
    return x


def _context(today: str | None) -> tuple[UserPreferences, str]:
    """Preferences and the effective 'today' (query override or user's clock)."""
    root = workspace_root()
    prefs = load_preferences(root)
    if today is None:
        return prefs, today_str(root, prefs)
    try:
        return prefs, parse_date(today).isoformat()
    except InvalidDateFormat as e:
        raise HTTPException(status_code=400, detail=str(e))


def _check_date(value: str, name: str) -> str:
    try:
        return parse_date(value).isoformat()
    except InvalidDateFormat as e:
        raise HTTPException(status_code=400, detail=f"{name}: {e}")


# ── Endpoints ─────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/dashboard")
def api_dashboard(today: str | None = None) -> dict[str, Any]:
    """Everything the dashboard's first screen needs."""
    prefs, day = _context(today)
    root = workspace_root()
    sessions = load_sessions(root)
    mocks = load_mocks(root)

    stats = dashboard_stats(sessions, mocks, day)
    streak = calculate_streak(sessions, day)
    return _jsonable({
        "today": day,
        "stats": stats,
        "daily_goal": daily_goal_progress(stats["today_min"], prefs.daily_goal_minutes),
        "weekly_target_minutes": prefs.weekly_target_minutes,
        "streak": streak,
        "banner": motivational_message(
            stats["today_min"], stats["yesterday_min"], streak["current_streak"], prefs.daily_goal_minutes
        ),
        "insights": generate_insights(sessions, day),
        "subject_trends": classify_subject_trends(sessions, day),
        "mocks_trend": mock_trend(mocks),
    })


@app.get("/api/sessions")
def api_list_sessions(range_name: str = Query("Total", alias="range"), today: str | None = None) -> dict[str, Any]:
    _, day = _context(today)
    sessions = filter_by_range(load_sessions(workspace_root()), range_name, day)
    return _jsonable({"range": resolve_range(range_name, day), "sessions": sessions})


@app.post("/api/sessions")
def api_create_session(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    session, errors = add_session(payload, workspace_root())
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    return {"ok": True, "session": session.to_dict()}


@app.get("/api/mocks")
def api_list_mocks() -> dict[str, Any]:
    mocks = sorted(load_mocks(workspace_root()), key=lambda m: m.date, reverse=True)
    rows = [
        {**m.to_dict(), "feedback": accuracy_feedback(m.accuracy), "analysis": section_analysis(m)}
        for m in mocks
    ]
    return _jsonable({"mocks": rows, "summary": mock_summary(mocks)})


@app.post("/api/mocks")
def api_create_mock(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    mock, errors = add_mock(payload, workspace_root())
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    return {"ok": True, "mock": mock.to_dict()}


@app.get("/api/streak")
def api_streak(today: str | None = None) -> dict[str, Any]:
    _, day = _context(today)
    return calculate_streak(load_sessions(workspace_root()), day)


@app.get("/api/heatmap")
def api_heatmap(days: int | None = None, today: str | None = None) -> dict[str, Any]:
    prefs, day = _context(today)
    window = days if days is not None else prefs.heatmap_days
    if window < 1 or window > 366:
        raise HTTPException(status_code=400, detail="days must be between 1 and 366")
    return {"days": build_heatmap(load_sessions(workspace_root()), window, day)}


@app.get("/api/subjects")
def api_subjects(range_name: str | None = Query(None, alias="range"), today: str | None = None) -> dict[str, Any]:
    prefs, day = _context(today)
    range_name = range_name or prefs.subject_breakdown_range
    sessions = filter_by_range(load_sessions(workspace_root()), range_name, day)
    return {"range": resolve_range(range_name, day), "subjects": subject_totals(sessions)}


@app.get("/api/trends")
def api_trends(today: str | None = None) -> dict[str, Any]:
    _, day = _context(today)
    return {"trends": classify_subject_trends(load_sessions(workspace_root()), day)}


@app.get("/api/insights")
def api_insights(today: str | None = None) -> dict[str, Any]:
    _, day = _context(today)
    return {"insights": generate_insights(load_sessions(workspace_root()), day)}


@app.get("/api/hourly")
def api_hourly(
    date: str | None = None,
    bin_minutes: int | None = Query(None, alias="bin"),
    subject: str | None = None,
) -> dict[str, Any]:
    """Hour-of-day breakdown for one day, optionally for a single subject."""
    prefs, day = _context(date)
    if bin_minutes is None:
        bin_minutes = prefs.hourly_bin_minutes
    sessions = [s for s in load_sessions(workspace_root()) if s.date == day]
    if subject and subject != "All":
        sessions = [s for s in sessions if s.subject == subject]
    try:
        buckets = bucket_by_hour(sessions, bin_minutes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _jsonable({"date": day, "buckets": buckets, "hotspots": time_of_day_hotspots(buckets)})


@app.get("/api/chapters")
def api_chapters(subject: str | None = None) -> dict[str, Any]:
    root = workspace_root()
    sessions = load_sessions(root)
    chapters = [c for c in load_chapters(root) if not subject or c.subject == subject]
    return {"chapters": [chapter_stats(c, sessions) for c in chapters]}


@app.get("/api/report/weekly", response_class=PlainTextResponse)
def api_weekly_report(start: str | None = None, end: str | None = None, today: str | None = None) -> PlainTextResponse:
    """Plain-text summary of the seven days ending today (or an explicit span)."""
    prefs, day = _context(today)
    end_date = _check_date(end, "end") if end else day
    start_date = _check_date(start, "start") if start else shift(end_date, -6)
    sessions = filter_between(load_sessions(workspace_root()), start_date, end_date)
    text = format_weekly_report(sessions, start_date, end_date, prefs.daily_goal_minutes)
    tips = weekly_insights(build_weekly_report(sessions), prefs.daily_goal_minutes)
    if tips:
        text += "\nINSIGHTS:\n" + "".join(f"- {t}\n" for t in tips)
    return PlainTextResponse(text)


@app.get("/api/report/daily", response_class=PlainTextResponse)
def api_daily_report(date: str | None = None) -> PlainTextResponse:
    _, day = _context(date)
    return PlainTextResponse(format_daily_summary(load_sessions(workspace_root()), day))


@app.get("/api/report/stats")
def api_session_stats(start: str, end: str) -> dict[str, Any]:
    start_date = _check_date(start, "start")
    end_date = _check_date(end, "end")
    sessions = filter_between(load_sessions(workspace_root()), start_date, end_date)
    return _jsonable(session_stats(sessions))


@app.get("/api/preferences")
def api_get_preferences() -> dict[str, Any]:
    return load_preferences(workspace_root()).to_dict()


@app.put("/api/preferences")
def api_update_preferences(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    root = workspace_root()
    merged = {**load_preferences(root).to_dict(), **payload}
    prefs = UserPreferences.from_dict(merged)
    save_preferences(prefs, root)
    return {"ok": True, "preferences": prefs.to_dict()}
