"""Workspace root, preferences, timezone and path helpers for ExamPrep."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from examprep.fileio import read_yaml
from examprep.models import UserPreferences

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Directory holding data/ and preferences.yaml."""
    return Path(
        os.environ.get("EXAMPREP_ROOT", str(Path.home() / "examprep"))
    ).expanduser().resolve()


def _root(root: Path | None) -> Path:
    return workspace_root() if root is None else root


# ── Path helpers ──────────────────────────────────────────────


def preferences_path(root: Path | None = None) -> Path:
    return _root(root) / "preferences.yaml"


def sessions_path(root: Path | None = None) -> Path:
    return _root(root) / "data" / "sessions.json"


def mocks_path(root: Path | None = None) -> Path:
    return _root(root) / "data" / "mocks.json"


def chapters_path(root: Path | None = None) -> Path:
    return _root(root) / "data" / "chapters.yaml"


# ── Preferences & clock ───────────────────────────────────────


def load_preferences(root: Path | None = None) -> UserPreferences:
    return UserPreferences.from_dict(read_yaml(preferences_path(root)))


def get_user_timezone(root: Path | None = None, prefs: UserPreferences | None = None) -> ZoneInfo:
    """User's timezone from preferences.yaml, defaulting to UTC."""
    if prefs is None:
        prefs = load_preferences(root)
    try:
        return ZoneInfo(prefs.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r in preferences, using UTC", prefs.timezone)
        return ZoneInfo("UTC")


def now_local(root: Path | None = None, prefs: UserPreferences | None = None) -> datetime:
    return datetime.now(get_user_timezone(root, prefs))


def today_str(root: Path | None = None, prefs: UserPreferences | None = None) -> str:
    """Today's date (YYYY-MM-DD) in the user's timezone."""
    return now_local(root, prefs).date().isoformat()
