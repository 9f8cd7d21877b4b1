"""Shared test fixtures for ExamPrep tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with standard structure."""
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    # Preferences
    prefs = {
        "daily_goal_minutes": 120,
        "weekly_target_minutes": 900,
        "heatmap_days": 14,
        "hourly_bin_minutes": 60,
        "timezone": "UTC",
    }
    (root / "preferences.yaml").write_text(
        yaml.dump(prefs, default_flow_style=False), encoding="utf-8"
    )

    # Sessions
    sessions = {
        "sessions": [
            {
                "date": "2024-01-08",
                "startTime": "06:30",
                "endTime": "07:30",
                "durationMinutes": 60,
                "subject": "Quant",
                "chapter": "Percentage",
                "questionsSolved": 25,
            },
            {
                "date": "2024-01-09",
                "startTime": "18:00",
                "endTime": "19:30",
                "subject": "Reasoning",
                "chapter": "Puzzles",
                "notes": "Seating arrangement sets",
            },
            {
                "date": "2024-01-10",
                "startTime": "23:30",
                "endTime": "00:15",
                "subject": "English",
                "chapter": "Vocabulary",
            },
            # malformed: skipped on load
            {"date": "10/01/2024", "durationMinutes": 30, "subject": "GK"},
        ]
    }
    (root / "data" / "sessions.json").write_text(
        json.dumps(sessions, indent=2), encoding="utf-8"
    )

    # Mocks
    mocks = {
        "mocks": [
            {
                "date": "2024-01-07",
                "mockName": "Tier 1 Full Mock 3",
                "platform": "Testbook",
                "tier": "Tier 1",
                "maxMarks": 200,
                "score": 145.5,
                "attemptsTotal": 85,
                "qa_score": 40,
                "reasoning_score": 45,
            }
        ]
    }
    (root / "data" / "mocks.json").write_text(json.dumps(mocks, indent=2), encoding="utf-8")

    # Chapters
    chapters = {
        "chapters": [
            {"subject": "Quant", "chapter_name": "Percentage", "target_hours": 5, "status": "Learning"},
            {"subject": "Reasoning", "chapter_name": "Puzzles", "target_hours": 0},
            {"subject": "GK", "chapter_name": "Polity", "target_hours": 6},
        ]
    }
    (root / "data" / "chapters.yaml").write_text(
        yaml.dump(chapters, default_flow_style=False), encoding="utf-8"
    )

    # Set env var
    os.environ["EXAMPREP_ROOT"] = str(root)
    yield root
    # Cleanup
    if "EXAMPREP_ROOT" in os.environ:
        del os.environ["EXAMPREP_ROOT"]
