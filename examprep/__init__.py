"""ExamPrep core library — study analytics, record model and workspace store.

Public API re-exports for convenient imports:
    from examprep import calculate_streak, subject_totals, format_weekly_report, ...
"""

# Models
from examprep.models import (
    StudySession,
    MockResult,
    Chapter,
    UserPreferences,
    derive_marks,
)

# Dates
from examprep.dates import (
    InvalidDateFormat,
    parse_date,
    is_iso_date,
    minutes_between,
)

# Ranges
from examprep.ranges import (
    resolve_range,
    filter_by_range,
    filter_between,
)

# Streaks
from examprep.streaks import calculate_streak

# Aggregation
from examprep.aggregation import (
    DAILY_GOAL_MINUTES,
    daily_totals,
    cumulative_series,
    bucket_by_hour,
    time_of_day_hotspots,
    subject_totals,
    build_weekly_report,
    session_stats,
    chapter_progress,
    chapter_stats,
    top_chapters,
    daily_goal_progress,
    dashboard_stats,
)

# Mocks
from examprep.mocks import (
    accuracy_feedback,
    section_analysis,
    mock_summary,
    mock_trend,
)

# Trends
from examprep.trends import classify_subject_trends

# Heatmap
from examprep.heatmap import build_heatmap, intensity_level

# Insights
from examprep.insights import (
    generate_insights,
    motivational_message,
    weekly_insights,
)

# Reports
from examprep.report import (
    format_weekly_report,
    format_daily_summary,
    format_session_line,
    format_minutes,
)

# Workspace & store
from examprep.workspace import (
    workspace_root,
    load_preferences,
    today_str,
)
from examprep.store import (
    validate_session,
    validate_mock,
    load_sessions,
    load_mocks,
    load_chapters,
    add_session,
    add_mock,
    save_preferences,
)
