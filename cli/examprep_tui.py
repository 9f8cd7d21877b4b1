#!/usr/bin/env python3
"""ExamPrep TUI — terminal dashboard, weekly report and session logger powered by Textual."""

from __future__ import annotations

import sys
from typing import Any

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from examprep import (
    add_session,
    build_heatmap,
    calculate_streak,
    classify_subject_trends,
    daily_goal_progress,
    dashboard_stats,
    filter_between,
    filter_by_range,
    format_minutes,
    format_weekly_report,
    generate_insights,
    load_mocks,
    load_preferences,
    load_sessions,
    motivational_message,
    subject_totals,
    today_str,
    workspace_root,
)
from examprep.dates import shift
from examprep.heatmap import heatmap_weeks
from examprep.models import RECOMMENDED_SUBJECTS

HEAT_GLYPHS = "·░▒▓█"

# (session key, placeholder)
LOG_FIELDS = (
    ("date", "Date (YYYY-MM-DD)"),
    ("subject", f"Subject ({', '.join(RECOMMENDED_SUBJECTS)})"),
    ("startTime", "Start HH:MM"),
    ("endTime", "End HH:MM"),
    ("durationMinutes", "Minutes (optional with start/end)"),
    ("chapter", "Chapter"),
    ("questionsSolved", "Questions solved"),
    ("notes", "Notes"),
)

CSS = """
Screen {
    background: $surface;
}

#header-bar {
    height: 3;
    background: $primary-background;
    color: $text;
    content-align: center middle;
    padding: 0 2;
}

#dashboard-view {
    height: 1fr;
}

#left-pane {
    width: 1fr;
    min-width: 30;
    border-right: tall $primary-background-darken-2;
    padding: 0 1;
}

#right-pane {
    width: 1fr;
    min-width: 30;
    padding: 0 1;
}

#report-view, #log-view {
    height: 1fr;
    padding: 0 2;
}

.section-title {
    text-style: bold;
    color: $accent;
    margin: 1 0 0 0;
}

#subject-table {
    height: auto;
    max-height: 12;
}

#log-view Input {
    margin: 0 0 1 0;
}
"""


def heatmap_text(cells: list[dict[str, Any]]) -> str:
    """One row per week: 'MM-DD  ░ ▒ · █ ...'."""
    rows = []
    for week in heatmap_weeks(cells):
        glyphs = " ".join(HEAT_GLYPHS[c["intensity_level"]] for c in week)
        rows.append(f"{week[0]['date'][5:]}  {glyphs}")
    return "\n".join(rows)


# ── Main app ───────────────────────────────────────────────────


class ExamPrepApp(App):
    """ExamPrep — study dashboard in the terminal."""

    TITLE = "ExamPrep"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("d", "show_dashboard", "Dashboard"),
        Binding("w", "show_report", "Weekly"),
        Binding("l", "show_log", "Log Session"),
        Binding("ctrl+s", "save_session", "Save"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit_app", "Quit"),
    ]

    current_view: reactive[str] = reactive("dashboard")

    def __init__(self, today: str | None = None) -> None:
        super().__init__()
        self._today_override = today
        self.today = today or ""
        self.dashboard: dict[str, Any] = {}
        self.report_text = ""

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Only offer Save while the log form is showing."""
        if action == "save_session":
            return True if self.current_view == "log" else None
        return True

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="header-bar", markup=False)
        yield Horizontal(
            VerticalScroll(
                Label("Subjects", classes="section-title"),
                DataTable(id="subject-table"),
                Label("Insights", classes="section-title"),
                Static(id="insights", markup=False),
                id="left-pane",
            ),
            VerticalScroll(
                Label("Heatmap", classes="section-title"),
                Static(id="heatmap", markup=False),
                Label("Trends", classes="section-title"),
                Static(id="trends", markup=False),
                id="right-pane",
            ),
            id="dashboard-view",
        )
        yield VerticalScroll(Static(id="report", markup=False), id="report-view")
        yield VerticalScroll(
            Label("Log Session", classes="section-title"),
            *[Input(placeholder=label, id=f"log-{key}") for key, label in LOG_FIELDS],
            Button("Save", id="log-save", variant="primary"),
            id="log-view",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._load_data()
        self.query_one("#log-date", Input).value = self.today
        self._switch_to("dashboard")

    def _load_data(self) -> None:
        """Reload records from the workspace and recompute every panel."""
        root = workspace_root()
        prefs = load_preferences(root)
        self.today = self._today_override or today_str(root, prefs)
        sessions = load_sessions(root)
        mocks = load_mocks(root)

        stats = dashboard_stats(sessions, mocks, self.today)
        streak = calculate_streak(sessions, self.today)
        self.dashboard = {
            "stats": stats,
            "streak": streak,
            "goal": daily_goal_progress(stats["today_min"], prefs.daily_goal_minutes),
            "banner": motivational_message(
                stats["today_min"], stats["yesterday_min"], streak["current_streak"], prefs.daily_goal_minutes
            ),
            "subjects": subject_totals(filter_by_range(sessions, prefs.subject_breakdown_range, self.today)),
            "insights": generate_insights(sessions, self.today),
            "trends": classify_subject_trends(sessions, self.today),
            "heatmap": build_heatmap(sessions, prefs.heatmap_days, self.today),
        }

        start = shift(self.today, -6)
        week = filter_between(sessions, start, self.today)
        self.report_text = format_weekly_report(week, start, self.today, prefs.daily_goal_minutes)
        self._render_panels()

    def _render_panels(self) -> None:
        data = self.dashboard
        stats, streak, goal, banner = data["stats"], data["streak"], data["goal"], data["banner"]
        self.sub_title = f"{self.today} | Streak: {streak['current_streak']}d (best {streak['best_streak']}d)"
        self.query_one("#header-bar", Static).update(
            f"{banner['icon']} {banner['message']}\n"
            f"Today {format_minutes(stats['today_min'])} ({goal['percentage']}% of goal) | "
            f"Last 7 days {format_minutes(stats['week_min'])} | Mocks (30d): {stats['mocks_30d']}"
        )

        table = self.query_one("#subject-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Subject", "Time", "Share", "Sessions")
        for row in data["subjects"]:
            table.add_row(
                row["subject"],
                format_minutes(row["minutes"]),
                f"{row['percentage']}%",
                str(row["session_count"]),
            )

        self.query_one("#insights", Static).update(
            "\n".join(f"{i['icon']} {i['text']}" for i in data["insights"])
        )
        self.query_one("#trends", Static).update(
            "\n".join(
                f"{t['icon']} {subject}: {t['status']} ({t['change_percent']:+.1f}%)"
                for subject, t in data["trends"].items()
            ) or "No sessions in the last two weeks"
        )
        self.query_one("#heatmap", Static).update(heatmap_text(data["heatmap"]))
        self.query_one("#report", Static).update(self.report_text)

    # ── Logging sessions ───────────────────────────────────────

    @on(Button.Pressed, "#log-save")
    def _on_save_pressed(self, event: Button.Pressed) -> None:
        self.action_save_session()

    def action_save_session(self) -> None:
        """Validate the form and append the session to the workspace."""
        data = {}
        for key, _ in LOG_FIELDS:
            value = self.query_one(f"#log-{key}", Input).value.strip()
            if value:
                data[key] = value

        session, errors = add_session(data)
        if errors:
            self.notify("\n".join(errors), title="Session not saved", severity="error")
            return

        self.notify(
            f"Logged {format_minutes(session.duration_minutes)} of {session.subject}",
            title="Session saved",
            severity="information",
        )
        for key, _ in LOG_FIELDS:
            if key != "date":
                self.query_one(f"#log-{key}", Input).value = ""
        self._load_data()

    # ── View switching ─────────────────────────────────────────

    def action_show_dashboard(self) -> None:
        self._switch_to("dashboard")

    def action_show_report(self) -> None:
        if self.current_view == "report":
            self._switch_to("dashboard")
            return
        self._switch_to("report")

    def action_show_log(self) -> None:
        self._switch_to("log")
        self.query_one("#log-subject", Input).focus()

    def action_blur_focus(self) -> None:
        self.set_focus(None)
        self.refresh_bindings()

    def action_quit_app(self) -> None:
        self.exit()

    def _switch_to(self, view: str) -> None:
        self.query_one("#dashboard-view").display = view == "dashboard"
        self.query_one("#report-view").display = view == "report"
        self.query_one("#log-view").display = view == "log"
        self.current_view = view
        self.refresh_bindings()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set EXAMPREP_ROOT to the directory holding data/ and preferences.yaml.")
        sys.exit(1)

    app = ExamPrepApp()
    app.run()


if __name__ == "__main__":
    main()
