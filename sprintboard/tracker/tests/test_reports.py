from datetime import date, datetime
from types import SimpleNamespace

from tracker.selectors.reports import (
    RoadmapWindow, bar_geometry, burndown, epic_progress, epics_with_progress, month_headers,
    roadmap_rows, sprint_report, velocity,
)


def issue(pk, **kw):
    defaults = dict(
        id=pk, type="task", status="todo", parent_id=None, sprint_id=None,
        story_points=None, start_date=None, due_date=None,
    )
    defaults.update(kw)
    return SimpleNamespace(**defaults)


# ---- Epic progress
def test_epic_progress_rounds_half_up():
    epic = issue(1, type="epic")
    children = [issue(2, parent_id=1, status="done")] + [issue(n, parent_id=1) for n in range(3, 10)]
    progress = epic_progress(epic, children)
    assert progress.total == 8
    assert progress.done == 1
    assert progress.percent == 13  # 12.5


def test_epic_without_children():
    progress = epic_progress(issue(1, type="epic"), [issue(2)])
    assert progress.total == 0
    assert progress.percent == 0
    assert progress.has_children is False


def test_epic_progress_counts_points():
    epic = issue(1, type="epic")
    children = [
        issue(2, parent_id=1, status="done", story_points=3),
        issue(3, parent_id=1, story_points=5),
        issue(4, parent_id=1, status="done"),
    ]
    progress = epic_progress(epic, children)
    assert (progress.done, progress.total, progress.percent) == (2, 3, 67)
    assert (progress.done_points, progress.story_points) == (3, 8)


def test_epics_with_progress_only_lists_epics():
    issues = [issue(1, type="epic"), issue(2, parent_id=1, status="done"), issue(3, type="epic")]
    result = epics_with_progress(issues)
    assert [p.epic.id for p in result] == [1, 3]
    assert result[0].percent == 100


# ---- Roadmap
def test_window_spans_previous_through_next_month():
    window = RoadmapWindow.around(date(2024, 1, 15))
    assert window.start == date(2023, 12, 1)
    assert window.end == date(2024, 2, 29)
    assert window.total_days == 90


def test_window_with_wider_range():
    window = RoadmapWindow.around(date(2024, 11, 3), months_before=0, months_ahead=2)
    assert window.start == date(2024, 11, 1)
    assert window.end == date(2025, 1, 31)


WINDOW = RoadmapWindow(start=date(2024, 1, 1), end=date(2024, 4, 10))  # 100 days


def test_unscheduled_issue_has_no_bar():
    assert bar_geometry(None, None, WINDOW) is None


def test_bar_inside_window():
    bar = bar_geometry(date(2024, 1, 11), date(2024, 1, 31), WINDOW)
    assert bar.left_pct == 10.0
    assert bar.width_pct == 20.0


def test_missing_due_date_defaults_to_two_weeks():
    bar = bar_geometry(date(2024, 1, 11), None, WINDOW)
    assert bar.end == date(2024, 1, 25)
    assert bar.width_pct == 14.0


def test_missing_start_uses_today():
    bar = bar_geometry(None, date(2024, 2, 10), WINDOW, today=date(2024, 1, 31))
    assert bar.start == date(2024, 1, 31)
    assert bar.left_pct == 30.0
    assert bar.width_pct == 10.0


def test_bar_offsets_are_clamped_to_window():
    bar = bar_geometry(date(2023, 11, 1), date(2024, 6, 1), WINDOW)
    assert bar.left_pct == 0.0
    assert bar.width_pct == 100.0


def test_bar_outside_window_keeps_minimum_width():
    bar = bar_geometry(date(2024, 6, 1), date(2024, 6, 10), WINDOW)
    assert bar.left_pct == 100.0
    assert bar.width_pct == 2.0


def test_month_headers_cover_window():
    window = RoadmapWindow.around(date(2024, 1, 15))
    headers = month_headers(window)
    assert [h.label for h in headers] == ["Dec 2023", "Jan 2024", "Feb 2024"]
    assert [h.days for h in headers] == [31, 31, 29]


def test_roadmap_rows_are_epics_with_bars():
    issues = [
        issue(1, type="epic", start_date=date(2024, 1, 11), due_date=date(2024, 1, 31)),
        issue(2, type="epic"),
        issue(3, parent_id=1, status="done"),
    ]
    rows = roadmap_rows(issues, WINDOW)
    assert [r.issue.id for r in rows] == [1, 2]
    assert rows[0].scheduled and not rows[1].scheduled
    assert rows[0].progress.percent == 100


# ---- Sprint report & velocity
def test_sprint_report_splits_done_from_incomplete():
    s = SimpleNamespace(id=1, status="active")
    issues = [
        issue(1, sprint_id=1, status="done", story_points=3),
        issue(2, sprint_id=1, story_points=5),
        issue(3, sprint_id=2, status="done", story_points=8),
    ]
    report = sprint_report(s, issues)
    assert [i.id for i in report.completed] == [1]
    assert [i.id for i in report.incomplete] == [2]
    assert (report.completed_points, report.incomplete_points, report.percent) == (3, 5, 50)


def test_velocity_prefers_completion_snapshot():
    snap = SimpleNamespace(id=1, status="completed", committed_points=13, completed_points=8)
    legacy = SimpleNamespace(id=2, status="completed", committed_points=None, completed_points=None)
    open_sprint = SimpleNamespace(id=3, status="active", committed_points=None, completed_points=None)
    points = velocity(
        [snap, legacy, open_sprint],
        {1: [issue(1, sprint_id=1, status="done", story_points=2)],
         2: [issue(2, sprint_id=2, status="done", story_points=5)]},
    )
    assert [(p.sprint.id, p.committed, p.completed) for p in points] == [(1, 13, 8), (2, 5, 5)]


# ---- Burndown
def make_sprint(**kw):
    defaults = dict(
        id=1, status="active", start_date=date(2024, 1, 1), end_date=date(2024, 1, 5),
        completed_at=None, committed_points=None,
    )
    defaults.update(kw)
    return SimpleNamespace(**defaults)


def test_burndown_active_sprint():
    issues = [
        issue(1, sprint_id=1, story_points=3, status="done"),
        issue(2, sprint_id=1, story_points=5, status="done"),
        issue(3, sprint_id=1, story_points=2),
        issue(4, sprint_id=2, story_points=8),
    ]
    done_on = {1: datetime(2024, 1, 2, 10, 0), 2: datetime(2024, 1, 4, 9, 0)}

    points = burndown(make_sprint(), issues, done_on, today=date(2024, 1, 3))

    assert [p.day.day for p in points] == [1, 2, 3, 4, 5]
    assert [p.ideal for p in points] == [10.0, 7.5, 5.0, 2.5, 0.0]
    assert [p.remaining for p in points] == [10, 7, 7, None, None]


def test_burndown_completed_sprint_keeps_committed_points():
    done = make_sprint(
        status="completed", completed_at=datetime(2024, 1, 3, 12, 0),
        end_date=date(2024, 1, 10), committed_points=12,
    )
    # no history for the done issue: it burns on the last day
    points = burndown(done, [issue(1, sprint_id=1, story_points=3, status="done")], {}, today=date(2024, 2, 1))

    assert [(p.ideal, p.remaining) for p in points] == [(12.0, 12), (6.0, 12), (0.0, 9)]


def test_burndown_needs_a_start_date():
    assert burndown(make_sprint(start_date=None), [issue(1, sprint_id=1)], {}) == []
