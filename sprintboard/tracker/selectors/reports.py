# ============================================
# tracker/selectors/reports.py
# ============================================
"""
Epic progress, roadmap geometry, sprint report, burndown and velocity.

Pure functions over already-fetched rows, like ``tracker.selectors.board``.
"""
import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, List, Mapping, Optional

from django.utils import timezone

from tracker.constants import IssueStatus, IssueType, SprintStatus
from tracker.utils.duration import round_half_up

DEFAULT_BAR_DAYS = 14
MIN_BAR_WIDTH_PCT = 2.0


# ============================
# Epic progress
# ============================
@dataclass
class EpicProgress:
    epic: object
    total: int = 0
    done: int = 0
    story_points: int = 0
    done_points: int = 0

    @property
    def has_children(self) -> bool:
        return self.total > 0

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round_half_up(100 * self.done / self.total)


def epic_progress(epic, issues: Iterable) -> EpicProgress:
    """Children are the issues whose parent is ``epic``."""
    progress = EpicProgress(epic=epic)
    for issue in issues:
        if issue.parent_id != epic.id:
            continue
        progress.total += 1
        points = issue.story_points or 0
        progress.story_points += points
        if issue.status == IssueStatus.DONE:
            progress.done += 1
            progress.done_points += points
    return progress


def epics_with_progress(issues: Iterable) -> List[EpicProgress]:
    issues = list(issues)
    epics = [i for i in issues if i.type == IssueType.EPIC]
    return [epic_progress(epic, issues) for epic in epics]


# ============================
# Roadmap
# ============================
def _as_date(value) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


@dataclass(frozen=True)
class RoadmapWindow:
    start: date
    end: date

    @classmethod
    def around(cls, today: Optional[date] = None, months_before: int = 1, months_ahead: int = 1) -> "RoadmapWindow":
        """
        First day of ``months_before`` months ago through the last day of
        ``months_ahead`` months from now. Defaults give a three month window.
        """
        today = _as_date(today) or timezone.localdate()
        y, m = _shift_month(today.year, today.month, -months_before)
        start = date(y, m, 1)
        y, m = _shift_month(today.year, today.month, months_ahead)
        end = date(y, m, calendar.monthrange(y, m)[1])
        return cls(start=start, end=end)

    @property
    def total_days(self) -> int:
        return max((self.end - self.start).days, 1)


@dataclass(frozen=True)
class BarGeometry:
    start: date
    end: date
    left_pct: float
    width_pct: float


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def bar_geometry(start_date, due_date, window: RoadmapWindow, today: Optional[date] = None) -> Optional[BarGeometry]:
    """
    Horizontal placement of one bar inside ``window``; ``None`` when the issue
    has neither date (unscheduled).
    """
    start_date, due_date = _as_date(start_date), _as_date(due_date)
    if start_date is None and due_date is None:
        return None

    start = start_date or _as_date(today) or timezone.localdate()
    end = due_date or start + timedelta(days=DEFAULT_BAR_DAYS)

    total = window.total_days
    start_offset = _clamp((start - window.start).days, 0, total)
    end_offset = _clamp((end - window.start).days, 0, total)

    left = start_offset / total * 100
    width = max(MIN_BAR_WIDTH_PCT, (end_offset - start_offset) / total * 100)
    return BarGeometry(start=start, end=end, left_pct=round(left, 2), width_pct=round(width, 2))


@dataclass(frozen=True)
class MonthHeader:
    label: str
    start: date
    days: int
    width_pct: float


def month_headers(window: RoadmapWindow) -> List[MonthHeader]:
    headers: List[MonthHeader] = []
    y, m = window.start.year, window.start.month
    while date(y, m, 1) <= window.end:
        first = date(y, m, 1)
        last = date(y, m, calendar.monthrange(y, m)[1])
        days = (min(last, window.end) - max(first, window.start)).days + 1
        headers.append(MonthHeader(
            label=first.strftime("%b %Y"),
            start=first,
            days=days,
            width_pct=round(days / window.total_days * 100, 2),
        ))
        y, m = _shift_month(y, m, 1)
    return headers


@dataclass
class RoadmapRow:
    issue: object
    bar: Optional[BarGeometry]
    progress: Optional[EpicProgress] = None

    @property
    def scheduled(self) -> bool:
        return self.bar is not None


def roadmap_rows(issues: Iterable, window: RoadmapWindow, today: Optional[date] = None) -> List[RoadmapRow]:
    """One row per epic with its bar and child progress."""
    issues = list(issues)
    rows = []
    for progress in epics_with_progress(issues):
        epic = progress.epic
        rows.append(RoadmapRow(
            issue=epic,
            bar=bar_geometry(epic.start_date, epic.due_date, window, today=today),
            progress=progress,
        ))
    return rows


# ============================
# Sprint report & velocity
# ============================
@dataclass
class SprintReport:
    sprint: object
    completed: list = field(default_factory=list)
    incomplete: list = field(default_factory=list)

    @property
    def completed_points(self) -> int:
        return sum(i.story_points or 0 for i in self.completed)

    @property
    def incomplete_points(self) -> int:
        return sum(i.story_points or 0 for i in self.incomplete)

    @property
    def total(self) -> int:
        return len(self.completed) + len(self.incomplete)

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round_half_up(100 * len(self.completed) / self.total)


def sprint_report(sprint, issues: Iterable) -> SprintReport:
    report = SprintReport(sprint=sprint)
    for issue in issues:
        if issue.sprint_id != sprint.id:
            continue
        if issue.status == IssueStatus.DONE:
            report.completed.append(issue)
        else:
            report.incomplete.append(issue)
    return report


@dataclass(frozen=True)
class VelocityPoint:
    sprint: object
    committed: int
    completed: int


def velocity(sprints: Iterable, issues_by_sprint: Optional[Mapping[int, list]] = None) -> List[VelocityPoint]:
    """
    Committed vs completed story points per completed sprint, oldest first.
    Uses the snapshot recorded at completion and falls back to the issues
    still attached to the sprint.
    """
    issues_by_sprint = issues_by_sprint or {}
    points = []
    for sprint in sprints:
        if sprint.status != SprintStatus.COMPLETED:
            continue
        report = sprint_report(sprint, issues_by_sprint.get(sprint.id, []))
        completed = sprint.completed_points
        if completed is None:
            completed = report.completed_points
        committed = sprint.committed_points
        if committed is None:
            committed = report.completed_points + report.incomplete_points
        points.append(VelocityPoint(sprint=sprint, committed=committed, completed=completed))
    return points


# ============================
# Burndown
# ============================
@dataclass(frozen=True)
class BurndownPoint:
    day: date
    ideal: float
    remaining: Optional[int]


def burndown(sprint, issues: Iterable, done_on: Mapping[int, datetime], today: Optional[date] = None) -> List[BurndownPoint]:
    """
    Story points left at the end of each sprint day.

    A done issue burns on its ``done_on`` day (the last sprint day when
    unknown). Completed sprints start from the points committed at completion
    so issues sent back to the backlog stay in the line. Days after ``today``
    carry the ideal line only.
    """
    start = _as_date(sprint.start_date)
    if start is None:
        return []
    today = today or timezone.localdate()
    end = _as_date(sprint.completed_at) if sprint.status == SprintStatus.COMPLETED else None
    end = max(end or _as_date(sprint.end_date) or today, start)

    issues = [i for i in issues if i.sprint_id == sprint.id]
    total = sum(i.story_points or 0 for i in issues)
    if sprint.status == SprintStatus.COMPLETED and sprint.committed_points is not None:
        total = sprint.committed_points
    burned = [
        (_as_date(done_on.get(i.id)) or end, i.story_points or 0)
        for i in issues if i.status == IssueStatus.DONE
    ]

    span = (end - start).days
    points = []
    for n in range(span + 1):
        day = start + timedelta(days=n)
        ideal = total * (1 - n / span) if span else 0.0
        remaining = None
        if day <= today:
            remaining = total - sum(p for d, p in burned if d <= day)
        points.append(BurndownPoint(day=day, ideal=round(ideal, 1), remaining=remaining))
    return points
