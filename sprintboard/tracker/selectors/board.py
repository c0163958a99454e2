# ============================================
# tracker/selectors/board.py
# ============================================
"""
Board, swimlane, backlog and filter derivations.

Everything here is a pure function over already-fetched issues and sprints:
no queries are issued except for lazily loaded relations the caller did not
select (assignee / parent labels). Issues are read through attributes only
(``status``, ``type``, ``priority``, ``assignee_id``, ``sprint_id``,
``parent_id``, ``story_points``, ``title``, ``issue_number``).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from tracker.constants import (
    ALL_STATUSES, ISSUE_TYPES, PRIORITIES, STATUS_COLUMNS, STATUSES,
    SprintStatus, SwimlaneBy,
)
from tracker.utils.keys import format_issue_key

UNASSIGNED = "unassigned"


# ============================
# Filter predicate
# ============================
def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        raw = []
        for v in value:
            if v is None:
                continue
            raw.extend(str(v).split(","))
    else:
        raw = str(value).split(",")
    return [s.strip() for s in raw if s.strip()]


@dataclass(frozen=True)
class IssueFilter:
    types: tuple = ()
    statuses: tuple = ()
    priorities: tuple = ()
    assignees: tuple = ()
    text: str = ""

    @classmethod
    def from_params(cls, params: Optional[Mapping]) -> "IssueFilter":
        """Build from a QueryDict or dict; values may be repeated or comma separated."""
        if not params:
            return cls()

        def pick(*names):
            values = []
            for name in names:
                if hasattr(params, "getlist"):
                    values.extend(params.getlist(name))
                elif name in params:
                    value = params[name]
                    values.extend(value if isinstance(value, (list, tuple)) else [value])
            return tuple(_as_str_list(values))

        text = params.get("q") or params.get("text") or ""
        return cls(
            types=pick("type"),
            statuses=pick("status"),
            priorities=pick("priority"),
            assignees=pick("assignee", "assignee_id"),
            text=str(text).strip(),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.types or self.statuses or self.priorities or self.assignees or self.text)


def display_key(issue, project_key: Optional[str] = None) -> str:
    if project_key:
        return format_issue_key(project_key, issue.issue_number)
    return getattr(issue, "key", "") or ""


def matches_filter(issue, flt: IssueFilter, project_key: Optional[str] = None) -> bool:
    """AND across every non-empty criterion; values within one criterion are OR-ed."""
    if flt.types and issue.type not in flt.types:
        return False
    if flt.statuses and issue.status not in flt.statuses:
        return False
    if flt.priorities and issue.priority not in flt.priorities:
        return False
    if flt.assignees:
        assignee_id = issue.assignee_id
        ok = any(
            (assignee_id is None) if value == UNASSIGNED else (assignee_id is not None and str(assignee_id) == value)
            for value in flt.assignees
        )
        if not ok:
            return False
    if flt.text:
        needle = flt.text.lower()
        title = (issue.title or "").lower()
        if needle not in title and needle not in display_key(issue, project_key).lower():
            return False
    return True


def filter_issues(issues: Iterable, flt: Optional[IssueFilter], project_key: Optional[str] = None) -> list:
    if flt is None or flt.is_empty:
        return list(issues)
    return [i for i in issues if matches_filter(i, flt, project_key)]


# ============================
# Board columns
# ============================
@dataclass
class BoardColumn:
    status: str
    label: str
    color: str
    visible: bool = True
    wip_limit: Optional[int] = None
    issues: list = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.issues)

    @property
    def over_limit(self) -> bool:
        # Advisory only; moving an issue into a full column is still allowed.
        return self.wip_limit is not None and self.count > self.wip_limit


def resolve_column_order(column_order: Optional[Sequence[str]] = None) -> List[str]:
    order: List[str] = []
    for status in column_order or STATUS_COLUMNS:
        if status in STATUSES and status not in order:
            order.append(status)
    return order or list(STATUS_COLUMNS)


def build_board_columns(
    issues: Iterable,
    column_order: Optional[Sequence[str]] = None,
    wip_limits: Optional[Mapping[str, int]] = None,
) -> List[BoardColumn]:
    """
    Partition issues by status. Visible columns come first in board order,
    then the remaining statuses as hidden columns, so every issue is in
    exactly one column.
    """
    wip_limits = wip_limits or {}
    visible = resolve_column_order(column_order)
    hidden = [s for s in ALL_STATUSES if s not in visible]

    columns: Dict[str, BoardColumn] = {}
    for status in visible + hidden:
        meta = STATUSES.get(status)
        limit = wip_limits.get(status)
        columns[status] = BoardColumn(
            status=status,
            label=meta.label,
            color=meta.color,
            visible=status in visible,
            wip_limit=int(limit) if limit not in (None, "") else None,
        )

    for issue in issues:
        column = columns.get(issue.status)
        if column is None:
            meta = STATUSES.get(issue.status)
            column = columns[issue.status] = BoardColumn(
                status=issue.status, label=meta.label, color=meta.color, visible=False,
            )
        column.issues.append(issue)

    return list(columns.values())


# ============================
# Swimlanes
# ============================
@dataclass
class Swimlane:
    key: Optional[str]
    label: str
    issues: list = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.issues)


def _user_label(user) -> str:
    if user is None:
        return "Unassigned"
    full_name = user.get_full_name() if hasattr(user, "get_full_name") else ""
    return full_name or getattr(user, "username", None) or str(user)


def _lane_for(issue, swimlane_by: str):
    if swimlane_by == SwimlaneBy.ASSIGNEE:
        if issue.assignee_id is None:
            return None, "Unassigned"
        return str(issue.assignee_id), _user_label(getattr(issue, "assignee", None))
    if swimlane_by == SwimlaneBy.PRIORITY:
        return issue.priority, PRIORITIES.label(issue.priority)
    if swimlane_by == SwimlaneBy.TYPE:
        return issue.type, ISSUE_TYPES.label(issue.type)
    if swimlane_by == SwimlaneBy.EPIC:
        if issue.parent_id is None:
            return None, "No epic"
        parent = getattr(issue, "parent", None)
        return str(issue.parent_id), getattr(parent, "title", None) or f"#{issue.parent_id}"
    return None, "All issues"


def _lane_rank(key, swimlane_by: str):
    if key is None:
        return (1, 0)
    if swimlane_by == SwimlaneBy.PRIORITY and key in PRIORITIES:
        return (0, PRIORITIES.keys().index(key))
    if swimlane_by == SwimlaneBy.TYPE and key in ISSUE_TYPES:
        return (0, ISSUE_TYPES.keys().index(key))
    return (0, 0)


def build_swimlanes(issues: Iterable, swimlane_by: Optional[str] = SwimlaneBy.NONE) -> List[Swimlane]:
    """Group issues into horizontal lanes; the catch-all lane (no key) sorts last."""
    lanes: Dict[Optional[str], Swimlane] = {}
    for issue in issues:
        key, label = _lane_for(issue, swimlane_by or SwimlaneBy.NONE)
        lane = lanes.get(key)
        if lane is None:
            lane = lanes[key] = Swimlane(key=key, label=label)
        lane.issues.append(issue)
    return sorted(lanes.values(), key=lambda lane: _lane_rank(lane.key, swimlane_by))


# ============================
# Backlog grouping
# ============================
@dataclass
class BacklogGroup:
    sprint: Any = None
    issues: list = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.sprint.name if self.sprint is not None else "Backlog"

    @property
    def story_points(self) -> int:
        return sum(i.story_points or 0 for i in self.issues)

    @property
    def count(self) -> int:
        return len(self.issues)


_SPRINT_RANK = {SprintStatus.ACTIVE: 0, SprintStatus.PLANNING: 1}


def group_backlog(
    issues: Iterable,
    sprints: Iterable,
    flt: Optional[IssueFilter] = None,
    project_key: Optional[str] = None,
) -> List[BacklogGroup]:
    """
    One group per non-completed sprint (active first, then planning, input
    order kept within each) followed by the residual Backlog group. Filters are
    applied before grouping. Issues whose sprint is not one of those groups
    (no sprint, or a completed one) fall into the Backlog group.
    """
    open_sprints = [s for s in sprints if s.status != SprintStatus.COMPLETED]
    open_sprints.sort(key=lambda s: _SPRINT_RANK.get(s.status, 2))

    groups = [BacklogGroup(sprint=s) for s in open_sprints]
    by_sprint = {g.sprint.id: g for g in groups}
    backlog = BacklogGroup(sprint=None)

    for issue in filter_issues(issues, flt, project_key):
        by_sprint.get(issue.sprint_id, backlog).issues.append(issue)

    return groups + [backlog]
