# ============================================
# tracker/constants.py
# ============================================
"""
Closed value sets used across the tracker and their display metadata.

Each set is a ``TextChoices`` (stored on the models) plus a ``Registry`` that
maps a key to a ``DisplayMeta``. Registry lookups never fail: an unknown key
comes back as ``DisplayMeta(label=<key>, color=NEUTRAL_COLOR, known=False)``.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from django.db import models


NEUTRAL_COLOR = "#A5ADBA"


@dataclass(frozen=True)
class DisplayMeta:
    key: str
    label: str
    color: str = NEUTRAL_COLOR
    description: str = ""
    inverse: str = ""
    known: bool = True


class Registry:
    """Read-only key -> DisplayMeta lookup with a total ``get``."""

    def __init__(self, name: str, entries: List[DisplayMeta]):
        self.name = name
        self._entries: Dict[str, DisplayMeta] = {e.key: e for e in entries}

    def get(self, key: Optional[str]) -> DisplayMeta:
        meta = self._entries.get(key) if key is not None else None
        if meta is not None:
            return meta
        raw = "" if key is None else str(key)
        return DisplayMeta(key=raw, label=raw, known=False)

    def label(self, key: Optional[str]) -> str:
        return self.get(key).label

    def color(self, key: Optional[str]) -> str:
        return self.get(key).color

    def keys(self) -> List[str]:
        return list(self._entries)

    def as_list(self) -> List[dict]:
        return [
            {
                "key": m.key,
                "label": m.label,
                "color": m.color,
                "description": m.description,
                "inverse": m.inverse,
            }
            for m in self._entries.values()
        ]

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


# ---- Value sets stored on models

class IssueType(models.TextChoices):
    EPIC = 'epic', 'Epic'
    STORY = 'story', 'Story'
    TASK = 'task', 'Task'
    BUG = 'bug', 'Bug'
    SUB_TASK = 'sub_task', 'Sub-task'


class Priority(models.TextChoices):
    HIGHEST = 'highest', 'Highest'
    HIGH = 'high', 'High'
    MEDIUM = 'medium', 'Medium'
    LOW = 'low', 'Low'
    LOWEST = 'lowest', 'Lowest'


class IssueStatus(models.TextChoices):
    BACKLOG = 'backlog', 'Backlog'
    TODO = 'todo', 'To Do'
    IN_PROGRESS = 'in_progress', 'In Progress'
    IN_REVIEW = 'in_review', 'In Review'
    DONE = 'done', 'Done'


class SprintStatus(models.TextChoices):
    PLANNING = 'planning', 'Planning'
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'


class VersionStatus(models.TextChoices):
    UNRELEASED = 'unreleased', 'Unreleased'
    RELEASED = 'released', 'Released'
    ARCHIVED = 'archived', 'Archived'


class LinkType(models.TextChoices):
    BLOCKS = 'blocks', 'blocks'
    IS_BLOCKED_BY = 'is_blocked_by', 'is blocked by'
    DUPLICATES = 'duplicates', 'duplicates'
    IS_DUPLICATED_BY = 'is_duplicated_by', 'is duplicated by'
    CLONES = 'clones', 'clones'
    IS_CLONED_BY = 'is_cloned_by', 'is cloned by'
    RELATES_TO = 'relates_to', 'relates to'


class ProjectRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    PROJECT_ADMIN = 'project_admin', 'Project Admin'
    MEMBER = 'member', 'Member'
    VIEWER = 'viewer', 'Viewer'


class SwimlaneBy(models.TextChoices):
    NONE = 'none', 'None'
    ASSIGNEE = 'assignee', 'Assignee'
    PRIORITY = 'priority', 'Priority'
    TYPE = 'type', 'Issue type'
    EPIC = 'epic', 'Epic'


# ---- Registries

ISSUE_TYPES = Registry("issue_type", [
    DisplayMeta(IssueType.EPIC, "Epic", "#904EE2"),
    DisplayMeta(IssueType.STORY, "Story", "#63BA3C"),
    DisplayMeta(IssueType.TASK, "Task", "#4BADE8"),
    DisplayMeta(IssueType.BUG, "Bug", "#E5493A"),
    DisplayMeta(IssueType.SUB_TASK, "Sub-task", "#8993A4"),
])

PRIORITIES = Registry("priority", [
    DisplayMeta(Priority.HIGHEST, "Highest", "#CD1317"),
    DisplayMeta(Priority.HIGH, "High", "#E97F33"),
    DisplayMeta(Priority.MEDIUM, "Medium", "#E2B203"),
    DisplayMeta(Priority.LOW, "Low", "#2D8738"),
    DisplayMeta(Priority.LOWEST, "Lowest", "#57A55A"),
])

STATUSES = Registry("status", [
    DisplayMeta(IssueStatus.BACKLOG, "Backlog", "#6B778C"),
    DisplayMeta(IssueStatus.TODO, "To Do", "#4BADE8"),
    DisplayMeta(IssueStatus.IN_PROGRESS, "In Progress", "#0052CC"),
    DisplayMeta(IssueStatus.IN_REVIEW, "In Review", "#FF991F"),
    DisplayMeta(IssueStatus.DONE, "Done", "#36B37E"),
])

# Default visible board columns, in order. Backlog is never a board column.
STATUS_COLUMNS: Tuple[str, ...] = (
    IssueStatus.TODO,
    IssueStatus.IN_PROGRESS,
    IssueStatus.IN_REVIEW,
    IssueStatus.DONE,
)

ALL_STATUSES: Tuple[str, ...] = tuple(IssueStatus.values)

SPRINT_STATUSES = Registry("sprint_status", [
    DisplayMeta(SprintStatus.PLANNING, "Planning", "#6B778C"),
    DisplayMeta(SprintStatus.ACTIVE, "Active", "#0052CC"),
    DisplayMeta(SprintStatus.COMPLETED, "Completed", "#36B37E"),
])

VERSION_STATUSES = Registry("version_status", [
    DisplayMeta(VersionStatus.UNRELEASED, "Unreleased", "#6B778C"),
    DisplayMeta(VersionStatus.RELEASED, "Released", "#36B37E"),
    DisplayMeta(VersionStatus.ARCHIVED, "Archived", "#FF991F"),
])

LINK_TYPES = Registry("link_type", [
    DisplayMeta(LinkType.BLOCKS, "blocks", inverse="is blocked by"),
    DisplayMeta(LinkType.IS_BLOCKED_BY, "is blocked by", inverse="blocks"),
    DisplayMeta(LinkType.DUPLICATES, "duplicates", inverse="is duplicated by"),
    DisplayMeta(LinkType.IS_DUPLICATED_BY, "is duplicated by", inverse="duplicates"),
    DisplayMeta(LinkType.CLONES, "clones", inverse="is cloned by"),
    DisplayMeta(LinkType.IS_CLONED_BY, "is cloned by", inverse="clones"),
    DisplayMeta(LinkType.RELATES_TO, "relates to", inverse="relates to"),
])

PROJECT_ROLES = Registry("project_role", [
    DisplayMeta(ProjectRole.ADMIN, "Admin", description="Full access to everything"),
    DisplayMeta(ProjectRole.PROJECT_ADMIN, "Project Admin", description="Manage project settings and members"),
    DisplayMeta(ProjectRole.MEMBER, "Member", description="Create and edit issues"),
    DisplayMeta(ProjectRole.VIEWER, "Viewer", description="Read-only access"),
])

REGISTRIES = {
    r.name: r
    for r in (
        ISSUE_TYPES, PRIORITIES, STATUSES, SPRINT_STATUSES,
        VERSION_STATUSES, LINK_TYPES, PROJECT_ROLES,
    )
}


DEFAULT_PROJECT_COLOR = "#4C9AFF"

PROJECT_COLORS = (
    "#4C9AFF", "#00C7E6", "#36B37E", "#FF991F",
    "#FF5630", "#6554C0", "#00875A", "#0065FF",
)

LABEL_COLORS = (
    "#6B778C", "#4C9AFF", "#00C7E6", "#36B37E", "#FF991F",
    "#FF5630", "#6554C0", "#00875A", "#0065FF", "#904EE2",
    "#E5493A", "#E97F33", "#E2B203", "#2D8738", "#57A55A",
)
