# ============================================
# tracker/models/__init__.py
# ============================================
from .project import Project
from .issue import Issue
from .sprint import Sprint
from .comment import Comment
from .history import ActivityLog
from .label import Label
from .component import Component
from .version import Version
from .link import IssueLink
from .member import ProjectMember
from .workflow import Workflow, WorkflowTransition
from .board import BoardConfig
from .worklog import WorkLog
from .attachment import Attachment
from .watcher import Watcher
from .notification import Notification
from .saved_filter import SavedFilter

__all__ = [
    'Project',
    'Issue',
    'Sprint',
    'Comment',
    'ActivityLog',
    'Label',
    'Component',
    'Version',
    'IssueLink',
    'ProjectMember',
    'Workflow',
    'WorkflowTransition',
    'BoardConfig',
    'WorkLog',
    'Attachment',
    'Watcher',
    'Notification',
    'SavedFilter',
]
