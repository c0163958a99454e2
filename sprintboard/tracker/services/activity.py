# ============================================
# tracker/services/activity.py
# ============================================
from datetime import date, datetime
from typing import Iterable, List

from tracker.models import ActivityLog, Issue


def display_value(value) -> str:
    """Text stored in old_value / new_value"""
    if value is None:
        return ''
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


class ActivityService:

    @staticmethod
    def log(
        *,
        issue: Issue,
        user=None,
        action: str = ActivityLog.Action.UPDATED,
        field: str = '',
        old_value=None,
        new_value=None,
    ) -> ActivityLog:
        return ActivityLog.objects.create(
            issue=issue,
            user=user,
            action=action,
            field=field,
            old_value=display_value(old_value),
            new_value=display_value(new_value),
        )

    @staticmethod
    def log_changes(*, issue: Issue, user, changes: Iterable[tuple]) -> List[ActivityLog]:
        """``changes`` is ``(field, old, new)`` triples; one row per changed field"""
        rows = [
            ActivityLog(
                issue=issue,
                user=user,
                action=ActivityLog.Action.UPDATED,
                field=field,
                old_value=display_value(old),
                new_value=display_value(new),
            )
            for field, old, new in changes
        ]
        return ActivityLog.objects.bulk_create(rows) if rows else []
