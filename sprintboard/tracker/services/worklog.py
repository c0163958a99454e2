# ============================================
# tracker/services/worklog.py
# ============================================
import logging
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from tracker.models import ActivityLog, Issue, WorkLog
from tracker.services.activity import ActivityService
from tracker.utils.duration import format_duration

logger = logging.getLogger(__name__)


class WorkLogService:

    @staticmethod
    @transaction.atomic
    def log_work(*, issue: Issue, user, time_spent: int, description: str = '', started_at=None) -> WorkLog:
        """Adds to the issue's time spent and burns down the remaining estimate (floored at 0)"""
        if not time_spent or time_spent <= 0:
            raise ValidationError({'time_spent': ["Time spent must be a positive duration"]})

        issue = Issue.objects.select_for_update().get(pk=issue.pk)
        worklog = WorkLog.objects.create(
            issue=issue,
            user=user,
            time_spent=time_spent,
            description=description,
            started_at=started_at or timezone.now(),
        )

        issue.time_spent = (issue.time_spent or 0) + time_spent
        if issue.time_remaining is not None:
            issue.time_remaining = max(0, issue.time_remaining - time_spent)
        issue.save(update_fields=['time_spent', 'time_remaining', 'updated_at'])

        ActivityService.log(
            issue=issue,
            user=user,
            action=ActivityLog.Action.LOGGED_WORK,
            field='time_spent',
            new_value=format_duration(time_spent),
        )
        logger.info("[worklog] %s logged on issue %s", format_duration(time_spent), issue.pk)
        return worklog

    @staticmethod
    @transaction.atomic
    def delete_worklog(*, worklog: WorkLog) -> None:
        """Time spent goes back down; the remaining estimate is left alone"""
        issue = Issue.objects.select_for_update().get(pk=worklog.issue_id)
        issue.time_spent = max(0, (issue.time_spent or 0) - worklog.time_spent)
        issue.save(update_fields=['time_spent', 'updated_at'])
        worklog.delete()
