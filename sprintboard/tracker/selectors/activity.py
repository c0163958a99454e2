# ============================================
# tracker/selectors/activity.py
# ============================================
from datetime import datetime
from typing import Dict, Iterable, Optional
from django.db.models import Max, QuerySet
from tracker.constants import IssueStatus
from tracker.models import ActivityLog, Attachment, IssueLink, Watcher, WorkLog


class ActivitySelector:

    @staticmethod
    def get_issue_activity(issue_id: int) -> QuerySet:
        """Newest first"""
        return ActivityLog.objects.filter(issue_id=issue_id).select_related('user')

    @staticmethod
    def get_project_activity(project_id: int, limit: int = 50) -> QuerySet:
        return ActivityLog.objects.filter(
            issue__project_id=project_id
        ).select_related('user', 'issue__project')[:limit]

    @staticmethod
    def get_done_times(issue_ids: Iterable[int]) -> Dict[int, datetime]:
        """When each issue last moved to done, from the status history"""
        rows = ActivityLog.objects.filter(
            issue_id__in=list(issue_ids), field='status', new_value=IssueStatus.DONE
        ).order_by().values('issue_id').annotate(at=Max('created_at'))
        return {row['issue_id']: row['at'] for row in rows}


class IssueRelationSelector:
    """Links, watchers, work logs and attachments hanging off an issue"""

    @staticmethod
    def get_links(issue_id: int) -> QuerySet:
        return IssueLink.objects.filter(source_id=issue_id).select_related('target__project')

    @staticmethod
    def get_incoming_links(issue_id: int) -> QuerySet:
        return IssueLink.objects.filter(target_id=issue_id).select_related('source__project')

    @staticmethod
    def get_link_by_id(link_id: int) -> Optional[IssueLink]:
        try:
            return IssueLink.objects.select_related('source', 'target').get(id=link_id)
        except IssueLink.DoesNotExist:
            return None

    @staticmethod
    def get_watchers(issue_id: int) -> QuerySet:
        return Watcher.objects.filter(issue_id=issue_id).select_related('user')

    @staticmethod
    def get_worklogs(issue_id: int) -> QuerySet:
        return WorkLog.objects.filter(issue_id=issue_id).select_related('user').order_by('started_at', 'id')

    @staticmethod
    def get_worklog_by_id(worklog_id: int) -> Optional[WorkLog]:
        try:
            return WorkLog.objects.select_related('issue').get(id=worklog_id)
        except WorkLog.DoesNotExist:
            return None

    @staticmethod
    def get_attachments(issue_id: int) -> QuerySet:
        return Attachment.objects.filter(issue_id=issue_id).select_related('user')

    @staticmethod
    def get_attachment_by_id(attachment_id: int) -> Optional[Attachment]:
        try:
            return Attachment.objects.select_related('issue').get(id=attachment_id)
        except Attachment.DoesNotExist:
            return None
