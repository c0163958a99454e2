# ============================================
# tracker/selectors/sprint.py
# ============================================
from typing import Optional
from django.db.models import Count, Q, QuerySet, Sum
from tracker.constants import IssueStatus, SprintStatus
from tracker.models import Sprint


class SprintSelector:

    @staticmethod
    def get_sprint_by_id(sprint_id: int) -> Optional[Sprint]:
        try:
            return Sprint.objects.select_related('project').get(id=sprint_id)
        except Sprint.DoesNotExist:
            return None

    @staticmethod
    def get_sprints_list(project_id: int, status: str = None) -> QuerySet:
        """Sprints of a project in creation order, with issue counters"""
        queryset = Sprint.objects.filter(project_id=project_id).annotate(
            issue_count=Count('issues', distinct=True),
            done_count=Count('issues', filter=Q(issues__status=IssueStatus.DONE), distinct=True),
            total_points=Sum('issues__story_points'),
        )
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by('created_at', 'id')

    @staticmethod
    def get_open_sprints(project_id: int) -> QuerySet:
        return Sprint.objects.filter(project_id=project_id).exclude(
            status=SprintStatus.COMPLETED
        ).order_by('created_at', 'id')

    @staticmethod
    def get_completed_sprints(project_id: int) -> QuerySet:
        return Sprint.objects.filter(
            project_id=project_id, status=SprintStatus.COMPLETED
        ).order_by('completed_at', 'id')

    @staticmethod
    def get_active_sprint(project_id: int) -> Optional[Sprint]:
        return Sprint.objects.filter(project_id=project_id, status=SprintStatus.ACTIVE).first()
