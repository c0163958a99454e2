# ============================================
# tracker/selectors/catalog.py
# ============================================
from typing import Optional
from django.db.models import Count, Q, QuerySet
from tracker.constants import IssueStatus
from tracker.models import Component, Label, Version


class CatalogSelector:
    """Project-scoped labels, components and versions"""

    @staticmethod
    def get_labels(project_id: int) -> QuerySet:
        return Label.objects.filter(project_id=project_id).annotate(issue_count=Count('issues'))

    @staticmethod
    def get_label_by_id(label_id: int) -> Optional[Label]:
        try:
            return Label.objects.get(id=label_id)
        except Label.DoesNotExist:
            return None

    @staticmethod
    def get_components(project_id: int) -> QuerySet:
        return Component.objects.filter(project_id=project_id).select_related('lead').annotate(
            issue_count=Count('issues')
        )

    @staticmethod
    def get_component_by_id(component_id: int) -> Optional[Component]:
        try:
            return Component.objects.select_related('lead').get(id=component_id)
        except Component.DoesNotExist:
            return None

    @staticmethod
    def get_versions(project_id: int) -> QuerySet:
        return Version.objects.filter(project_id=project_id).annotate(
            issue_count=Count('fixed_issues', distinct=True),
            done_count=Count('fixed_issues', filter=Q(fixed_issues__status=IssueStatus.DONE), distinct=True),
        )

    @staticmethod
    def get_version_by_id(version_id: int) -> Optional[Version]:
        try:
            return Version.objects.get(id=version_id)
        except Version.DoesNotExist:
            return None
