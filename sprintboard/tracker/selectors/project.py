# ============================================
# tracker/selectors/project.py
# ============================================
from typing import Optional
from django.db.models import Count, Q, QuerySet
from tracker.models import Project, ProjectMember


class ProjectSelector:

    @staticmethod
    def get_project_by_id(project_id: int) -> Optional[Project]:
        """Get single project by ID"""
        try:
            return Project.objects.select_related('lead').get(id=project_id)
        except Project.DoesNotExist:
            return None

    @staticmethod
    def get_projects_list(user_id: int = None, search: str = None) -> QuerySet:
        """All projects, or only those the user leads or is a member of"""
        queryset = Project.objects.select_related('lead').annotate(
            issue_count=Count('issues', distinct=True)
        )

        if user_id:
            queryset = queryset.filter(
                Q(lead_id=user_id) | Q(members__user_id=user_id)
            ).distinct()

        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(key__icontains=search))

        return queryset.order_by('-created_at')

    @staticmethod
    def get_members(project_id: int) -> QuerySet:
        return ProjectMember.objects.filter(project_id=project_id).select_related('user').order_by('created_at')

    @staticmethod
    def get_member_by_id(member_id: int) -> Optional[ProjectMember]:
        try:
            return ProjectMember.objects.select_related('project', 'user').get(id=member_id)
        except ProjectMember.DoesNotExist:
            return None
