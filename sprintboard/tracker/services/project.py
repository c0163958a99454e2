# ============================================
# tracker/services/project.py
# ============================================
import logging
from typing import Optional
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import IntegrityError, transaction
from tracker.constants import PROJECT_COLORS, ProjectRole
from tracker.models import Project, ProjectMember
from tracker.utils.keys import derive_project_key, is_valid_project_key

logger = logging.getLogger(__name__)

MANAGER_ROLES = (ProjectRole.ADMIN, ProjectRole.PROJECT_ADMIN)


class ProjectService:

    @staticmethod
    def can_manage(project: Project, user) -> bool:
        """Staff, the lead, or an admin member. A project without managers is open."""
        if user is None or not getattr(user, 'pk', None):
            return False
        if user.is_staff or project.lead_id == user.pk:
            return True
        managers = ProjectMember.objects.filter(project=project, role__in=MANAGER_ROLES)
        if managers.filter(user=user).exists():
            return True
        return project.lead_id is None and not managers.exists()

    @staticmethod
    def _check_can_manage(project: Project, user) -> None:
        if not ProjectService.can_manage(project, user):
            raise PermissionDenied("Only the project lead or a project admin can do this")

    @staticmethod
    def _clean_key(key: Optional[str], name: str) -> str:
        key = (key or '').strip().upper() or derive_project_key(name)
        if not is_valid_project_key(key):
            raise ValidationError({'key': [f"Project key '{key}' must be 2-10 uppercase letters"]})
        return key

    @staticmethod
    @transaction.atomic
    def create_project(
        *,
        name: str,
        creator=None,
        key: str = None,
        description: str = '',
        lead=None,
        avatar_color: str = None,
    ) -> Project:
        """Create a new project; the key is derived from the name when omitted"""
        key = ProjectService._clean_key(key, name)

        # Validate key is unique
        if Project.objects.filter(key=key).exists():
            raise ValidationError({'key': [f"Project key '{key}' already exists"]})

        project = Project.objects.create(
            name=name,
            key=key,
            description=description,
            lead=lead if lead is not None else creator,
            avatar_color=avatar_color or PROJECT_COLORS[Project.objects.count() % len(PROJECT_COLORS)],
        )

        if creator is not None:
            ProjectMember.objects.create(project=project, user=creator, role=ProjectRole.ADMIN)
        if lead is not None and lead != creator:
            ProjectMember.objects.create(project=project, user=lead, role=ProjectRole.PROJECT_ADMIN)

        logger.info("[project] created %s (%s)", project.key, project.pk)
        return project

    @staticmethod
    @transaction.atomic
    def update_project(
        *,
        project: Project,
        user,
        **data
    ) -> Project:
        """Update project"""
        ProjectService._check_can_manage(project, user)

        if 'key' in data:
            key = ProjectService._clean_key(data['key'], project.name)
            if Project.objects.filter(key=key).exclude(pk=project.pk).exists():
                raise ValidationError({'key': [f"Project key '{key}' already exists"]})
            data['key'] = key

        for field, value in data.items():
            setattr(project, field, value)

        # last_issue_number belongs to the issue sequence
        project.save(update_fields=[*data, 'updated_at'])
        return project

    @staticmethod
    def delete_project(*, project: Project, user) -> None:
        """Delete project with everything it owns"""
        ProjectService._check_can_manage(project, user)
        logger.info("[project] deleting %s (%s)", project.key, project.pk)
        project.delete()


class MemberService:

    @staticmethod
    def add_member(*, project: Project, user, member_user, role: str = ProjectRole.MEMBER) -> ProjectMember:
        """Add member to project"""
        ProjectService._check_can_manage(project, user)
        try:
            with transaction.atomic():
                return ProjectMember.objects.create(project=project, user=member_user, role=role)
        except IntegrityError:
            raise ValidationError({'user': ["User is already a member of this project"]})

    @staticmethod
    def update_role(*, member: ProjectMember, user, role: str) -> ProjectMember:
        ProjectService._check_can_manage(member.project, user)
        member.role = role
        member.save(update_fields=['role'])
        return member

    @staticmethod
    def remove_member(*, member: ProjectMember, user) -> None:
        """Remove member from project"""
        project = member.project
        ProjectService._check_can_manage(project, user)

        if member.user_id == project.lead_id:
            raise ValidationError("Cannot remove the project lead")

        member.delete()
