# ============================================
# tracker/services/catalog.py
# ============================================
import logging
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from tracker.constants import LABEL_COLORS, VersionStatus
from tracker.exceptions import InvariantViolation
from tracker.models import Component, Issue, Label, Project, Version
from tracker.services.activity import ActivityService

logger = logging.getLogger(__name__)


def _save_unique(obj, message: str):
    """Save a (project, name) unique row, turning the clash into a field error"""
    try:
        with transaction.atomic():
            obj.save()
    except IntegrityError:
        raise ValidationError({'name': [message]})
    return obj


class CatalogService:
    """Labels, components and versions of a project"""

    # ---- Labels
    @staticmethod
    def create_label(*, project: Project, name: str, color: str = None) -> Label:
        if not color:
            # next palette colour
            color = LABEL_COLORS[Label.objects.filter(project=project).count() % len(LABEL_COLORS)]
        label = Label(project=project, name=name.strip(), color=color)
        return _save_unique(label, f"Label '{name}' already exists in this project")

    @staticmethod
    def update_label(*, label: Label, **data) -> Label:
        for field, value in data.items():
            setattr(label, field, value)
        return _save_unique(label, f"Label '{label.name}' already exists in this project")

    @staticmethod
    def delete_label(*, label: Label) -> None:
        label.delete()

    # ---- Components
    @staticmethod
    def create_component(*, project: Project, name: str, description: str = '', lead=None) -> Component:
        component = Component(project=project, name=name.strip(), description=description, lead=lead)
        return _save_unique(component, f"Component '{name}' already exists in this project")

    @staticmethod
    def update_component(*, component: Component, **data) -> Component:
        for field, value in data.items():
            setattr(component, field, value)
        return _save_unique(component, f"Component '{component.name}' already exists in this project")

    @staticmethod
    def delete_component(*, component: Component) -> None:
        component.delete()

    # ---- Versions
    @staticmethod
    def _validate_version_dates(start_date, release_date) -> None:
        if start_date and release_date and release_date < start_date:
            raise ValidationError({'release_date': ["Release date cannot be before start date"]})

    @staticmethod
    def create_version(*, project: Project, name: str, **data) -> Version:
        CatalogService._validate_version_dates(data.get('start_date'), data.get('release_date'))
        version = Version(project=project, name=name.strip(), **data)
        return _save_unique(version, f"Version '{name}' already exists in this project")

    @staticmethod
    def update_version(*, version: Version, **data) -> Version:
        CatalogService._validate_version_dates(
            data.get('start_date', version.start_date),
            data.get('release_date', version.release_date),
        )
        for field, value in data.items():
            setattr(version, field, value)
        return _save_unique(version, f"Version '{version.name}' already exists in this project")

    @staticmethod
    def release_version(*, version: Version, release_date=None) -> Version:
        """unreleased -> released; the release date defaults to today"""
        if version.status != VersionStatus.UNRELEASED:
            raise InvariantViolation(f"Version '{version.name}' is already {version.status}")
        version.status = VersionStatus.RELEASED
        version.release_date = release_date or version.release_date or timezone.localdate()
        version.save(update_fields=['status', 'release_date'])
        logger.info("[version] released %s (%s)", version.name, version.pk)
        return version

    @staticmethod
    def delete_version(*, version: Version) -> None:
        version.delete()

    # ---- Issue <-> label / component
    @staticmethod
    def _check_same_project(issue: Issue, obj, field: str) -> None:
        if obj.project_id != issue.project_id:
            raise ValidationError({field: ["Must belong to the issue's project"]})

    @staticmethod
    def add_issue_label(*, issue: Issue, label: Label, user=None) -> None:
        CatalogService._check_same_project(issue, label, 'label')
        if not issue.labels.filter(pk=label.pk).exists():
            issue.labels.add(label)
            issue.save(update_fields=['updated_at'])
            ActivityService.log(issue=issue, user=user, field='labels', new_value=label.name)

    @staticmethod
    def remove_issue_label(*, issue: Issue, label: Label, user=None) -> None:
        if issue.labels.filter(pk=label.pk).exists():
            issue.labels.remove(label)
            issue.save(update_fields=['updated_at'])
            ActivityService.log(issue=issue, user=user, field='labels', old_value=label.name)

    @staticmethod
    def add_issue_component(*, issue: Issue, component: Component, user=None) -> None:
        CatalogService._check_same_project(issue, component, 'component')
        if not issue.components.filter(pk=component.pk).exists():
            issue.components.add(component)
            issue.save(update_fields=['updated_at'])
            ActivityService.log(issue=issue, user=user, field='components', new_value=component.name)

    @staticmethod
    def remove_issue_component(*, issue: Issue, component: Component, user=None) -> None:
        if issue.components.filter(pk=component.pk).exists():
            issue.components.remove(component)
            issue.save(update_fields=['updated_at'])
            ActivityService.log(issue=issue, user=user, field='components', old_value=component.name)
