# ============================================
# tracker/services/sprint.py
# ============================================
import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from tracker.constants import IssueStatus, SprintStatus
from tracker.exceptions import SprintStateError
from tracker.models import ActivityLog, Issue, Notification, Project, Sprint
from tracker.services.notification import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    sprint: Sprint
    completed_issues: int
    moved_to_backlog: int


class SprintService:

    @staticmethod
    def _validate_dates(start_date, end_date) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError({'end_date': ["End date cannot be before start date"]})

    @staticmethod
    def create_sprint(
        *,
        project: Project,
        name: str = '',
        goal: str = '',
        start_date=None,
        end_date=None,
    ) -> Sprint:
        """New sprints always start in planning"""
        SprintService._validate_dates(start_date, end_date)
        if not name:
            name = f"{project.key} Sprint {project.sprints.count() + 1}"
        sprint = Sprint.objects.create(
            project=project,
            name=name,
            goal=goal,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info("[sprint] created %s in %s", sprint.pk, project.key)
        return sprint

    @staticmethod
    def update_sprint(*, sprint: Sprint, **data) -> Sprint:
        """Name, goal and dates only; status moves through start/complete"""
        if 'status' in data:
            raise ValidationError({'status': ["Use the start / complete actions to change sprint status"]})
        SprintService._validate_dates(
            data.get('start_date', sprint.start_date),
            data.get('end_date', sprint.end_date),
        )
        for field, value in data.items():
            setattr(sprint, field, value)
        sprint.save()
        return sprint

    @staticmethod
    def delete_sprint(*, sprint: Sprint) -> None:
        """Issues in the sprint fall back to the backlog"""
        if sprint.is_active:
            raise SprintStateError("An active sprint cannot be deleted; complete it first")
        logger.info("[sprint] deleting %s", sprint.pk)
        sprint.delete()

    @staticmethod
    @transaction.atomic
    def start_sprint(*, sprint: Sprint, user=None) -> Sprint:
        """
        planning -> active. Rejected when the sprint is not in planning or
        another sprint of the project is already active.
        """
        # Project lock first: two starts in the same project queue up here
        Project.objects.select_for_update().only('id').get(pk=sprint.project_id)
        sprint = Sprint.objects.select_for_update().select_related('project').get(pk=sprint.pk)

        if sprint.status != SprintStatus.PLANNING:
            raise SprintStateError(
                f"Only a sprint in planning can be started (sprint is {sprint.get_status_display().lower()})"
            )

        other = Sprint.objects.filter(
            project_id=sprint.project_id, status=SprintStatus.ACTIVE
        ).exclude(pk=sprint.pk).first()
        if other is not None:
            raise SprintStateError(f"Sprint '{other.name}' is already active in this project")

        sprint.status = SprintStatus.ACTIVE
        if sprint.start_date is None:
            sprint.start_date = timezone.now()
        try:
            with transaction.atomic():
                sprint.save()
        except IntegrityError:
            raise SprintStateError("Another sprint is already active in this project")

        assignee_ids = Issue.objects.filter(sprint=sprint, assignee__isnull=False) \
            .values_list('assignee_id', flat=True).distinct()
        NotificationService.notify(
            recipients=list(assignee_ids),
            kind=Notification.Kind.SPRINT_STARTED,
            title=f"{sprint.name} started",
            message=sprint.goal,
            actor_id=getattr(user, 'pk', None),
        )
        logger.info("[sprint] started %s in %s", sprint.pk, sprint.project.key)
        return sprint

    @staticmethod
    @transaction.atomic
    def complete_sprint(*, sprint: Sprint, user=None) -> CompletionResult:
        """
        active -> completed. Non-done issues leave the sprint for the backlog,
        done issues stay attached for reporting.
        """
        sprint = Sprint.objects.select_for_update().select_related('project').get(pk=sprint.pk)
        if sprint.status != SprintStatus.ACTIVE:
            raise SprintStateError(
                f"Only an active sprint can be completed (sprint is {sprint.get_status_display().lower()})"
            )

        now = timezone.now()
        issues = Issue.objects.filter(sprint=sprint)
        done = issues.filter(status=IssueStatus.DONE)
        not_done = issues.exclude(status=IssueStatus.DONE)

        committed = issues.aggregate(p=Sum('story_points'))['p'] or 0
        completed = done.aggregate(p=Sum('story_points'))['p'] or 0
        done_count = done.count()

        assignee_ids = list(
            issues.filter(assignee__isnull=False).values_list('assignee_id', flat=True).distinct()
        )
        moved_ids = list(not_done.values_list('id', flat=True))
        # update() bypasses auto_now
        Issue.objects.filter(id__in=moved_ids).update(sprint=None, updated_at=now)
        ActivityLog.objects.bulk_create([
            ActivityLog(issue_id=pk, user=user if getattr(user, 'pk', None) else None,
                        field='sprint', old_value=str(sprint), new_value='')
            for pk in moved_ids
        ])

        sprint.status = SprintStatus.COMPLETED
        sprint.completed_at = now
        sprint.committed_points = committed
        sprint.completed_points = completed
        sprint.save()

        NotificationService.notify(
            recipients=assignee_ids,
            kind=Notification.Kind.SPRINT_COMPLETED,
            title=f"{sprint.name} completed",
            message=f"{done_count} done, {len(moved_ids)} moved to the backlog",
            actor_id=getattr(user, 'pk', None),
        )

        logger.info(
            "[sprint] completed %s in %s: %d done, %d moved to backlog",
            sprint.pk, sprint.project.key, done_count, len(moved_ids),
        )
        return CompletionResult(sprint=sprint, completed_issues=done_count, moved_to_backlog=len(moved_ids))
