# ============================================
# tracker/services/issue.py
# ============================================
import logging
from typing import Dict, List, Optional, Sequence

from django.core.exceptions import ValidationError
from django.db import transaction

from tracker.constants import IssueType
from tracker.models import ActivityLog, Issue, Notification, Project
from tracker.selectors.workflow import WorkflowSelector
from tracker.services.activity import ActivityService
from tracker.services.notification import NotificationService
from tracker.services.watcher import WatcherService
from tracker.services.workflow import WorkflowService

logger = logging.getLogger(__name__)

# Relations checked against the issue's project
RELATION_FIELDS = ('parent', 'sprint', 'fix_version', 'affects_version')

UPDATABLE_FIELDS = (
    'title', 'description', 'type', 'priority', 'status',
    'assignee', 'parent', 'sprint', 'fix_version', 'affects_version',
    'story_points', 'original_estimate', 'time_remaining',
    'start_date', 'due_date', 'sort_order',
)
FK_FIELDS = ('assignee', 'parent', 'sprint', 'fix_version', 'affects_version')

MAX_PARENT_DEPTH = 50


class IssueService:

    @staticmethod
    def _next_issue_number(project: Project) -> int:
        """Per-project sequence, never reused; the project row lock serialises concurrent creates"""
        locked = Project.objects.select_for_update().only('id', 'last_issue_number').get(pk=project.pk)
        number = locked.last_issue_number + 1
        Project.objects.filter(pk=project.pk).update(last_issue_number=number)
        project.last_issue_number = number
        return number

    @staticmethod
    def _validate_relations(project: Project, data: Dict, issue: Optional[Issue] = None) -> None:
        errors = {}
        issue_type = data.get('type', issue.type if issue else IssueType.TASK)

        for field in RELATION_FIELDS:
            obj = data.get(field)
            if obj is not None and obj.project_id != project.id:
                errors[field] = [f"{field.replace('_', ' ').capitalize()} belongs to another project"]

        parent = data['parent'] if 'parent' in data else (issue.parent if issue else None)
        if parent is not None and 'parent' not in errors:
            if issue_type == IssueType.EPIC:
                errors['parent'] = ["An epic cannot have a parent"]
            elif issue is not None and IssueService._is_descendant_or_self(parent, issue):
                errors['parent'] = ["An issue cannot be its own ancestor"]

        sprint = data.get('sprint')
        sprint_changed = issue is None or getattr(sprint, 'pk', None) != issue.sprint_id
        if sprint is not None and sprint_changed and 'sprint' not in errors and sprint.is_completed:
            errors['sprint'] = ["Cannot add issues to a completed sprint"]

        start, due = data.get('start_date', issue.start_date if issue else None), \
            data.get('due_date', issue.due_date if issue else None)
        if start and due and due < start:
            errors['due_date'] = ["Due date cannot be before start date"]

        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _is_descendant_or_self(candidate: Issue, issue: Issue) -> bool:
        node, depth = candidate, 0
        while node is not None and depth < MAX_PARENT_DEPTH:
            if node.pk == issue.pk:
                return True
            node, depth = node.parent, depth + 1
        return False

    @staticmethod
    def _validate_catalog(project: Project, labels=None, components=None) -> None:
        errors = {}
        if labels and any(label.project_id != project.id for label in labels):
            errors['labels'] = ["Labels must belong to the issue's project"]
        if components and any(c.project_id != project.id for c in components):
            errors['components'] = ["Components must belong to the issue's project"]
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _notify_assignee(issue: Issue, actor) -> None:
        if issue.assignee_id is None:
            return
        NotificationService.notify(
            recipients=[issue.assignee_id],
            kind=Notification.Kind.ASSIGNED,
            title=f"{issue.key} was assigned to you",
            message=issue.title,
            issue=issue,
            actor_id=getattr(actor, 'pk', None),
        )

    @staticmethod
    @transaction.atomic
    def create_issue(
        *,
        project: Project,
        title: str,
        reporter=None,
        labels: Sequence = None,
        components: Sequence = None,
        **data
    ) -> Issue:
        """Create a new issue with the next per-project number"""
        IssueService._validate_relations(project, data)
        IssueService._validate_catalog(project, labels, components)

        if data.get('original_estimate') is not None and data.get('time_remaining') is None:
            data['time_remaining'] = data['original_estimate']

        issue = Issue.objects.create(
            project=project,
            issue_number=IssueService._next_issue_number(project),
            title=title,
            reporter=reporter,
            **data
        )
        if labels:
            issue.labels.set(labels)
        if components:
            issue.components.set(components)

        ActivityService.log(
            issue=issue,
            user=reporter,
            action=ActivityLog.Action.CREATED,
            new_value=issue.key,
        )
        WatcherService.watch(issue=issue, user=reporter)
        if issue.assignee_id:
            WatcherService.watch(issue=issue, user=issue.assignee)
            IssueService._notify_assignee(issue, reporter)

        logger.info("[issue] created %s", issue.key)
        return issue

    @staticmethod
    @transaction.atomic
    def update_issue(
        *,
        issue: Issue,
        user=None,
        labels: Sequence = None,
        components: Sequence = None,
        matrix=None,
        **data
    ) -> Issue:
        """Update issue and log changes"""
        unknown = set(data) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({f: ["This field cannot be updated"] for f in sorted(unknown)})

        issue = Issue.objects.select_for_update().select_related('project').get(pk=issue.pk)
        project = issue.project

        IssueService._validate_relations(project, data, issue=issue)
        IssueService._validate_catalog(project, labels, components)

        old_status = issue.status
        if 'status' in data:
            WorkflowService.check_transition(project, old_status, data['status'], matrix=matrix)

        # Track changes for history
        changes = []
        for field, new_value in data.items():
            if field in FK_FIELDS:
                old_value = getattr(issue, field)
                if getattr(old_value, 'pk', None) != getattr(new_value, 'pk', None):
                    changes.append((field, old_value, new_value))
                    setattr(issue, field, new_value)
            else:
                old_value = getattr(issue, field)
                if old_value != new_value:
                    changes.append((field, old_value, new_value))
                    setattr(issue, field, new_value)

        estimate_set = any(f == 'original_estimate' for f, _, _ in changes)
        if estimate_set and 'time_remaining' not in data and issue.time_remaining is None:
            issue.time_remaining = issue.original_estimate

        if labels is not None:
            before = sorted(l.name for l in issue.labels.all())
            issue.labels.set(labels)
            after = sorted(l.name for l in labels)
            if before != after:
                changes.append(('labels', ', '.join(before), ', '.join(after)))
        if components is not None:
            before = sorted(c.name for c in issue.components.all())
            issue.components.set(components)
            after = sorted(c.name for c in components)
            if before != after:
                changes.append(('components', ', '.join(before), ', '.join(after)))

        # Always refresh updated_at on a mutation
        issue.save()

        ActivityService.log_changes(issue=issue, user=user, changes=changes)

        changed = {field for field, _, _ in changes}
        actor_id = getattr(user, 'pk', None)
        if 'assignee' in changed and issue.assignee_id:
            WatcherService.watch(issue=issue, user=issue.assignee)
            IssueService._notify_assignee(issue, user)
        if 'status' in changed:
            NotificationService.notify(
                recipients=WatcherService.watcher_ids(issue),
                kind=Notification.Kind.STATUS_CHANGED,
                title=f"{issue.key} moved to {issue.get_status_display()}",
                message=issue.title,
                issue=issue,
                actor_id=actor_id,
            )

        if changes:
            logger.info("[issue] updated %s: %s", issue.key, ', '.join(sorted(changed)))
        return issue

    @staticmethod
    def delete_issue(*, issue: Issue, user=None) -> None:
        """Delete issue; sub-issues go with it"""
        logger.info("[issue] deleting %s", issue.key)
        issue.delete()

    @staticmethod
    @transaction.atomic
    def bulk_update(*, issue_ids: List[int], user=None, **data) -> List[Issue]:
        """
        Apply the same changes to several issues. All or nothing: any
        validation or workflow error rolls back every issue.
        """
        ids = list(dict.fromkeys(issue_ids))
        issues = list(Issue.objects.select_related('project').filter(pk__in=ids))
        found = {i.pk for i in issues}
        missing = [i for i in ids if i not in found]
        if missing:
            raise ValidationError({'issue_ids': [f"Issue {pk} does not exist" for pk in missing]})

        matrices = {}
        updated = []
        by_id = {i.pk: i for i in issues}
        for pk in ids:
            issue = by_id[pk]
            if issue.project_id not in matrices:
                matrices[issue.project_id] = WorkflowSelector.get_matrix(issue.project_id)
            updated.append(IssueService.update_issue(
                issue=issue, user=user, matrix=matrices[issue.project_id], **data
            ))

        logger.info("[issue] bulk updated %d issue(s)", len(updated))
        return updated
