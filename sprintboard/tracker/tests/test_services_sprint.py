import pytest
from django.core.exceptions import ValidationError
from tracker.constants import IssueStatus, SprintStatus
from tracker.exceptions import SprintStateError
from tracker.models import ActivityLog, Issue, Notification, Sprint
from tracker.services.sprint import SprintService


@pytest.mark.django_db
def test_new_sprint_is_planning_with_default_name(project, sprint):
    second = SprintService.create_sprint(project=project)
    assert sprint.status == SprintStatus.PLANNING
    assert second.name == "WEB Sprint 2"


@pytest.mark.django_db
def test_start_sets_active_and_start_date(sprint):
    started = SprintService.start_sprint(sprint=sprint)
    assert started.status == SprintStatus.ACTIVE
    assert started.start_date is not None


@pytest.mark.django_db
def test_only_one_active_sprint_per_project(project, sprint):
    other = SprintService.create_sprint(project=project, name="Next")
    SprintService.start_sprint(sprint=sprint)

    with pytest.raises(SprintStateError):
        SprintService.start_sprint(sprint=other)

    other.refresh_from_db()
    sprint.refresh_from_db()
    assert other.status == SprintStatus.PLANNING
    assert other.start_date is None
    assert sprint.status == SprintStatus.ACTIVE


@pytest.mark.django_db
def test_start_requires_planning(sprint):
    SprintService.start_sprint(sprint=sprint)
    with pytest.raises(SprintStateError):
        SprintService.start_sprint(sprint=sprint)


@pytest.mark.django_db
def test_complete_moves_unfinished_issues_to_backlog(sprint, make_issue, user, other_user):
    done = make_issue("Done", sprint=sprint, status=IssueStatus.DONE, story_points=3)
    open_issue = make_issue("Open", sprint=sprint, story_points=5, assignee=other_user)
    SprintService.start_sprint(sprint=sprint, user=user)
    before = open_issue.updated_at

    result = SprintService.complete_sprint(sprint=sprint, user=user)

    assert (result.completed_issues, result.moved_to_backlog) == (1, 1)
    done.refresh_from_db()
    open_issue.refresh_from_db()
    assert done.sprint_id == sprint.id
    assert open_issue.sprint_id is None
    assert open_issue.updated_at > before

    sprint.refresh_from_db()
    assert sprint.status == SprintStatus.COMPLETED
    assert sprint.completed_at is not None
    assert (sprint.committed_points, sprint.completed_points) == (8, 3)
    assert ActivityLog.objects.filter(issue=open_issue, field="sprint").exists()
    assert Notification.objects.filter(user=other_user, kind=Notification.Kind.SPRINT_COMPLETED).exists()


@pytest.mark.django_db
def test_complete_returns_exactly_the_open_issues_to_backlog(sprint, make_issue):
    already_in_backlog = make_issue("Loose")
    done = [make_issue(f"Done {n}", sprint=sprint, status=IssueStatus.DONE) for n in range(3)]
    unfinished = [
        make_issue("Doing", sprint=sprint, status=IssueStatus.IN_PROGRESS),
        make_issue("Todo", sprint=sprint),
    ]
    SprintService.start_sprint(sprint=sprint)

    result = SprintService.complete_sprint(sprint=sprint)

    assert (result.completed_issues, result.moved_to_backlog) == (3, 2)
    assert set(Issue.objects.filter(sprint=sprint).values_list("id", flat=True)) == {i.id for i in done}
    backlog = set(Issue.objects.filter(sprint__isnull=True).values_list("id", flat=True))
    assert backlog == {already_in_backlog.id} | {i.id for i in unfinished}
    assert Issue.objects.get(pk=unfinished[0].pk).status == IssueStatus.IN_PROGRESS


@pytest.mark.django_db
def test_complete_requires_active(sprint):
    with pytest.raises(SprintStateError):
        SprintService.complete_sprint(sprint=sprint)

    SprintService.start_sprint(sprint=sprint)
    SprintService.complete_sprint(sprint=sprint)
    with pytest.raises(SprintStateError):
        SprintService.complete_sprint(sprint=sprint)
    with pytest.raises(SprintStateError):
        SprintService.start_sprint(sprint=Sprint.objects.get(pk=sprint.pk))


@pytest.mark.django_db
def test_status_cannot_be_patched(sprint):
    with pytest.raises(ValidationError):
        SprintService.update_sprint(sprint=sprint, status=SprintStatus.ACTIVE)


@pytest.mark.django_db
def test_end_date_not_before_start(sprint):
    from datetime import datetime, timezone
    with pytest.raises(ValidationError):
        SprintService.update_sprint(
            sprint=sprint,
            start_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
            end_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )


@pytest.mark.django_db
def test_delete_planning_sprint_returns_issues_to_backlog(sprint, make_issue):
    issue = make_issue(sprint=sprint)
    SprintService.delete_sprint(sprint=sprint)
    issue.refresh_from_db()
    assert issue.sprint_id is None


@pytest.mark.django_db
def test_active_sprint_cannot_be_deleted(sprint):
    SprintService.start_sprint(sprint=sprint)
    with pytest.raises(SprintStateError):
        SprintService.delete_sprint(sprint=Sprint.objects.get(pk=sprint.pk))
