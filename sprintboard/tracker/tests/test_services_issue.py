import pytest
from django.core.exceptions import ValidationError
from tracker.constants import IssueStatus, IssueType
from tracker.exceptions import WorkflowTransitionError
from tracker.models import ActivityLog, Issue, Notification, Project, Watcher
from tracker.services.issue import IssueService
from tracker.services.project import ProjectService
from tracker.services.sprint import SprintService
from tracker.services.workflow import WorkflowService
from tracker.services.worklog import WorkLogService


@pytest.mark.django_db
def test_issue_numbers_are_sequential_per_project(project, user, make_issue):
    first, second = make_issue("A"), make_issue("B")
    other = ProjectService.create_project(name="Mobile", key="MOB", creator=user)
    third = make_issue("C", project=other)

    assert (first.issue_number, second.issue_number) == (1, 2)
    assert first.key == "WEB-1"
    assert third.key == "MOB-1"


@pytest.mark.django_db
def test_numbers_are_never_reused(make_issue, user, project):
    make_issue("A")
    second = make_issue("B")
    IssueService.delete_issue(issue=second, user=user)
    assert make_issue("C").issue_number == 3

    third = Issue.objects.get(issue_number=3)
    IssueService.delete_issue(issue=third, user=user)
    assert make_issue("D").issue_number == 4

    project.refresh_from_db()
    assert project.last_issue_number == 4


@pytest.mark.django_db
def test_project_update_keeps_issue_sequence(make_issue, user, project):
    stale = Project.objects.get(pk=project.pk)
    make_issue("A")
    ProjectService.update_project(project=stale, user=user, name="Website v2")
    assert make_issue("B").issue_number == 2


@pytest.mark.django_db
def test_create_defaults_remaining_to_estimate(make_issue):
    issue = make_issue("Estimate", original_estimate=120)
    assert issue.time_remaining == 120
    assert issue.time_spent == 0


@pytest.mark.django_db
def test_create_logs_and_watches(make_issue, user, other_user):
    issue = make_issue("Watched", assignee=other_user)

    assert ActivityLog.objects.filter(issue=issue, action=ActivityLog.Action.CREATED).count() == 1
    assert set(Watcher.objects.filter(issue=issue).values_list("user_id", flat=True)) == {user.pk, other_user.pk}
    note = Notification.objects.get(user=other_user)
    assert note.kind == Notification.Kind.ASSIGNED
    assert not Notification.objects.filter(user=user).exists()


@pytest.mark.django_db
def test_update_tracks_changes(make_issue, user):
    issue = make_issue("Old title", priority="low")
    IssueService.update_issue(issue=issue, user=user, title="New title", priority="low")

    logs = ActivityLog.objects.filter(issue=issue, action=ActivityLog.Action.UPDATED)
    assert [(log.field, log.old_value, log.new_value) for log in logs] == [("title", "Old title", "New title")]


@pytest.mark.django_db
def test_update_rejects_unknown_fields(make_issue, user):
    issue = make_issue()
    with pytest.raises(ValidationError):
        IssueService.update_issue(issue=issue, user=user, issue_number=99)


@pytest.mark.django_db
def test_workflow_is_enforced_on_update(project, make_issue, user):
    WorkflowService.save_workflow(project=project, transitions=[("todo", "in_progress"), ("in_progress", "done")])
    issue = make_issue()

    with pytest.raises(WorkflowTransitionError):
        IssueService.update_issue(issue=issue, user=user, status=IssueStatus.DONE)
    issue.refresh_from_db()
    assert issue.status == IssueStatus.TODO

    IssueService.update_issue(issue=issue, user=user, status=IssueStatus.IN_PROGRESS)
    # writing the current status is not a transition
    IssueService.update_issue(issue=issue, user=user, status=IssueStatus.IN_PROGRESS, title="Still here")
    issue.refresh_from_db()
    assert (issue.status, issue.title) == (IssueStatus.IN_PROGRESS, "Still here")


@pytest.mark.django_db
def test_status_change_notifies_watchers(make_issue, user, other_user):
    issue = make_issue(assignee=other_user)
    Notification.objects.all().delete()

    IssueService.update_issue(issue=issue, user=user, status=IssueStatus.IN_PROGRESS)
    assert list(Notification.objects.values_list("user_id", "kind")) == [
        (other_user.pk, Notification.Kind.STATUS_CHANGED)
    ]


@pytest.mark.django_db
def test_parent_must_be_in_same_project(make_issue, user):
    other = ProjectService.create_project(name="Mobile", key="MOB", creator=user)
    foreign = make_issue("Foreign", project=other)
    with pytest.raises(ValidationError) as exc:
        make_issue("Child", parent=foreign)
    assert "parent" in exc.value.message_dict


@pytest.mark.django_db
def test_epic_cannot_have_parent(make_issue):
    story = make_issue("Story", type=IssueType.STORY)
    with pytest.raises(ValidationError):
        make_issue("Epic", type=IssueType.EPIC, parent=story)


@pytest.mark.django_db
def test_parent_cycle_is_rejected(make_issue, user):
    epic = make_issue("Epic", type=IssueType.EPIC)
    story = make_issue("Story", parent=epic)
    task = make_issue("Task", parent=story)
    with pytest.raises(ValidationError):
        IssueService.update_issue(issue=story, user=user, parent=task)
    with pytest.raises(ValidationError):
        IssueService.update_issue(issue=story, user=user, parent=story)


@pytest.mark.django_db
def test_due_date_not_before_start(make_issue):
    import datetime
    with pytest.raises(ValidationError):
        make_issue(start_date=datetime.date(2024, 2, 1), due_date=datetime.date(2024, 1, 1))


@pytest.mark.django_db
def test_completed_sprint_cannot_take_issues(sprint, make_issue, user):
    SprintService.start_sprint(sprint=sprint)
    SprintService.complete_sprint(sprint=sprint)
    sprint.refresh_from_db()

    with pytest.raises(ValidationError):
        make_issue("Late", sprint=sprint)


@pytest.mark.django_db
def test_bulk_update_is_all_or_nothing(project, make_issue, user):
    WorkflowService.save_workflow(project=project, transitions=[("todo", "in_progress")])
    movable = make_issue("Movable")
    stuck = make_issue("Stuck", status=IssueStatus.DONE)

    with pytest.raises(WorkflowTransitionError):
        IssueService.bulk_update(issue_ids=[movable.id, stuck.id], user=user, status=IssueStatus.IN_PROGRESS)

    movable.refresh_from_db()
    assert movable.status == IssueStatus.TODO


@pytest.mark.django_db
def test_bulk_update_applies_to_every_issue(make_issue, user, other_user):
    issues = [make_issue("A"), make_issue("B")]
    updated = IssueService.bulk_update(issue_ids=[i.id for i in issues], user=user, assignee=other_user, priority="high")
    assert {(i.assignee_id, i.priority) for i in updated} == {(other_user.pk, "high")}


@pytest.mark.django_db
def test_bulk_update_reports_missing_issues(make_issue, user):
    issue = make_issue()
    with pytest.raises(ValidationError) as exc:
        IssueService.bulk_update(issue_ids=[issue.id, 999999], user=user, priority="low")
    assert "issue_ids" in exc.value.message_dict


@pytest.mark.django_db
def test_work_log_burns_down_remaining(make_issue, user):
    issue = make_issue(original_estimate=60)

    WorkLogService.log_work(issue=issue, user=user, time_spent=30)
    issue.refresh_from_db()
    assert (issue.time_spent, issue.time_remaining) == (30, 30)

    worklog = WorkLogService.log_work(issue=issue, user=user, time_spent=90)
    issue.refresh_from_db()
    assert (issue.time_spent, issue.time_remaining) == (120, 0)

    WorkLogService.delete_worklog(worklog=worklog)
    issue.refresh_from_db()
    assert (issue.time_spent, issue.time_remaining) == (30, 0)


@pytest.mark.django_db
def test_work_log_without_estimate_keeps_remaining_empty(make_issue, user):
    issue = make_issue()
    WorkLogService.log_work(issue=issue, user=user, time_spent=15)
    issue.refresh_from_db()
    assert (issue.time_spent, issue.time_remaining) == (15, None)

    with pytest.raises(ValidationError):
        WorkLogService.log_work(issue=issue, user=user, time_spent=0)
