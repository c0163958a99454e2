import pytest
from tracker.constants import IssueStatus, IssueType
from tracker.models import Comment, Issue
from tracker.services.issue import IssueService
from tracker.services.watcher import WatcherService
from tracker.services.workflow import WorkflowService


@pytest.mark.django_db
def test_issue_create_parses_duration(api_client, project):
    resp = api_client.post(
        f"/api/projects/{project.id}/issues/",
        {"title": "Login page", "type": "story", "original_estimate": "1h 30m"},
        format="json",
    )
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["key"] == "WEB-1"
    assert body["status"] == "todo"
    assert body["original_estimate"] == 90
    assert body["original_estimate_display"] == "1h 30m"
    assert body["time_remaining"] == 90
    assert body["type_meta"]["label"] == "Story"


@pytest.mark.django_db
def test_issue_create_rejects_bad_duration(api_client, project):
    resp = api_client.post(
        f"/api/projects/{project.id}/issues/", {"title": "X", "original_estimate": "soon"}, format="json"
    )
    assert resp.status_code == 400
    assert "original_estimate" in resp.json()


@pytest.mark.django_db
def test_issue_list_filters(api_client, project, make_issue):
    make_issue("Crash on save", type=IssueType.BUG)
    make_issue("Add search", type=IssueType.STORY)
    make_issue("Broken link", type=IssueType.BUG, status=IssueStatus.DONE)

    resp = api_client.get(f"/api/projects/{project.id}/issues/", {"type": "bug", "status": "todo"})
    assert resp.status_code == 200
    assert [i["title"] for i in resp.json()["results"]] == ["Crash on save"]

    resp = api_client.get(f"/api/projects/{project.id}/issues/", {"q": "WEB-2"})
    assert [i["key"] for i in resp.json()["results"]] == ["WEB-2"]


@pytest.mark.django_db
def test_issue_search_sorts_and_pages(api_client, project, make_issue):
    for n in range(3):
        make_issue(f"Issue {n}")
    resp = api_client.get("/api/issues/search/", {"project": project.id, "sort": "issue_number", "page_size": 2})
    body = resp.json()
    assert body["count"] == 3
    assert [i["issue_number"] for i in body["results"]] == [1, 2]


@pytest.mark.django_db
def test_disallowed_transition_is_409(api_client, project, make_issue):
    WorkflowService.save_workflow(project=project, transitions=[("todo", "in_progress")])
    issue = make_issue()

    resp = api_client.patch(f"/api/issues/{issue.id}/", {"status": "done"}, format="json")
    assert resp.status_code == 409
    assert "not allowed" in resp.json()["detail"]

    resp = api_client.patch(f"/api/issues/{issue.id}/", {"status": "todo", "title": "Renamed"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Renamed"


@pytest.mark.django_db
def test_bulk_update(api_client, make_issue, other_user):
    a, b = make_issue("A"), make_issue("B")
    resp = api_client.post(
        "/api/issues/bulk/", {"issue_ids": [a.id, b.id], "assignee": other_user.id}, format="json"
    )
    assert resp.status_code == 200, resp.content
    assert Issue.objects.filter(assignee=other_user).count() == 2

    resp = api_client.post("/api/issues/bulk/", {"issue_ids": [a.id]}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_children_and_delete(api_client, make_issue):
    epic = make_issue("Epic", type=IssueType.EPIC)
    child = make_issue("Child", parent=epic)

    resp = api_client.get(f"/api/issues/{epic.id}/children/")
    assert [i["id"] for i in resp.json()] == [child.id]

    assert api_client.delete(f"/api/issues/{epic.id}/").status_code == 204
    assert not Issue.objects.filter(pk=child.pk).exists()


@pytest.mark.django_db
def test_comment_edit_is_author_only(api_client, make_issue, other_user):
    from rest_framework.test import APIClient
    issue = make_issue()
    resp = api_client.post(f"/api/issues/{issue.id}/comments/", {"content": "First!"}, format="json")
    assert resp.status_code == 201
    comment_id = resp.json()["id"]

    stranger = APIClient()
    stranger.force_authenticate(user=other_user)
    assert stranger.patch(f"/api/comments/{comment_id}/", {"content": "Mine now"}, format="json").status_code == 403

    assert api_client.patch(f"/api/comments/{comment_id}/", {"content": "Edited"}, format="json").status_code == 200
    assert Comment.objects.get(pk=comment_id).content == "Edited"


@pytest.mark.django_db
def test_worklog_endpoint(api_client, make_issue):
    issue = make_issue(original_estimate=240)
    resp = api_client.post(f"/api/issues/{issue.id}/worklogs/", {"time_spent": "1h 30m"}, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.json()["time_spent_display"] == "1h 30m"

    detail = api_client.get(f"/api/issues/{issue.id}/").json()
    assert (detail["time_spent"], detail["time_remaining"]) == (90, 150)
    assert detail["time_remaining_display"] == "2h 30m"


@pytest.mark.django_db
def test_links_show_inverse_from_target(api_client, make_issue):
    blocker, blocked = make_issue("Blocker"), make_issue("Blocked")
    resp = api_client.post(
        f"/api/issues/{blocker.id}/links/", {"target": blocked.id, "link_type": "blocks"}, format="json"
    )
    assert resp.status_code == 201, resp.content

    incoming = api_client.get(f"/api/issues/{blocked.id}/links/").json()
    assert [(link["label"], link["direction"], link["issue"]["id"]) for link in incoming] == [
        ("is blocked by", "incoming", blocker.id)
    ]

    self_link = api_client.post(
        f"/api/issues/{blocker.id}/links/", {"target": blocker.id, "link_type": "blocks"}, format="json"
    )
    assert self_link.status_code == 400


@pytest.mark.django_db
def test_notifications_flow(make_issue, user, other_user):
    from rest_framework.test import APIClient
    make_issue("Assigned", assignee=other_user)
    client = APIClient()
    client.force_authenticate(user=other_user)

    assert client.get("/api/notifications/unread-count/").json() == {"unread": 1}
    notes = client.get("/api/notifications/", {"unread": "1"}).json()["results"]
    assert notes[0]["kind"] == "assigned"

    resp = client.post(f"/api/notifications/{notes[0]['id']}/read/")
    assert resp.json()["is_read"] is True
    assert client.get("/api/notifications/unread-count/").json() == {"unread": 0}


@pytest.mark.django_db
def test_saved_filter_applies_to_list(api_client, project, make_issue):
    make_issue("Bug one", type=IssueType.BUG)
    make_issue("Story one", type=IssueType.STORY)

    resp = api_client.post(
        "/api/saved-filters/", {"name": "Bugs", "project": project.id, "criteria": {"type": "bug"}}, format="json"
    )
    assert resp.status_code == 201, resp.content

    listed = api_client.get(f"/api/projects/{project.id}/issues/", {"filter": resp.json()["id"]}).json()
    assert [i["title"] for i in listed["results"]] == ["Bug one"]

    bad = api_client.post("/api/saved-filters/", {"name": "Bad", "criteria": {"colour": "red"}}, format="json")
    assert bad.status_code == 400


@pytest.mark.django_db
def test_my_issues(api_client, user, other_user, make_issue):
    mine = make_issue("Mine", assignee=user)
    make_issue("Theirs", assignee=other_user)

    assigned = api_client.get("/api/me/assigned/").json()
    assert [i["title"] for i in assigned["results"]] == ["Mine"]

    reported = api_client.get("/api/me/reported/", {"q": "theirs"}).json()
    assert [i["title"] for i in reported["results"]] == ["Theirs"]

    WatcherService.unwatch(issue=mine, user=user)
    watching = api_client.get("/api/me/watching/").json()
    assert [i["title"] for i in watching["results"]] == ["Theirs"]


@pytest.mark.django_db
def test_recent_issues(api_client, user, make_issue):
    first = make_issue("First")
    make_issue("Second")
    make_issue("Third")
    IssueService.update_issue(issue=first, user=user, title="First again")

    resp = api_client.get("/api/issues/recent/", {"limit": 2})
    assert resp.status_code == 200
    assert [i["title"] for i in resp.json()] == ["First again", "Third"]
