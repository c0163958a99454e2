import pytest
from tracker.constants import IssueStatus
from tracker.services.issue import IssueService
from tracker.services.sprint import SprintService


@pytest.mark.django_db
def test_sprint_lifecycle_over_http(api_client, project, make_issue):
    resp = api_client.post(f"/api/projects/{project.id}/sprints/", {"goal": "MVP"}, format="json")
    assert resp.status_code == 201, resp.content
    sprint_id = resp.json()["id"]
    assert resp.json()["name"] == "WEB Sprint 1"
    assert resp.json()["status"] == "planning"

    make_issue("Done", sprint_id=sprint_id, status=IssueStatus.DONE, story_points=2)
    make_issue("Open", sprint_id=sprint_id, story_points=3)

    resp = api_client.post(f"/api/sprints/{sprint_id}/start/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "active"

    report = api_client.get(f"/api/sprints/{sprint_id}/report/").json()
    assert report["stats"]["percent"] == 50

    resp = api_client.post(f"/api/sprints/{sprint_id}/complete/")
    assert resp.status_code == 200
    assert (resp.json()["completed_issues"], resp.json()["moved_to_backlog"]) == (1, 1)

    velocity = api_client.get(f"/api/projects/{project.id}/velocity/").json()
    assert [(v["committed"], v["completed"]) for v in velocity] == [(5, 2)]


@pytest.mark.django_db
def test_second_active_sprint_is_409(api_client, project, sprint):
    other = api_client.post(f"/api/projects/{project.id}/sprints/", {"name": "Other"}, format="json").json()
    assert api_client.post(f"/api/sprints/{sprint.id}/start/").status_code == 200

    resp = api_client.post(f"/api/sprints/{other['id']}/start/")
    assert resp.status_code == 409
    assert "already active" in resp.json()["detail"]


@pytest.mark.django_db
def test_complete_planning_sprint_is_409(api_client, sprint):
    assert api_client.post(f"/api/sprints/{sprint.id}/complete/").status_code == 409


@pytest.mark.django_db
def test_sprint_status_cannot_be_patched(api_client, sprint):
    resp = api_client.patch(f"/api/sprints/{sprint.id}/", {"status": "active"}, format="json")
    assert resp.status_code == 400
    assert "status" in resp.json()

    resp = api_client.patch(f"/api/sprints/{sprint.id}/", {"goal": "New goal"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["goal"] == "New goal"


@pytest.mark.django_db
def test_active_sprint_delete_is_409(api_client, sprint):
    api_client.post(f"/api/sprints/{sprint.id}/start/")
    assert api_client.delete(f"/api/sprints/{sprint.id}/").status_code == 409


@pytest.mark.django_db
def test_sprint_burndown(api_client, user, sprint, make_issue):
    assert api_client.get(f"/api/sprints/{sprint.id}/burndown/").json()["points"] == []

    finished = make_issue("Finished", sprint=sprint, story_points=3)
    make_issue("Open", sprint=sprint, story_points=5)
    SprintService.start_sprint(sprint=sprint)
    IssueService.update_issue(issue=finished, user=user, status=IssueStatus.DONE)

    points = api_client.get(f"/api/sprints/{sprint.id}/burndown/").json()["points"]
    assert len(points) == 1
    assert points[0]["remaining"] == 5
    assert points[0]["ideal"] == 0.0
