import pytest
from tracker.constants import IssueStatus, IssueType
from tracker.services.sprint import SprintService


@pytest.mark.django_db
def test_board_columns(api_client, project, make_issue):
    make_issue("A")
    make_issue("B", status=IssueStatus.IN_PROGRESS)
    make_issue("C", status=IssueStatus.BACKLOG)

    resp = api_client.get(f"/api/projects/{project.id}/board/")
    assert resp.status_code == 200
    body = resp.json()
    columns = {c["status"]: c for c in body["columns"]}
    assert [c["status"] for c in body["columns"] if c["visible"]] == ["todo", "in_progress", "in_review", "done"]
    assert columns["backlog"]["visible"] is False
    assert sum(c["count"] for c in body["columns"]) == body["total"] == 3


@pytest.mark.django_db
def test_board_active_sprint_and_wip(api_client, project, sprint, make_issue):
    make_issue("In sprint", sprint=sprint, status=IssueStatus.IN_PROGRESS)
    make_issue("In sprint too", sprint=sprint, status=IssueStatus.IN_PROGRESS)
    make_issue("Elsewhere")
    SprintService.start_sprint(sprint=sprint)

    resp = api_client.patch(
        f"/api/projects/{project.id}/board-config/",
        {"wip_limits": {"in_progress": 1}, "swimlane_by": "priority"},
        format="json",
    )
    assert resp.status_code == 200, resp.content

    body = api_client.get(f"/api/projects/{project.id}/board/", {"sprint": "active"}).json()
    columns = {c["status"]: c for c in body["columns"]}
    assert body["total"] == 2
    assert columns["in_progress"]["over_limit"] is True
    assert [lane["key"] for lane in body["swimlanes"]] == ["medium"]


@pytest.mark.django_db
def test_backlog_groups(api_client, project, sprint, make_issue):
    make_issue("Planned", sprint=sprint, story_points=3)
    make_issue("Loose", story_points=2)

    groups = api_client.get(f"/api/projects/{project.id}/backlog/").json()
    assert [(g["label"], g["story_points"]) for g in groups] == [("WEB Sprint 1", 3), ("Backlog", 2)]


@pytest.mark.django_db
def test_epics_and_roadmap(api_client, project, make_issue):
    import datetime
    epic = make_issue(
        "Checkout", type=IssueType.EPIC,
        start_date=datetime.date(2024, 1, 11), due_date=datetime.date(2024, 1, 31),
    )
    make_issue("Pay", parent=epic, status=IssueStatus.DONE)
    make_issue("Ship", parent=epic)
    make_issue("Someday", type=IssueType.EPIC)

    epics = api_client.get(f"/api/projects/{project.id}/epics/").json()
    assert [(e["total"], e["done"], e["percent"]) for e in epics] == [(2, 1, 50), (0, 0, 0)]

    roadmap = api_client.get(f"/api/projects/{project.id}/roadmap/", {"anchor": "2024-01-15"}).json()
    assert roadmap["window"]["start"] == "2023-12-01"
    assert [m["label"] for m in roadmap["months"]] == ["Dec 2023", "Jan 2024", "Feb 2024"]
    assert roadmap["unscheduled"] == 1

    assert api_client.get(f"/api/projects/{project.id}/roadmap/", {"anchor": "soon"}).status_code == 400


@pytest.mark.django_db
def test_workflow_endpoints(api_client, project):
    resp = api_client.get(f"/api/projects/{project.id}/workflow/")
    assert resp.json()["configured"] is False

    resp = api_client.put(
        f"/api/projects/{project.id}/workflow/",
        {"transitions": [{"from_status": "todo", "to_status": "in_progress"}]},
        format="json",
    )
    assert resp.status_code == 200, resp.content
    assert resp.json()["grid"]["todo"]["in_progress"] is True

    targets = api_client.get(f"/api/projects/{project.id}/workflow/transitions/todo/").json()["targets"]
    assert [t["status"] for t in targets] == ["in_progress"]

    resp = api_client.put(f"/api/projects/{project.id}/workflow/", {"reset": True}, format="json")
    assert resp.json()["configured"] is False


@pytest.mark.django_db
@pytest.mark.parametrize("text, expected", [("web", 11), ("WEB-1", 3), ("web-11", 1), ("Task 7", 1)])
def test_text_filter_matches_on_list_and_board(api_client, project, make_issue, text, expected):
    for n in range(1, 12):
        make_issue(f"Task {n}")

    board = api_client.get(f"/api/projects/{project.id}/board/", {"q": text}).json()
    listed = api_client.get(f"/api/projects/{project.id}/issues/", {"q": text}).json()
    searched = api_client.get("/api/issues/search/", {"q": text}).json()

    assert board["total"] == listed["count"] == searched["count"] == expected
