import pytest
from rest_framework.test import APIClient
from tracker.models import Project, ProjectMember


@pytest.mark.django_db
def test_project_create_derives_key(api_client, user):
    resp = api_client.post("/api/projects/", {"name": "Website Redesign"}, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.json()["key"] == "WEBS"
    project = Project.objects.get(key="WEBS")
    assert project.lead_id == user.pk
    assert ProjectMember.objects.filter(project=project, user=user, role="admin").exists()


@pytest.mark.django_db
def test_project_key_must_be_unique(api_client, project):
    resp = api_client.post("/api/projects/", {"name": "Web again", "key": "WEB"}, format="json")
    assert resp.status_code == 400
    assert "key" in resp.json()


@pytest.mark.django_db
def test_project_list_and_search(api_client, project):
    resp = api_client.get("/api/projects/", {"search": "web"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert body["results"][0]["key"] == "WEB"


@pytest.mark.django_db
def test_requires_authentication(project):
    resp = APIClient().get("/api/projects/")
    assert resp.status_code in (401, 403)


@pytest.mark.django_db
def test_only_managers_can_edit_project(project, other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    resp = client.patch(f"/api/projects/{project.id}/", {"name": "Hijacked"}, format="json")
    assert resp.status_code == 403
    project.refresh_from_db()
    assert project.name == "Website Redesign"


@pytest.mark.django_db
def test_member_add_and_remove(api_client, project, other_user):
    resp = api_client.post(
        f"/api/projects/{project.id}/members/", {"user": other_user.id, "role": "member"}, format="json"
    )
    assert resp.status_code == 201, resp.content
    member_id = resp.json()["id"]

    dup = api_client.post(f"/api/projects/{project.id}/members/", {"user": other_user.id}, format="json")
    assert dup.status_code == 400

    resp = api_client.delete(f"/api/members/{member_id}/")
    assert resp.status_code == 204


@pytest.mark.django_db
def test_missing_project_is_404(api_client):
    resp = api_client.get("/api/projects/999999/")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Project not found"


@pytest.mark.django_db
def test_registries_endpoint(api_client):
    resp = api_client.get("/api/registries/")
    assert resp.status_code == 200
    assert [s["key"] for s in resp.json()["status"]][0] == "backlog"
