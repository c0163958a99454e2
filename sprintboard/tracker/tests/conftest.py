import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from tracker.constants import IssueStatus
from tracker.services.issue import IssueService
from tracker.services.project import ProjectService
from tracker.services.sprint import SprintService

User = get_user_model()


@pytest.fixture
def user(db):
    return User.objects.create_user(username="tester", password="pass", first_name="Test", last_name="User")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="dev", password="pass")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def project(user):
    return ProjectService.create_project(name="Website Redesign", key="WEB", creator=user)


@pytest.fixture
def sprint(project):
    return SprintService.create_sprint(project=project, name="WEB Sprint 1", goal="Ship the homepage")


@pytest.fixture
def make_issue(project, user):
    def _make(title="Issue", **data):
        data.setdefault("status", IssueStatus.TODO)
        return IssueService.create_issue(project=data.pop("project", project), title=title, reporter=user, **data)
    return _make
