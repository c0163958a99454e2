import pytest
from django.core.exceptions import ValidationError
from tracker.exceptions import WorkflowTransitionError
from tracker.models import BoardConfig, Workflow
from tracker.selectors.workflow import WorkflowSelector
from tracker.services.workflow import BoardConfigService, WorkflowService


@pytest.mark.django_db
def test_project_without_workflow_allows_everything(project):
    matrix = WorkflowSelector.get_matrix(project.id)
    assert matrix.configured is False
    WorkflowService.check_transition(project, "done", "backlog")


@pytest.mark.django_db
def test_save_workflow_replaces_transitions(project):
    WorkflowService.save_workflow(project=project, transitions=[("todo", "done")])
    WorkflowService.save_workflow(project=project, transitions=[("todo", "in_progress")], name="Strict")

    workflow = Workflow.objects.get(project=project)
    assert workflow.name == "Strict"
    assert WorkflowSelector.get_matrix(project.id).to_pairs() == [("todo", "in_progress")]


@pytest.mark.django_db
def test_save_workflow_from_grid(project):
    matrix = WorkflowService.save_workflow(project=project, grid={"todo": {"done": True, "backlog": False}})
    assert matrix.to_pairs() == [("todo", "done")]
    assert WorkflowSelector.get_matrix(project.id).is_allowed("todo", "done")


@pytest.mark.django_db
def test_save_workflow_rejects_bad_pairs(project):
    with pytest.raises(ValidationError):
        WorkflowService.save_workflow(project=project, transitions=[("todo", "blocked")])
    with pytest.raises(ValidationError):
        WorkflowService.save_workflow(project=project, transitions=[("todo", "todo")])


@pytest.mark.django_db
def test_check_transition(project):
    WorkflowService.save_workflow(project=project, transitions=[("todo", "in_progress")])
    WorkflowService.check_transition(project, "todo", "in_progress")
    WorkflowService.check_transition(project, "done", "done")
    with pytest.raises(WorkflowTransitionError):
        WorkflowService.check_transition(project, "in_progress", "todo")


@pytest.mark.django_db
def test_reset_workflow(project):
    WorkflowService.save_workflow(project=project, transitions=[])
    assert not WorkflowSelector.get_matrix(project.id).is_allowed("todo", "done")

    WorkflowService.reset_workflow(project=project)
    assert WorkflowSelector.get_workflow(project.id) is None
    assert WorkflowSelector.get_matrix(project.id).is_allowed("todo", "done")


@pytest.mark.django_db
def test_board_config_defaults_and_update(project):
    config = BoardConfigService.get_or_default(project)
    assert list(config.column_order) == ["todo", "in_progress", "in_review", "done"]

    BoardConfigService.update_config(project=project, column_order=["todo", "done"], wip_limits={"todo": 3})
    saved = BoardConfig.objects.get(project=project)
    assert saved.column_order == ["todo", "done"]
    assert saved.wip_limits == {"todo": 3}


@pytest.mark.django_db
def test_board_config_rejects_unknown_columns(project):
    with pytest.raises(ValidationError):
        BoardConfigService.update_config(project=project, column_order=["todo", "blocked"])
    with pytest.raises(ValidationError):
        BoardConfigService.update_config(project=project, wip_limits={"todo": -1})
