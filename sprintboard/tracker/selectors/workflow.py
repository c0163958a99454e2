# ============================================
# tracker/selectors/workflow.py
# ============================================
from typing import Optional
from tracker.models import BoardConfig, Workflow
from tracker.utils.workflow_matrix import TransitionMatrix


class WorkflowSelector:

    @staticmethod
    def get_workflow(project_id: int) -> Optional[Workflow]:
        try:
            return Workflow.objects.prefetch_related('transitions').get(project_id=project_id)
        except Workflow.DoesNotExist:
            return None

    @staticmethod
    def get_matrix(project_id: int) -> TransitionMatrix:
        """Allowed transitions for a project; permissive when no workflow is stored"""
        workflow = WorkflowSelector.get_workflow(project_id)
        if workflow is None:
            return TransitionMatrix.default()
        return TransitionMatrix(
            (t.from_status, t.to_status) for t in workflow.transitions.all()
        )


class BoardConfigSelector:

    @staticmethod
    def get_config(project_id: int) -> Optional[BoardConfig]:
        return BoardConfig.objects.filter(project_id=project_id).first()
