# ============================================
# tracker/services/workflow.py
# ============================================
import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from tracker.constants import ALL_STATUSES, STATUSES, STATUS_COLUMNS
from tracker.exceptions import WorkflowTransitionError
from tracker.models import BoardConfig, Project, Workflow, WorkflowTransition
from tracker.selectors.workflow import BoardConfigSelector, WorkflowSelector
from tracker.utils.workflow_matrix import TransitionMatrix

logger = logging.getLogger(__name__)


class WorkflowService:

    @staticmethod
    def _validate_pairs(pairs: Iterable[Tuple[str, str]]) -> list:
        cleaned, errors = [], []
        for from_status, to_status in pairs:
            for status in (from_status, to_status):
                if status not in STATUSES:
                    errors.append(f"Unknown status '{status}'")
            if from_status == to_status:
                errors.append(f"'{from_status}' cannot transition to itself")
            cleaned.append((from_status, to_status))
        if errors:
            raise ValidationError({'transitions': sorted(set(errors))})
        return list(dict.fromkeys(cleaned))

    @staticmethod
    @transaction.atomic
    def save_workflow(
        *,
        project: Project,
        transitions: Optional[Sequence[Tuple[str, str]]] = None,
        grid: Optional[Dict[str, Dict[str, bool]]] = None,
        name: str = None,
    ) -> TransitionMatrix:
        """
        Replace the project's allowed transitions. Accepts either sparse
        ``(from, to)`` pairs or the dense editor grid.
        """
        if grid is not None:
            pairs = TransitionMatrix.from_grid(grid).to_pairs()
        else:
            pairs = WorkflowService._validate_pairs(transitions or [])

        workflow, _ = Workflow.objects.get_or_create(
            project=project,
            defaults={'statuses': list(ALL_STATUSES)},
        )
        if name:
            workflow.name = name
        workflow.statuses = list(ALL_STATUSES)
        workflow.save()

        workflow.transitions.all().delete()
        WorkflowTransition.objects.bulk_create([
            WorkflowTransition(workflow=workflow, from_status=a, to_status=b) for a, b in pairs
        ])
        logger.info("[workflow] %s saved with %d transition(s)", project.key, len(pairs))
        return TransitionMatrix(pairs)

    @staticmethod
    def reset_workflow(*, project: Project) -> TransitionMatrix:
        """Drop the stored workflow; every move becomes allowed again"""
        Workflow.objects.filter(project=project).delete()
        return TransitionMatrix.default()

    @staticmethod
    def check_transition(project: Project, from_status: str, to_status: str,
                         matrix: TransitionMatrix = None) -> None:
        """Raises when the move is not allowed. Writing the same status is not a move."""
        if from_status == to_status:
            return
        matrix = matrix or WorkflowSelector.get_matrix(project.id)
        if not matrix.is_allowed(from_status, to_status):
            raise WorkflowTransitionError(from_status, to_status)


class BoardConfigService:

    @staticmethod
    def _clean_column_order(column_order) -> list:
        if not isinstance(column_order, (list, tuple)) or not column_order:
            raise ValidationError({'column_order': ["Must be a non-empty list of statuses"]})
        unknown = [s for s in column_order if s not in STATUSES]
        if unknown:
            raise ValidationError({'column_order': [f"Unknown status '{s}'" for s in unknown]})
        if len(set(column_order)) != len(column_order):
            raise ValidationError({'column_order': ["Statuses must not repeat"]})
        return list(column_order)

    @staticmethod
    def _clean_wip_limits(wip_limits) -> dict:
        if not isinstance(wip_limits, dict):
            raise ValidationError({'wip_limits': ["Must be an object of status -> limit"]})
        cleaned = {}
        for status, limit in wip_limits.items():
            if status not in STATUSES:
                raise ValidationError({'wip_limits': [f"Unknown status '{status}'"]})
            if limit in (None, '', 0):
                # A cleared limit is removed
                continue
            try:
                limit = int(limit)
            except (TypeError, ValueError):
                raise ValidationError({'wip_limits': [f"Limit for '{status}' must be an integer"]})
            if limit < 0:
                raise ValidationError({'wip_limits': [f"Limit for '{status}' must be positive"]})
            cleaned[status] = limit
        return cleaned

    @staticmethod
    def get_or_default(project: Project) -> BoardConfig:
        """Unsaved default instance when the project has no config row"""
        config = BoardConfigSelector.get_config(project.id)
        if config is None:
            config = BoardConfig(project=project, wip_limits={}, column_order=list(STATUS_COLUMNS))
        return config

    @staticmethod
    @transaction.atomic
    def update_config(*, project: Project, **data) -> BoardConfig:
        config, _ = BoardConfig.objects.select_for_update().get_or_create(project=project)
        if 'column_order' in data:
            config.column_order = BoardConfigService._clean_column_order(data['column_order'])
        if 'wip_limits' in data:
            config.wip_limits = BoardConfigService._clean_wip_limits(data['wip_limits'] or {})
        if 'swimlane_by' in data:
            config.swimlane_by = data['swimlane_by']
        config.save()
        return config
