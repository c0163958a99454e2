# ============================================
# tracker/services/saved_filter.py
# ============================================
from django.core.exceptions import ValidationError
from tracker.models import Project, SavedFilter
from tracker.selectors.board import IssueFilter

CRITERIA_KEYS = ('type', 'status', 'priority', 'assignee', 'q', 'sprint', 'label', 'sort')


class SavedFilterService:

    @staticmethod
    def create_filter(*, user, name: str, criteria: dict, project: Project = None) -> SavedFilter:
        """Only known criteria keys are stored"""
        if not isinstance(criteria, dict):
            raise ValidationError({'criteria': ["Must be an object"]})
        unknown = sorted(set(criteria) - set(CRITERIA_KEYS))
        if unknown:
            raise ValidationError({'criteria': [f"Unknown criterion '{k}'" for k in unknown]})
        return SavedFilter.objects.create(user=user, project=project, name=name, criteria=criteria)

    @staticmethod
    def delete_filter(*, saved_filter: SavedFilter) -> None:
        saved_filter.delete()

    @staticmethod
    def to_issue_filter(saved_filter: SavedFilter) -> IssueFilter:
        return IssueFilter.from_params(saved_filter.criteria)

    @staticmethod
    def criterion_id(saved_filter: SavedFilter, key: str):
        """Id criteria (sprint, label) as int, None when absent or malformed"""
        value = saved_filter.criteria.get(key)
        try:
            return int(value) if value not in (None, '') else None
        except (TypeError, ValueError):
            return None
