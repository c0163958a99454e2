# ============================================
# tracker/selectors/issue.py
# ============================================
from typing import Optional
from django.db.models import Case, CharField, IntegerField, Q, QuerySet, Value, When
from django.db.models.functions import Cast, Concat
from tracker.constants import Priority
from tracker.models import Issue
from tracker.selectors.board import UNASSIGNED, IssueFilter

SORT_FIELDS = {
    'created_at', 'updated_at', 'issue_number', 'sort_order', 'title',
    'due_date', 'start_date', 'story_points', 'status', 'type', 'priority',
}
DEFAULT_SORT = '-created_at'

PRIORITY_RANK = Case(
    *[When(priority=p, then=Value(i)) for i, p in enumerate(Priority.values)],
    default=Value(len(Priority.values)),
    output_field=IntegerField(),
)

# "WEB-12", same text the board matches against
KEY_TEXT = Concat('project__key', Value('-'), Cast('issue_number', CharField()), output_field=CharField())


class IssueSelector:

    @staticmethod
    def _base() -> QuerySet:
        return Issue.objects.select_related(
            'project', 'assignee', 'reporter', 'sprint', 'parent',
            'fix_version', 'affects_version',
        )

    @staticmethod
    def get_issue_by_id(issue_id: int) -> Optional[Issue]:
        """Get single issue with related data"""
        try:
            return IssueSelector._base().prefetch_related('labels', 'components').get(id=issue_id)
        except Issue.DoesNotExist:
            return None

    @staticmethod
    def apply_filter(queryset: QuerySet, flt: IssueFilter) -> QuerySet:
        """Database rendition of ``matches_filter``"""
        if flt.types:
            queryset = queryset.filter(type__in=flt.types)
        if flt.statuses:
            queryset = queryset.filter(status__in=flt.statuses)
        if flt.priorities:
            queryset = queryset.filter(priority__in=flt.priorities)
        if flt.assignees:
            cond = Q()
            ids = [a for a in flt.assignees if a != UNASSIGNED]
            if UNASSIGNED in flt.assignees:
                cond |= Q(assignee__isnull=True)
            numeric = [int(a) for a in ids if a.isdigit()]
            if numeric:
                cond |= Q(assignee_id__in=numeric)
            # Only non-numeric ids given: nothing can match
            queryset = queryset.filter(cond) if cond else queryset.none()
        if flt.text:
            queryset = queryset.annotate(key_text=KEY_TEXT).filter(
                Q(title__icontains=flt.text) | Q(key_text__icontains=flt.text)
            )
        return queryset

    @staticmethod
    def _order(queryset: QuerySet, sort: Optional[str]) -> QuerySet:
        sort = (sort or DEFAULT_SORT).strip()
        desc = sort.startswith('-')
        name = sort.lstrip('-')
        if name not in SORT_FIELDS:
            return queryset.order_by(DEFAULT_SORT, '-id')
        if name == 'priority':
            queryset = queryset.annotate(priority_rank=PRIORITY_RANK)
            name = 'priority_rank'
        prefix = '-' if desc else ''
        return queryset.order_by(f'{prefix}{name}', 'id')

    @staticmethod
    def get_issues_list(
        project_id: int = None,
        flt: IssueFilter = None,
        sprint_id: int = None,
        parent_id: int = None,
        reporter_id: int = None,
        assignee_id: int = None,
        watcher_id: int = None,
        label_id: int = None,
        component_id: int = None,
        fix_version_id: int = None,
        sort: str = None,
    ) -> QuerySet:
        """Get filtered issues list with optimization"""
        queryset = IssueSelector._base()

        if project_id:
            queryset = queryset.filter(project_id=project_id)
        if sprint_id:
            queryset = queryset.filter(sprint_id=sprint_id)
        if parent_id:
            queryset = queryset.filter(parent_id=parent_id)
        if reporter_id:
            queryset = queryset.filter(reporter_id=reporter_id)
        if assignee_id:
            queryset = queryset.filter(assignee_id=assignee_id)
        if watcher_id:
            queryset = queryset.filter(watchers__user_id=watcher_id)
        if label_id:
            queryset = queryset.filter(labels__id=label_id)
        if component_id:
            queryset = queryset.filter(components__id=component_id)
        if fix_version_id:
            queryset = queryset.filter(fix_version_id=fix_version_id)
        if flt is not None:
            queryset = IssueSelector.apply_filter(queryset, flt)

        return IssueSelector._order(queryset, sort)

    @staticmethod
    def get_recent(limit: int = 10, project_id: int = None) -> list:
        """Most recently updated issues, for quick search"""
        queryset = IssueSelector._base()
        if project_id:
            queryset = queryset.filter(project_id=project_id)
        return list(queryset.order_by('-updated_at', '-id')[:limit])

    @staticmethod
    def get_project_snapshot(project_id: int) -> list:
        """Every issue of a project in board order; input for the pure derivations"""
        return list(
            IssueSelector._base().filter(project_id=project_id).order_by('sort_order', 'issue_number')
        )

    @staticmethod
    def get_children(issue_id: int) -> QuerySet:
        return IssueSelector._base().filter(parent_id=issue_id).order_by('sort_order', 'issue_number')
