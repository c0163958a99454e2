# ============================================
# tracker/views/issue.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from tracker.serializers.catalog import (
    ComponentOutputSerializer,
    IssueComponentAddSerializer,
    IssueLabelAddSerializer,
    LabelOutputSerializer,
)
from tracker.serializers.issue import (
    IssueBulkUpdateSerializer,
    IssueCreateSerializer,
    IssueUpdateSerializer,
    IssueOutputSerializer,
    IssueListOutputSerializer
)
from tracker.selectors.board import IssueFilter
from tracker.selectors.catalog import CatalogSelector
from tracker.selectors.issue import IssueSelector
from tracker.selectors.notification import SavedFilterSelector
from tracker.selectors.project import ProjectSelector
from tracker.services.catalog import CatalogService
from tracker.services.issue import IssueService
from tracker.services.saved_filter import SavedFilterService
from tracker.utils.pagination import TrackerPagination
from tracker.views.utils import (
    ISSUE_FILTER_PARAMS, conflict_errors, extend_schema, get_or_404, int_param,
    q_int, q_str, std_errors,
)

LIST_PARAMS = ISSUE_FILTER_PARAMS + [
    q_int("sprint", "Sprint id"),
    q_int("parent", "Parent issue id"),
    q_int("reporter", "Reporter user id"),
    q_int("label", "Label id"),
    q_int("component", "Component id"),
    q_int("fix_version", "Fix version id"),
    q_int("filter", "Saved filter id; its criteria replace the filter params"),
    q_str("sort", "Field to sort by, '-' prefix for descending (default -created_at)"),
    q_int("page", "Page"),
    q_int("page_size", "Page size"),
]


def _issue_list(request, project_id=None):
    """Shared by the per-project list and the global search"""
    params = request.query_params
    flt = IssueFilter.from_params(params)
    sort = params.get('sort')

    sprint_id = int_param(request, 'sprint')
    label_id = int_param(request, 'label')

    saved_id = int_param(request, 'filter')
    if saved_id:
        saved = get_or_404(SavedFilterSelector.get_by_id(saved_id, request.user.pk), "Saved filter")
        flt = SavedFilterService.to_issue_filter(saved)
        sort = saved.criteria.get('sort') or sort
        sprint_id = SavedFilterService.criterion_id(saved, 'sprint') or sprint_id
        label_id = SavedFilterService.criterion_id(saved, 'label') or label_id
        if project_id is None and saved.project_id:
            project_id = saved.project_id

    issues = IssueSelector.get_issues_list(
        project_id=project_id,
        flt=flt,
        sprint_id=sprint_id,
        parent_id=int_param(request, 'parent'),
        reporter_id=int_param(request, 'reporter'),
        label_id=label_id,
        component_id=int_param(request, 'component'),
        fix_version_id=int_param(request, 'fix_version'),
        sort=sort,
    )

    paginator = TrackerPagination()
    page = paginator.paginate_queryset(issues, request)
    serializer = IssueListOutputSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


class ProjectIssueListCreateAPIView(APIView):
    """
    GET: List a project's issues with filters
    POST: Create an issue in the project

    Query params (GET):
    - type, status, priority: comma separated values
    - assignee: user id(s) or 'unassigned'
    - q: text on title or key (e.g. WEB-12)
    - sprint, parent, reporter, label, component, fix_version: ids
    - filter: saved filter id
    - sort, page, page_size

    Request body (POST):
    - title: string (required)
    - type, priority, status (optional, default task / medium / todo)
    - assignee, parent, sprint, fix_version, affects_version: ids (optional)
    - labels, components: id lists (optional)
    - story_points: 0-100 (optional)
    - original_estimate, time_remaining: minutes or duration string like "1h 30m"
    - start_date, due_date, sort_order (optional)
    """

    @extend_schema(tags=["Issues"], parameters=LIST_PARAMS, responses={200: IssueListOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return _issue_list(request, project_id=project_id)

    @extend_schema(tags=["Issues"], request=IssueCreateSerializer,
                   responses={201: IssueOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = IssueCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        issue = IssueService.create_issue(
            project=project,
            reporter=request.user,
            **serializer.validated_data
        )

        output_serializer = IssueOutputSerializer(IssueSelector.get_issue_by_id(issue.id))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


class IssueSearchAPIView(APIView):
    """
    GET: Search issues across projects (same params as the project list, plus project)
    """

    @extend_schema(tags=["Issues"], parameters=LIST_PARAMS + [q_int("project", "Project id")],
                   responses={200: IssueListOutputSerializer(many=True)})
    def get(self, request):
        return _issue_list(request, project_id=int_param(request, 'project'))


class RecentIssuesAPIView(APIView):
    """
    GET: Most recently updated issues

    Query params:
    - limit: default 10, max 50
    - project: project id (optional)
    """

    @extend_schema(tags=["Issues"], parameters=[q_int("limit", "Max issues"), q_int("project", "Project id")],
                   responses={200: IssueListOutputSerializer(many=True)})
    def get(self, request):
        limit = min(int_param(request, 'limit') or 10, 50)
        issues = IssueSelector.get_recent(limit=limit, project_id=int_param(request, 'project'))
        return Response(IssueListOutputSerializer(issues, many=True).data)


class MyIssuesAPIView(APIView):
    """
    GET: Issues assigned to, reported by or watched by the current user
    (``relation`` comes from the route), most recently updated first.
    Accepts the issue filter params, project, sort and paging.
    """
    RELATIONS = {
        'assigned': 'assignee_id',
        'reported': 'reporter_id',
        'watching': 'watcher_id',
    }

    @extend_schema(
        tags=["Issues"],
        parameters=ISSUE_FILTER_PARAMS + [
            q_int("project", "Project id"), q_str("sort", "Default -updated_at"),
            q_int("page", "Page"), q_int("page_size", "Page size"),
        ],
        responses={200: IssueListOutputSerializer(many=True)},
    )
    def get(self, request, relation):
        issues = IssueSelector.get_issues_list(
            project_id=int_param(request, 'project'),
            flt=IssueFilter.from_params(request.query_params),
            sort=request.query_params.get('sort') or '-updated_at',
            **{self.RELATIONS[relation]: request.user.pk},
        )

        paginator = TrackerPagination()
        page = paginator.paginate_queryset(issues, request)
        return paginator.get_paginated_response(IssueListOutputSerializer(page, many=True).data)


class IssueBulkUpdateAPIView(APIView):
    """
    POST: Apply status / priority / type / assignee / sprint to several issues.
    All or nothing: one invalid issue or disallowed transition rejects the batch.
    """

    @extend_schema(tags=["Issues"], request=IssueBulkUpdateSerializer,
                   responses={200: IssueListOutputSerializer(many=True), **conflict_errors()})
    def post(self, request):
        serializer = IssueBulkUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        issue_ids = data.pop('issue_ids')
        issues = IssueService.bulk_update(issue_ids=issue_ids, user=request.user, **data)
        return Response(IssueListOutputSerializer(issues, many=True).data)


class IssueDetailAPIView(APIView):
    """
    GET: Retrieve issue details
    PATCH: Update issue (status changes follow the project workflow)
    DELETE: Delete issue
    """

    @extend_schema(tags=["Issues"], responses={200: IssueOutputSerializer, **std_errors()})
    def get(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        return Response(IssueOutputSerializer(issue).data)

    @extend_schema(tags=["Issues"], request=IssueUpdateSerializer,
                   responses={200: IssueOutputSerializer, **conflict_errors()})
    def patch(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = IssueUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated_issue = IssueService.update_issue(
            issue=issue,
            user=request.user,
            **serializer.validated_data
        )

        output_serializer = IssueOutputSerializer(IssueSelector.get_issue_by_id(updated_issue.id))
        return Response(output_serializer.data)

    @extend_schema(tags=["Issues"], responses={204: None, **std_errors()})
    def delete(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        IssueService.delete_issue(issue=issue, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class IssueChildrenAPIView(APIView):
    """
    GET: Direct children of an issue (epic stories, sub-tasks)
    """

    @extend_schema(tags=["Issues"], responses={200: IssueListOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        children = IssueSelector.get_children(issue_id)
        return Response(IssueListOutputSerializer(children, many=True).data)


class IssueLabelsAPIView(APIView):
    """
    GET: Labels on the issue
    POST: Attach a label of the same project
    """

    @extend_schema(tags=["Issues"], responses={200: LabelOutputSerializer(many=True)})
    def get(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        return Response(LabelOutputSerializer(issue.labels.all(), many=True).data)

    @extend_schema(tags=["Issues"], request=IssueLabelAddSerializer,
                   responses={201: LabelOutputSerializer(many=True), **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = IssueLabelAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        CatalogService.add_issue_label(issue=issue, label=serializer.validated_data['label'], user=request.user)
        return Response(LabelOutputSerializer(issue.labels.all(), many=True).data, status=status.HTTP_201_CREATED)


class IssueLabelDetailAPIView(APIView):

    @extend_schema(tags=["Issues"], responses={204: None, **std_errors()})
    def delete(self, request, issue_id, label_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        label = get_or_404(CatalogSelector.get_label_by_id(label_id), "Label")
        CatalogService.remove_issue_label(issue=issue, label=label, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class IssueComponentsAPIView(APIView):
    """
    GET: Components on the issue
    POST: Attach a component of the same project
    """

    @extend_schema(tags=["Issues"], responses={200: ComponentOutputSerializer(many=True)})
    def get(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        return Response(ComponentOutputSerializer(issue.components.select_related('lead'), many=True).data)

    @extend_schema(tags=["Issues"], request=IssueComponentAddSerializer,
                   responses={201: ComponentOutputSerializer(many=True), **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = IssueComponentAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        CatalogService.add_issue_component(
            issue=issue, component=serializer.validated_data['component'], user=request.user
        )
        return Response(
            ComponentOutputSerializer(issue.components.select_related('lead'), many=True).data,
            status=status.HTTP_201_CREATED,
        )


class IssueComponentDetailAPIView(APIView):

    @extend_schema(tags=["Issues"], responses={204: None, **std_errors()})
    def delete(self, request, issue_id, component_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        component = get_or_404(CatalogSelector.get_component_by_id(component_id), "Component")
        CatalogService.remove_issue_component(issue=issue, component=component, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
