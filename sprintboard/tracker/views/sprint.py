# ============================================
# tracker/views/sprint.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from tracker.constants import IssueStatus, SprintStatus
from tracker.selectors.activity import ActivitySelector
from tracker.selectors.issue import IssueSelector
from tracker.selectors.project import ProjectSelector
from tracker.selectors.reports import burndown, sprint_report
from tracker.selectors.sprint import SprintSelector
from tracker.serializers.issue import IssueListOutputSerializer
from tracker.serializers.sprint import (
    BurndownPointSerializer,
    SprintCompletionSerializer,
    SprintCreateSerializer,
    SprintOutputSerializer,
    SprintReportSerializer,
    SprintUpdateSerializer,
)
from tracker.services.sprint import SprintService
from tracker.views.utils import conflict_errors, extend_schema, get_or_404, q_str, std_errors


class SprintListCreateAPIView(APIView):
    """
    GET: Sprints of a project in creation order (optional ?status=)
    POST: Create a sprint in planning
    """

    @extend_schema(tags=["Sprints"], parameters=[q_str("status", "planning / active / completed")],
                   responses={200: SprintOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        sprint_status = request.query_params.get('status')
        if sprint_status and sprint_status not in SprintStatus.values:
            sprint_status = None
        sprints = SprintSelector.get_sprints_list(project_id, status=sprint_status)
        return Response(SprintOutputSerializer(sprints, many=True).data)

    @extend_schema(tags=["Sprints"], request=SprintCreateSerializer,
                   responses={201: SprintOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = SprintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sprint = SprintService.create_sprint(project=project, **serializer.validated_data)
        return Response(SprintOutputSerializer(sprint).data, status=status.HTTP_201_CREATED)


class SprintDetailAPIView(APIView):
    """
    GET: Sprint details
    PATCH: Edit name, goal or dates (status only moves through start / complete)
    DELETE: Delete a sprint that is not active; its issues return to the backlog
    """

    @extend_schema(tags=["Sprints"], responses={200: SprintOutputSerializer, **std_errors()})
    def get(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        return Response(SprintOutputSerializer(sprint).data)

    @extend_schema(tags=["Sprints"], request=SprintUpdateSerializer,
                   responses={200: SprintOutputSerializer, **std_errors()})
    def patch(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")

        serializer = SprintUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        sprint = SprintService.update_sprint(sprint=sprint, **serializer.validated_data)
        return Response(SprintOutputSerializer(sprint).data)

    @extend_schema(tags=["Sprints"], responses={204: None, **conflict_errors()})
    def delete(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        SprintService.delete_sprint(sprint=sprint)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SprintStartAPIView(APIView):
    """
    POST: planning -> active. 409 when the sprint is not in planning or another
    sprint of the project is active.
    """

    @extend_schema(tags=["Sprints"], request=None, responses={200: SprintOutputSerializer, **conflict_errors()})
    def post(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        sprint = SprintService.start_sprint(sprint=sprint, user=request.user)
        return Response(SprintOutputSerializer(sprint).data)


class SprintCompleteAPIView(APIView):
    """
    POST: active -> completed. Unfinished issues go back to the backlog.
    """

    @extend_schema(tags=["Sprints"], request=None, responses={200: SprintCompletionSerializer, **conflict_errors()})
    def post(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        result = SprintService.complete_sprint(sprint=sprint, user=request.user)
        return Response(SprintCompletionSerializer(result).data)


class SprintIssuesAPIView(APIView):
    """
    GET: Issues currently in the sprint, in board order
    """

    @extend_schema(tags=["Sprints"], responses={200: IssueListOutputSerializer(many=True)})
    def get(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        issues = IssueSelector.get_issues_list(sprint_id=sprint.id, sort='sort_order')
        return Response(IssueListOutputSerializer(issues, many=True).data)


class SprintReportAPIView(APIView):
    """
    GET: Completed vs incomplete issues of the sprint with point totals
    """

    @extend_schema(tags=["Sprints"], responses={200: SprintReportSerializer})
    def get(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        issues = IssueSelector.get_issues_list(sprint_id=sprint.id, sort='sort_order')
        report = sprint_report(sprint, issues)
        return Response(SprintReportSerializer(report).data)


class SprintBurndownAPIView(APIView):
    """
    GET: Remaining story points per sprint day next to the ideal line.
    Empty until the sprint has a start date.
    """

    @extend_schema(tags=["Sprints"], responses={200: BurndownPointSerializer(many=True), **std_errors()})
    def get(self, request, sprint_id):
        sprint = get_or_404(SprintSelector.get_sprint_by_id(sprint_id), "Sprint")
        issues = list(IssueSelector.get_issues_list(sprint_id=sprint.id))
        done_on = ActivitySelector.get_done_times(i.id for i in issues if i.status == IssueStatus.DONE)
        points = burndown(sprint, issues, done_on)
        return Response({
            'sprint': SprintOutputSerializer(sprint).data,
            'points': BurndownPointSerializer(points, many=True).data,
        })
