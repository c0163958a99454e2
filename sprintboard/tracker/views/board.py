# ============================================
# tracker/views/board.py
# ============================================
"""
Read-only views computed from a project snapshot: board, backlog, epics,
roadmap and velocity. Every request recomputes from the current rows.
"""
import datetime

from django.conf import settings
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.constants import SprintStatus
from tracker.selectors.board import (
    IssueFilter, build_board_columns, build_swimlanes, filter_issues, group_backlog,
)
from tracker.selectors.issue import IssueSelector
from tracker.selectors.project import ProjectSelector
from tracker.selectors.reports import RoadmapWindow, epics_with_progress, month_headers, roadmap_rows, velocity
from tracker.selectors.sprint import SprintSelector
from tracker.serializers.board import (
    BacklogGroupSerializer,
    BoardColumnSerializer,
    BoardConfigSerializer,
    BoardConfigUpdateSerializer,
    EpicProgressSerializer,
    MonthHeaderSerializer,
    RoadmapRowSerializer,
    SwimlaneSerializer,
)
from tracker.serializers.sprint import SprintOutputSerializer, VelocityPointSerializer
from tracker.services.workflow import BoardConfigService
from tracker.views.utils import ISSUE_FILTER_PARAMS, extend_schema, get_or_404, q_date, q_str, std_errors


class BoardAPIView(APIView):
    """
    GET: Board columns (configured order, then hidden statuses) and swimlanes

    Query params:
    - sprint: sprint id, or 'active' for the active sprint (default: every issue)
    - type, status, priority, assignee, q: filters
    """

    @extend_schema(
        tags=["Board"],
        parameters=ISSUE_FILTER_PARAMS + [q_str("sprint", "Sprint id or 'active'")],
        responses={200: BoardColumnSerializer(many=True), **std_errors()},
    )
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        config = BoardConfigService.get_or_default(project)

        sprint = None
        sprint_param = request.query_params.get('sprint')
        if sprint_param == 'active':
            sprint = SprintSelector.get_active_sprint(project.id)
        elif sprint_param:
            if not sprint_param.isdigit():
                raise ValidationError({'sprint': ["Expected a sprint id or 'active'"]})
            sprint = get_or_404(SprintSelector.get_sprint_by_id(int(sprint_param)), "Sprint")
            if sprint.project_id != project.id:
                raise ValidationError({'sprint': ["Sprint belongs to another project"]})

        issues = IssueSelector.get_project_snapshot(project.id)
        if sprint_param:
            issues = [i for i in issues if sprint is not None and i.sprint_id == sprint.id]
        issues = filter_issues(issues, IssueFilter.from_params(request.query_params), project.key)

        columns = build_board_columns(issues, config.column_order, config.wip_limits)
        lanes = build_swimlanes(issues, config.swimlane_by)

        return Response({
            'project': project.id,
            'sprint': SprintOutputSerializer(sprint).data if sprint else None,
            'config': BoardConfigSerializer(config).data,
            'total': len(issues),
            'columns': BoardColumnSerializer(columns, many=True).data,
            'swimlanes': SwimlaneSerializer(lanes, many=True).data,
        })


class BoardConfigAPIView(APIView):
    """
    GET: Board configuration (defaults when never saved)
    PATCH: Update swimlane_by, wip_limits and/or column_order
    """

    @extend_schema(tags=["Board"], responses={200: BoardConfigSerializer})
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return Response(BoardConfigSerializer(BoardConfigService.get_or_default(project)).data)

    @extend_schema(tags=["Board"], request=BoardConfigUpdateSerializer,
                   responses={200: BoardConfigSerializer, **std_errors()})
    def patch(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = BoardConfigUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        config = BoardConfigService.update_config(project=project, **serializer.validated_data)
        return Response(BoardConfigSerializer(config).data)


class BacklogAPIView(APIView):
    """
    GET: Open sprints (active first, then planning) and the backlog, each
    with its issues and story point subtotal. Filters apply before grouping.
    """

    @extend_schema(tags=["Board"], parameters=ISSUE_FILTER_PARAMS,
                   responses={200: BacklogGroupSerializer(many=True)})
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        issues = IssueSelector.get_project_snapshot(project.id)
        sprints = list(SprintSelector.get_open_sprints(project.id))

        groups = group_backlog(
            issues, sprints, IssueFilter.from_params(request.query_params), project_key=project.key,
        )
        return Response(BacklogGroupSerializer(groups, many=True).data)


class EpicListAPIView(APIView):
    """
    GET: Epics of the project with child counts and progress
    """

    @extend_schema(tags=["Reports"], responses={200: EpicProgressSerializer(many=True)})
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        issues = IssueSelector.get_project_snapshot(project.id)
        return Response(EpicProgressSerializer(epics_with_progress(issues), many=True).data)


class RoadmapAPIView(APIView):
    """
    GET: Epic bars positioned inside a month window

    Query params:
    - anchor: YYYY-MM-DD, the month the window is built around (default today)
    """

    @extend_schema(tags=["Reports"], parameters=[q_date("anchor", "Day inside the centre month")])
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        anchor = request.query_params.get('anchor')
        if anchor:
            try:
                anchor = datetime.date.fromisoformat(anchor)
            except ValueError:
                raise ValidationError({'anchor': ["Expected a date as YYYY-MM-DD"]})

        window = RoadmapWindow.around(
            anchor,
            months_before=getattr(settings, "TRACKER_ROADMAP_MONTHS_BEFORE", 1),
            months_ahead=getattr(settings, "TRACKER_ROADMAP_MONTHS_AHEAD", 1),
        )
        rows = roadmap_rows(IssueSelector.get_project_snapshot(project.id), window)

        return Response({
            'window': {'start': window.start, 'end': window.end, 'total_days': window.total_days},
            'months': MonthHeaderSerializer(month_headers(window), many=True).data,
            'rows': RoadmapRowSerializer(rows, many=True).data,
            'unscheduled': sum(1 for r in rows if not r.scheduled),
        })


class VelocityAPIView(APIView):
    """
    GET: Committed vs completed story points per completed sprint
    """

    @extend_schema(tags=["Reports"], responses={200: VelocityPointSerializer(many=True)})
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        sprints = list(SprintSelector.get_completed_sprints(project.id))

        by_sprint = {}
        for issue in IssueSelector.get_issues_list(project_id=project.id).filter(
            sprint__status=SprintStatus.COMPLETED
        ):
            by_sprint.setdefault(issue.sprint_id, []).append(issue)

        return Response(VelocityPointSerializer(velocity(sprints, by_sprint), many=True).data)
