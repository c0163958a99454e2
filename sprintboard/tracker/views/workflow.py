# ============================================
# tracker/views/workflow.py
# ============================================
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.constants import REGISTRIES, STATUSES
from tracker.selectors.project import ProjectSelector
from tracker.selectors.workflow import WorkflowSelector
from tracker.serializers.workflow import WorkflowUpdateSerializer, matrix_payload
from tracker.services.workflow import WorkflowService
from tracker.views.utils import extend_schema, get_or_404, std_errors


class WorkflowAPIView(APIView):
    """
    GET: Allowed transitions as pairs plus the dense editor grid.
         ``configured`` is false while every move is allowed.
    PUT: Replace the transitions (``transitions`` pairs or ``grid``), or
         ``{"reset": true}`` to go back to allowing every move
    """

    @extend_schema(tags=["Workflow"], responses={200: None})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        workflow = WorkflowSelector.get_workflow(project_id)
        matrix = WorkflowSelector.get_matrix(project_id)
        return Response(matrix_payload(matrix, name=workflow.name if workflow else None))

    @extend_schema(tags=["Workflow"], request=WorkflowUpdateSerializer, responses={200: None, **std_errors()})
    def put(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = WorkflowUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get('reset'):
            return Response(matrix_payload(WorkflowService.reset_workflow(project=project)))

        transitions = None
        if 'transitions' in data:
            transitions = [(t['from_status'], t['to_status']) for t in data['transitions']]
        matrix = WorkflowService.save_workflow(
            project=project,
            transitions=transitions,
            grid=data.get('grid'),
            name=data.get('name'),
        )
        workflow = WorkflowSelector.get_workflow(project.id)
        return Response(matrix_payload(matrix, name=workflow.name if workflow else None))


class WorkflowTransitionsAPIView(APIView):
    """
    GET: Statuses an issue in ``from_status`` may move to
    """

    @extend_schema(tags=["Workflow"], responses={200: None, **std_errors()})
    def get(self, request, project_id, from_status):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        if from_status not in STATUSES:
            raise ValidationError({'from_status': [f"Unknown status '{from_status}'"]})

        matrix = WorkflowSelector.get_matrix(project_id)
        return Response({
            'from_status': from_status,
            'targets': [
                {'status': s, 'label': STATUSES.label(s), 'color': STATUSES.color(s)}
                for s in matrix.targets(from_status)
            ],
        })


class RegistryAPIView(APIView):
    """
    GET: Display metadata (label, color, icon) for every enum, keyed by registry name
    """

    @extend_schema(tags=["Workflow"], responses={200: None})
    def get(self, request):
        return Response({name: registry.as_list() for name, registry in REGISTRIES.items()})
