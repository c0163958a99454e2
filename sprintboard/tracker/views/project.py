# ============================================
# tracker/views/project.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from tracker.serializers.project import (
    MemberCreateSerializer,
    MemberOutputSerializer,
    MemberUpdateSerializer,
    ProjectCreateSerializer,
    ProjectUpdateSerializer,
    ProjectOutputSerializer,
)
from tracker.selectors.project import ProjectSelector
from tracker.services.project import MemberService, ProjectService
from tracker.utils.pagination import TrackerPagination
from tracker.views.utils import extend_schema, get_or_404, path_int, q_int, q_str, std_errors


class ProjectListCreateAPIView(APIView):
    """
    GET: List projects
    POST: Create a new project

    Query params (GET):
    - mine: 1 to only list projects the user leads or is a member of
    - search: string (optional, name or key)
    - page, page_size

    Request body (POST):
    - name: string (required)
    - key: string (optional, 2-10 uppercase letters; derived from name when omitted)
    - description, lead, avatar_color (optional)
    """

    @extend_schema(
        tags=["Projects"],
        parameters=[q_str("mine", "1 = only my projects"), q_str("search", "Name or key"),
                    q_int("page", "Page"), q_int("page_size", "Page size")],
        responses={200: ProjectOutputSerializer(many=True)},
    )
    def get(self, request):
        mine = request.query_params.get('mine') in ('1', 'true', 'yes')
        projects = ProjectSelector.get_projects_list(
            user_id=request.user.pk if mine else None,
            search=request.query_params.get('search'),
        )

        paginator = TrackerPagination()
        page = paginator.paginate_queryset(projects, request)
        serializer = ProjectOutputSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(
        tags=["Projects"],
        request=ProjectCreateSerializer,
        responses={201: ProjectOutputSerializer, **std_errors()},
    )
    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.create_project(
            creator=request.user,
            **serializer.validated_data
        )

        output_serializer = ProjectOutputSerializer(project)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


class ProjectDetailAPIView(APIView):
    """
    GET: Retrieve project details
    PATCH: Update project
    DELETE: Delete project and everything it owns
    """

    @extend_schema(tags=["Projects"], parameters=[path_int("project_id", "Project ID")],
                   responses={200: ProjectOutputSerializer, **std_errors()})
    def get(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return Response(ProjectOutputSerializer(project).data)

    @extend_schema(tags=["Projects"], request=ProjectUpdateSerializer,
                   responses={200: ProjectOutputSerializer, **std_errors()})
    def patch(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = ProjectUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        updated_project = ProjectService.update_project(
            project=project,
            user=request.user,
            **serializer.validated_data
        )
        return Response(ProjectOutputSerializer(updated_project).data)

    @extend_schema(tags=["Projects"], responses={204: None, **std_errors()})
    def delete(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        ProjectService.delete_project(project=project, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MemberListCreateAPIView(APIView):
    """
    GET: Project members with their roles
    POST: Add a member (user, role)
    """

    @extend_schema(tags=["Members"], responses={200: MemberOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        members = ProjectSelector.get_members(project_id)
        return Response(MemberOutputSerializer(members, many=True).data)

    @extend_schema(tags=["Members"], request=MemberCreateSerializer,
                   responses={201: MemberOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")

        serializer = MemberCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = MemberService.add_member(
            project=project,
            user=request.user,
            member_user=serializer.validated_data['user'],
            role=serializer.validated_data['role'],
        )
        return Response(MemberOutputSerializer(member).data, status=status.HTTP_201_CREATED)


class MemberDetailAPIView(APIView):
    """
    PATCH: Change a member's role
    DELETE: Remove a member
    """

    @extend_schema(tags=["Members"], request=MemberUpdateSerializer,
                   responses={200: MemberOutputSerializer, **std_errors()})
    def patch(self, request, member_id):
        member = get_or_404(ProjectSelector.get_member_by_id(member_id), "Member")

        serializer = MemberUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = MemberService.update_role(member=member, user=request.user, role=serializer.validated_data['role'])
        return Response(MemberOutputSerializer(member).data)

    @extend_schema(tags=["Members"], responses={204: None, **std_errors()})
    def delete(self, request, member_id):
        member = get_or_404(ProjectSelector.get_member_by_id(member_id), "Member")
        MemberService.remove_member(member=member, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
