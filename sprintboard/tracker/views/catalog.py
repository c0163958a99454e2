# ============================================
# tracker/views/catalog.py
# ============================================
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.catalog import CatalogSelector
from tracker.selectors.project import ProjectSelector
from tracker.serializers.catalog import (
    ComponentInputSerializer,
    ComponentOutputSerializer,
    LabelInputSerializer,
    LabelOutputSerializer,
    VersionInputSerializer,
    VersionOutputSerializer,
    VersionReleaseSerializer,
)
from tracker.services.catalog import CatalogService
from tracker.views.utils import conflict_errors, extend_schema, get_or_404, std_errors


# ---- Labels
class LabelListCreateAPIView(APIView):
    """
    GET: Labels of a project with issue counts
    POST: Create a label (name unique per project)
    """

    @extend_schema(tags=["Catalog"], responses={200: LabelOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return Response(LabelOutputSerializer(CatalogSelector.get_labels(project_id), many=True).data)

    @extend_schema(tags=["Catalog"], request=LabelInputSerializer,
                   responses={201: LabelOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        serializer = LabelInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        label = CatalogService.create_label(project=project, **serializer.validated_data)
        return Response(LabelOutputSerializer(label).data, status=status.HTTP_201_CREATED)


class LabelDetailAPIView(APIView):

    @extend_schema(tags=["Catalog"], request=LabelInputSerializer,
                   responses={200: LabelOutputSerializer, **std_errors()})
    def patch(self, request, label_id):
        label = get_or_404(CatalogSelector.get_label_by_id(label_id), "Label")
        serializer = LabelInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        label = CatalogService.update_label(label=label, **serializer.validated_data)
        return Response(LabelOutputSerializer(label).data)

    @extend_schema(tags=["Catalog"], responses={204: None, **std_errors()})
    def delete(self, request, label_id):
        label = get_or_404(CatalogSelector.get_label_by_id(label_id), "Label")
        CatalogService.delete_label(label=label)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---- Components
class ComponentListCreateAPIView(APIView):
    """
    GET: Components of a project with issue counts
    POST: Create a component
    """

    @extend_schema(tags=["Catalog"], responses={200: ComponentOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return Response(ComponentOutputSerializer(CatalogSelector.get_components(project_id), many=True).data)

    @extend_schema(tags=["Catalog"], request=ComponentInputSerializer,
                   responses={201: ComponentOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        serializer = ComponentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        component = CatalogService.create_component(project=project, **serializer.validated_data)
        return Response(ComponentOutputSerializer(component).data, status=status.HTTP_201_CREATED)


class ComponentDetailAPIView(APIView):

    @extend_schema(tags=["Catalog"], request=ComponentInputSerializer,
                   responses={200: ComponentOutputSerializer, **std_errors()})
    def patch(self, request, component_id):
        component = get_or_404(CatalogSelector.get_component_by_id(component_id), "Component")
        serializer = ComponentInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        component = CatalogService.update_component(component=component, **serializer.validated_data)
        return Response(ComponentOutputSerializer(component).data)

    @extend_schema(tags=["Catalog"], responses={204: None, **std_errors()})
    def delete(self, request, component_id):
        component = get_or_404(CatalogSelector.get_component_by_id(component_id), "Component")
        CatalogService.delete_component(component=component)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---- Versions
class VersionListCreateAPIView(APIView):
    """
    GET: Versions of a project with fix-version issue counts
    POST: Create a version
    """

    @extend_schema(tags=["Catalog"], responses={200: VersionOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        return Response(VersionOutputSerializer(CatalogSelector.get_versions(project_id), many=True).data)

    @extend_schema(tags=["Catalog"], request=VersionInputSerializer,
                   responses={201: VersionOutputSerializer, **std_errors()})
    def post(self, request, project_id):
        project = get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        serializer = VersionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        version = CatalogService.create_version(project=project, **serializer.validated_data)
        return Response(VersionOutputSerializer(version).data, status=status.HTTP_201_CREATED)


class VersionDetailAPIView(APIView):

    @extend_schema(tags=["Catalog"], request=VersionInputSerializer,
                   responses={200: VersionOutputSerializer, **std_errors()})
    def patch(self, request, version_id):
        version = get_or_404(CatalogSelector.get_version_by_id(version_id), "Version")
        serializer = VersionInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        version = CatalogService.update_version(version=version, **serializer.validated_data)
        return Response(VersionOutputSerializer(version).data)

    @extend_schema(tags=["Catalog"], responses={204: None, **std_errors()})
    def delete(self, request, version_id):
        version = get_or_404(CatalogSelector.get_version_by_id(version_id), "Version")
        CatalogService.delete_version(version=version)
        return Response(status=status.HTTP_204_NO_CONTENT)


class VersionReleaseAPIView(APIView):
    """
    POST: Mark an unreleased version released (release_date defaults to today)
    """

    @extend_schema(tags=["Catalog"], request=VersionReleaseSerializer,
                   responses={200: VersionOutputSerializer, **conflict_errors()})
    def post(self, request, version_id):
        version = get_or_404(CatalogSelector.get_version_by_id(version_id), "Version")
        serializer = VersionReleaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        version = CatalogService.release_version(version=version, **serializer.validated_data)
        return Response(VersionOutputSerializer(version).data)
