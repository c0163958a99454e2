# ============================================
# tracker/views/notification.py
# ============================================
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.notification import NotificationSelector, SavedFilterSelector
from tracker.serializers.notification import (
    NotificationOutputSerializer,
    SavedFilterCreateSerializer,
    SavedFilterOutputSerializer,
)
from tracker.services.notification import NotificationService
from tracker.services.saved_filter import SavedFilterService
from tracker.utils.pagination import TrackerPagination
from tracker.views.utils import extend_schema, get_or_404, int_param, q_int, q_str, std_errors


class NotificationListAPIView(APIView):
    """
    GET: Current user's notifications, newest first

    Query params:
    - unread: 1 to only list unread ones
    - page, page_size
    """

    @extend_schema(
        tags=["Notifications"],
        parameters=[q_str("unread", "1 = unread only"), q_int("page", "Page"), q_int("page_size", "Page size")],
        responses={200: NotificationOutputSerializer(many=True)},
    )
    def get(self, request):
        unread_only = request.query_params.get('unread') in ('1', 'true', 'yes')
        notifications = NotificationSelector.get_for_user(request.user.pk, unread_only=unread_only)

        paginator = TrackerPagination()
        page = paginator.paginate_queryset(notifications, request)
        return paginator.get_paginated_response(NotificationOutputSerializer(page, many=True).data)


class NotificationUnreadCountAPIView(APIView):

    @extend_schema(tags=["Notifications"], responses={200: None})
    def get(self, request):
        return Response({'unread': NotificationSelector.unread_count(request.user.pk)})


class NotificationMarkAllReadAPIView(APIView):

    @extend_schema(tags=["Notifications"], request=None, responses={200: None})
    def post(self, request):
        updated = NotificationService.mark_all_read(request.user.pk)
        return Response({'updated': updated})


class NotificationReadAPIView(APIView):

    @extend_schema(tags=["Notifications"], request=None,
                   responses={200: NotificationOutputSerializer, **std_errors()})
    def post(self, request, notification_id):
        notification = get_or_404(
            NotificationSelector.get_by_id(notification_id, request.user.pk), "Notification"
        )
        notification = NotificationService.mark_read(notification)
        return Response(NotificationOutputSerializer(notification).data)


class SavedFilterListCreateAPIView(APIView):
    """
    GET: Current user's saved filters (optionally for one project)
    POST: Save a filter (name, project, criteria)
    """

    @extend_schema(tags=["Saved filters"], parameters=[q_int("project", "Project id")],
                   responses={200: SavedFilterOutputSerializer(many=True)})
    def get(self, request):
        filters = SavedFilterSelector.get_for_user(request.user.pk, project_id=int_param(request, 'project'))
        return Response(SavedFilterOutputSerializer(filters, many=True).data)

    @extend_schema(tags=["Saved filters"], request=SavedFilterCreateSerializer,
                   responses={201: SavedFilterOutputSerializer, **std_errors()})
    def post(self, request):
        serializer = SavedFilterCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        saved = SavedFilterService.create_filter(user=request.user, **serializer.validated_data)
        return Response(SavedFilterOutputSerializer(saved).data, status=status.HTTP_201_CREATED)


class SavedFilterDetailAPIView(APIView):

    @extend_schema(tags=["Saved filters"], responses={204: None, **std_errors()})
    def delete(self, request, filter_id):
        saved = get_or_404(SavedFilterSelector.get_by_id(filter_id, request.user.pk), "Saved filter")
        SavedFilterService.delete_filter(saved_filter=saved)
        return Response(status=status.HTTP_204_NO_CONTENT)
