# ============================================
# tracker/views/activity.py
# ============================================
from django.http import FileResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from tracker.selectors.activity import ActivitySelector, IssueRelationSelector
from tracker.selectors.issue import IssueSelector
from tracker.selectors.project import ProjectSelector
from tracker.serializers.activity import (
    ActivityOutputSerializer,
    AttachmentOutputSerializer,
    AttachmentUploadSerializer,
    LinkCreateSerializer,
    LinkOutputSerializer,
    WatcherOutputSerializer,
    WorkLogCreateSerializer,
    WorkLogOutputSerializer,
)
from tracker.services.attachment import AttachmentService
from tracker.services.link import LinkService
from tracker.services.watcher import WatcherService
from tracker.services.worklog import WorkLogService
from tracker.views.utils import extend_schema, get_or_404, int_param, q_int, std_errors


class IssueActivityAPIView(APIView):
    """
    GET: History of one issue, newest first
    """

    @extend_schema(tags=["Activity"], responses={200: ActivityOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        activity = ActivitySelector.get_issue_activity(issue_id).select_related('issue__project')
        return Response(ActivityOutputSerializer(activity, many=True).data)


class ProjectActivityAPIView(APIView):
    """
    GET: Latest activity across a project's issues

    Query params:
    - limit: number of entries (default 50, max 200)
    """

    @extend_schema(tags=["Activity"], parameters=[q_int("limit", "Max entries")],
                   responses={200: ActivityOutputSerializer(many=True)})
    def get(self, request, project_id):
        get_or_404(ProjectSelector.get_project_by_id(project_id), "Project")
        limit = min(int_param(request, 'limit') or 50, 200)
        activity = ActivitySelector.get_project_activity(project_id, limit=limit)
        return Response(ActivityOutputSerializer(activity, many=True).data)


# ---- Links
class IssueLinkListCreateAPIView(APIView):
    """
    GET: Links of an issue, outgoing then incoming (inverse labels)
    POST: Link this issue to another (target, link_type)
    """

    @extend_schema(tags=["Links"], responses={200: LinkOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        outgoing = LinkOutputSerializer(
            IssueRelationSelector.get_links(issue_id), many=True, context={'direction': 'outgoing'}
        ).data
        incoming = LinkOutputSerializer(
            IssueRelationSelector.get_incoming_links(issue_id), many=True, context={'direction': 'incoming'}
        ).data
        return Response(list(outgoing) + list(incoming))

    @extend_schema(tags=["Links"], request=LinkCreateSerializer,
                   responses={201: LinkOutputSerializer, **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = LinkCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        link = LinkService.create_link(
            source=issue,
            target=serializer.validated_data['target'],
            link_type=serializer.validated_data['link_type'],
            user=request.user,
        )
        return Response(LinkOutputSerializer(link).data, status=status.HTTP_201_CREATED)


class IssueLinkDetailAPIView(APIView):

    @extend_schema(tags=["Links"], responses={204: None, **std_errors()})
    def delete(self, request, link_id):
        link = get_or_404(IssueRelationSelector.get_link_by_id(link_id), "Link")
        LinkService.delete_link(link=link)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---- Watchers
class WatcherListAPIView(APIView):
    """
    GET: Users watching the issue
    """

    @extend_schema(tags=["Watchers"], responses={200: WatcherOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        return Response(WatcherOutputSerializer(IssueRelationSelector.get_watchers(issue_id), many=True).data)


class WatchAPIView(APIView):
    """
    POST: Start watching the issue as the current user
    DELETE: Stop watching
    """

    @extend_schema(tags=["Watchers"], request=None, responses={201: WatcherOutputSerializer, **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        watcher = WatcherService.watch(issue=issue, user=request.user)
        return Response(WatcherOutputSerializer(watcher).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Watchers"], responses={204: None, **std_errors()})
    def delete(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        WatcherService.unwatch(issue=issue, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---- Work logs
class WorkLogListCreateAPIView(APIView):
    """
    GET: Work logged on the issue
    POST: Log work (time_spent as minutes or "1h 30m", description, started_at)
    """

    @extend_schema(tags=["Work logs"], responses={200: WorkLogOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        return Response(WorkLogOutputSerializer(IssueRelationSelector.get_worklogs(issue_id), many=True).data)

    @extend_schema(tags=["Work logs"], request=WorkLogCreateSerializer,
                   responses={201: WorkLogOutputSerializer, **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = WorkLogCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        worklog = WorkLogService.log_work(issue=issue, user=request.user, **serializer.validated_data)
        return Response(WorkLogOutputSerializer(worklog).data, status=status.HTTP_201_CREATED)


class WorkLogDetailAPIView(APIView):

    @extend_schema(tags=["Work logs"], responses={204: None, **std_errors()})
    def delete(self, request, worklog_id):
        worklog = get_or_404(IssueRelationSelector.get_worklog_by_id(worklog_id), "Work log")
        WorkLogService.delete_worklog(worklog=worklog)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---- Attachments
class AttachmentListCreateAPIView(APIView):
    """
    GET: Files attached to the issue
    POST: Upload a file (multipart, field ``file``)
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(tags=["Attachments"], responses={200: AttachmentOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        attachments = IssueRelationSelector.get_attachments(issue_id)
        return Response(AttachmentOutputSerializer(attachments, many=True, context={'request': request}).data)

    @extend_schema(tags=["Attachments"], request=AttachmentUploadSerializer,
                   responses={201: AttachmentOutputSerializer, **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = AttachmentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        attachment = AttachmentService.upload(issue=issue, user=request.user, upload=serializer.validated_data['file'])
        return Response(
            AttachmentOutputSerializer(attachment, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )


class AttachmentDetailAPIView(APIView):
    """
    GET: Download the file
    DELETE: Remove the attachment and its stored file
    """

    @extend_schema(tags=["Attachments"], responses={200: None, **std_errors()})
    def get(self, request, attachment_id):
        attachment = get_or_404(IssueRelationSelector.get_attachment_by_id(attachment_id), "Attachment")
        return FileResponse(
            attachment.file.open('rb'),
            as_attachment=True,
            filename=attachment.filename,
            content_type=attachment.mime_type or None,
        )

    @extend_schema(tags=["Attachments"], responses={204: None, **std_errors()})
    def delete(self, request, attachment_id):
        attachment = get_or_404(IssueRelationSelector.get_attachment_by_id(attachment_id), "Attachment")
        AttachmentService.delete(attachment=attachment)
        return Response(status=status.HTTP_204_NO_CONTENT)
