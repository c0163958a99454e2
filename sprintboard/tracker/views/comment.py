# ============================================
# tracker/views/comment.py
# ============================================
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from tracker.serializers.comment import (
    CommentCreateSerializer,
    CommentUpdateSerializer,
    CommentOutputSerializer
)
from tracker.selectors.comment import CommentSelector
from tracker.selectors.issue import IssueSelector
from tracker.services.comment import CommentService
from tracker.views.utils import extend_schema, get_or_404, std_errors


class CommentListCreateAPIView(APIView):
    """
    GET: List comments for an issue, oldest first
    POST: Create a comment (watchers are notified)

    Request body (POST):
    - content: string (required)
    """

    @extend_schema(tags=["Comments"], responses={200: CommentOutputSerializer(many=True)})
    def get(self, request, issue_id):
        get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")
        comments = CommentSelector.get_comments_by_issue(issue_id)
        return Response(CommentOutputSerializer(comments, many=True).data)

    @extend_schema(tags=["Comments"], request=CommentCreateSerializer,
                   responses={201: CommentOutputSerializer, **std_errors()})
    def post(self, request, issue_id):
        issue = get_or_404(IssueSelector.get_issue_by_id(issue_id), "Issue")

        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = CommentService.create_comment(
            issue=issue,
            author=request.user,
            content=serializer.validated_data['content']
        )
        return Response(CommentOutputSerializer(comment).data, status=status.HTTP_201_CREATED)


class CommentDetailAPIView(APIView):
    """
    PATCH: Edit a comment (author only)
    DELETE: Delete a comment (author or project admin)
    """

    @extend_schema(tags=["Comments"], request=CommentUpdateSerializer,
                   responses={200: CommentOutputSerializer, **std_errors()})
    def patch(self, request, comment_id):
        comment = get_or_404(CommentSelector.get_comment_by_id(comment_id), "Comment")

        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated_comment = CommentService.update_comment(
            comment=comment,
            user=request.user,
            content=serializer.validated_data['content']
        )
        return Response(CommentOutputSerializer(updated_comment).data)

    @extend_schema(tags=["Comments"], responses={204: None, **std_errors()})
    def delete(self, request, comment_id):
        comment = get_or_404(CommentSelector.get_comment_by_id(comment_id), "Comment")
        CommentService.delete_comment(comment=comment, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
