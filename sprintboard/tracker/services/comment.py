# ============================================
# tracker/services/comment.py
# ============================================
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from tracker.models import ActivityLog, Comment, Issue, Notification
from tracker.services.activity import ActivityService
from tracker.services.notification import NotificationService
from tracker.services.project import ProjectService
from tracker.services.watcher import WatcherService


class CommentService:

    @staticmethod
    @transaction.atomic
    def create_comment(
        *,
        issue: Issue,
        author,
        content: str
    ) -> Comment:
        """Create a comment on an issue and tell the watchers"""
        if not (content or '').strip():
            raise ValidationError({'content': ["Comment content is required"]})

        comment = Comment.objects.create(
            issue=issue,
            author=author,
            content=content
        )

        ActivityService.log(issue=issue, user=author, action=ActivityLog.Action.COMMENTED)
        WatcherService.watch(issue=issue, user=author)
        NotificationService.notify(
            recipients=WatcherService.watcher_ids(issue),
            kind=Notification.Kind.COMMENTED,
            title=f"New comment on {issue.key}",
            message=content[:500],
            issue=issue,
            actor_id=getattr(author, 'pk', None),
        )

        return comment

    @staticmethod
    def update_comment(
        *,
        comment: Comment,
        user,
        content: str
    ) -> Comment:
        """Update a comment"""

        # Only author can update
        if comment.author_id != user.pk:
            raise PermissionDenied("Only comment author can update comment")
        if not (content or '').strip():
            raise ValidationError({'content': ["Comment content is required"]})

        comment.content = content
        comment.save()

        return comment

    @staticmethod
    def delete_comment(*, comment: Comment, user) -> None:
        """Delete a comment"""

        # Author or project manager can delete
        if comment.author_id != user.pk and not ProjectService.can_manage(comment.issue.project, user):
            raise PermissionDenied("Only comment author or a project admin can delete comment")

        comment.delete()
