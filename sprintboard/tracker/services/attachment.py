# ============================================
# tracker/services/attachment.py
# ============================================
import logging
import mimetypes
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from tracker.models import ActivityLog, Attachment, Issue
from tracker.services.activity import ActivityService

logger = logging.getLogger(__name__)


class AttachmentService:

    @staticmethod
    def max_bytes() -> int:
        return getattr(settings, "TRACKER_MAX_ATTACHMENT_BYTES", 10 * 1024 * 1024)

    @staticmethod
    @transaction.atomic
    def upload(*, issue: Issue, user, upload) -> Attachment:
        """Store an uploaded file against an issue"""
        limit = AttachmentService.max_bytes()
        if upload.size > limit:
            raise ValidationError({'file': [f"File is larger than the {limit // (1024 * 1024)} MB limit"]})

        filename = upload.name
        mime_type = getattr(upload, 'content_type', None) or mimetypes.guess_type(filename)[0] or ''
        attachment = Attachment.objects.create(
            issue=issue,
            user=user,
            file=upload,
            filename=filename,
            mime_type=mime_type,
            size=upload.size,
        )
        ActivityService.log(
            issue=issue, user=user, action=ActivityLog.Action.ATTACHED, new_value=filename,
        )
        logger.info("[attachment] %s (%d bytes) on issue %s", filename, upload.size, issue.pk)
        return attachment

    @staticmethod
    def delete(*, attachment: Attachment) -> None:
        attachment.file.delete(save=False)
        attachment.delete()
