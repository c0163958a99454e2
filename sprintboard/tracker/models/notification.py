# ============================================
# tracker/models/notification.py
# ============================================
from django.conf import settings
from django.db import models


class Notification(models.Model):
    class Kind(models.TextChoices):
        ASSIGNED = 'assigned', 'Assigned'
        COMMENTED = 'commented', 'Commented'
        STATUS_CHANGED = 'status_changed', 'Status changed'
        SPRINT_STARTED = 'sprint_started', 'Sprint started'
        SPRINT_COMPLETED = 'sprint_completed', 'Sprint completed'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tracker_notifications'
    )
    issue = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    kind = models.CharField(max_length=20, choices=Kind.choices)
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True)
    is_read = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'is_read']),
        ]

    def __str__(self):
        state = "read" if self.is_read else "unread"
        return f"NOTI[{self.kind}] to {self.user_id} ({state})"
