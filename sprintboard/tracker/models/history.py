# ============================================
# tracker/models/history.py
# ============================================
from django.conf import settings
from django.db import models


class ActivityLog(models.Model):
    """One row per changed field, written as a side effect of issue mutations."""

    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'
        COMMENTED = 'commented', 'Commented'
        LOGGED_WORK = 'logged_work', 'Logged work'
        LINKED = 'linked', 'Linked'
        ATTACHED = 'attached', 'Attached'

    issue = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        related_name='activity'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='issue_activity'
    )
    action = models.CharField(max_length=20, choices=Action.choices, default=Action.UPDATED)
    field = models.CharField(max_length=50, blank=True)
    old_value = models.TextField(blank=True)
    new_value = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'activity_log'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['issue', '-created_at']),
        ]

    def __str__(self):
        return f"{self.issue_id} - {self.field or self.action} changed"
