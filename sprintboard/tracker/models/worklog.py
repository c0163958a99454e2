# ============================================
# tracker/models/worklog.py
# ============================================
from django.conf import settings
from django.db import models


class WorkLog(models.Model):
    issue = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        related_name='work_logs'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='work_logs'
    )
    time_spent = models.PositiveIntegerField()  # minutes
    description = models.TextField(blank=True)
    started_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'work_logs'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['issue', 'created_at']),
        ]

    def __str__(self):
        return f"{self.time_spent}m on {self.issue_id}"
