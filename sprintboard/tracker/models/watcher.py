# ============================================
# tracker/models/watcher.py
# ============================================
from django.conf import settings
from django.db import models


class Watcher(models.Model):
    issue = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        related_name='watchers'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='watching'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'watchers'
        ordering = ['created_at']
        unique_together = ['issue', 'user']

    def __str__(self):
        return f"{self.user} watches {self.issue_id}"
