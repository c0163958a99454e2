# ============================================
# tracker/models/saved_filter.py
# ============================================
from django.conf import settings
from django.db import models


class SavedFilter(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='saved_filters'
    )
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='saved_filters'
    )
    name = models.CharField(max_length=100)
    criteria = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'saved_filters'
        ordering = ['name']

    def __str__(self):
        return self.name
