# ============================================
# tracker/models/version.py
# ============================================
from django.db import models

from tracker.constants import VersionStatus


class Version(models.Model):
    VersionStatus = VersionStatus

    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='versions'
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=12,
        choices=VersionStatus.choices,
        default=VersionStatus.UNRELEASED
    )
    start_date = models.DateField(null=True, blank=True)
    release_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'versions'
        ordering = ['-created_at']
        unique_together = ['project', 'name']

    def __str__(self):
        return f"{self.project.key} {self.name}"
