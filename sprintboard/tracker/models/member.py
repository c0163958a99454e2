# ============================================
# tracker/models/member.py
# ============================================
from django.conf import settings
from django.db import models

from tracker.constants import ProjectRole


class ProjectMember(models.Model):
    Role = ProjectRole

    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='project_memberships'
    )
    role = models.CharField(
        max_length=20,
        choices=ProjectRole.choices,
        default=ProjectRole.MEMBER
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_members'
        ordering = ['created_at']
        unique_together = ['project', 'user']

    def __str__(self):
        return f"{self.project.key} - {self.user} ({self.role})"
