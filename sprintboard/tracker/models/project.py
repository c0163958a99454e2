# ============================================
# tracker/models/project.py
# ============================================
from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

from tracker.constants import DEFAULT_PROJECT_COLOR


class Project(models.Model):
    name = models.CharField(max_length=255)
    key = models.CharField(
        max_length=10,
        unique=True,
        db_index=True,
        validators=[RegexValidator(r'^[A-Z]{2,10}$', 'Key must be 2-10 uppercase letters')],
    )
    description = models.TextField(blank=True)
    lead = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='led_projects'
    )
    avatar_color = models.CharField(max_length=16, default=DEFAULT_PROJECT_COLOR)
    last_issue_number = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.key} - {self.name}"
