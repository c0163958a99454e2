# ============================================
# tracker/models/sprint.py
# ============================================
from django.db import models
from django.db.models import Q, UniqueConstraint

from tracker.constants import SprintStatus


class Sprint(models.Model):
    SprintStatus = SprintStatus

    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='sprints'
    )
    name = models.CharField(max_length=255)
    goal = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=SprintStatus.choices,
        default=SprintStatus.PLANNING
    )
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    # Snapshot taken at completion, non-done issues leave the sprint afterwards
    committed_points = models.PositiveIntegerField(null=True, blank=True)
    completed_points = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sprints'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['project', 'status']),
        ]
        constraints = [
            UniqueConstraint(
                fields=['project'],
                condition=Q(status='active'),
                name='uniq_active_sprint_per_project'
            ),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == SprintStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == SprintStatus.COMPLETED

    def __str__(self):
        return f"{self.project.key} - {self.name}"
