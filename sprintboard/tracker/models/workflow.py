# ============================================
# tracker/models/workflow.py
# ============================================
from django.db import models

from tracker.constants import IssueStatus


class Workflow(models.Model):
    """Per-project override of the status graph. No row means every move is allowed."""

    project = models.OneToOneField(
        'Project',
        on_delete=models.CASCADE,
        related_name='workflow'
    )
    name = models.CharField(max_length=100, default='Default workflow')
    statuses = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'workflows'

    def __str__(self):
        return f"{self.project.key} - {self.name}"


class WorkflowTransition(models.Model):
    workflow = models.ForeignKey(
        Workflow,
        on_delete=models.CASCADE,
        related_name='transitions'
    )
    from_status = models.CharField(max_length=16, choices=IssueStatus.choices)
    to_status = models.CharField(max_length=16, choices=IssueStatus.choices)

    class Meta:
        db_table = 'workflow_transitions'
        unique_together = ['workflow', 'from_status', 'to_status']

    def __str__(self):
        return f"{self.from_status} -> {self.to_status}"
