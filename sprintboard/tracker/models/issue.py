# ============================================
# tracker/models/issue.py
# ============================================
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from tracker.constants import IssueType, Priority, IssueStatus
from tracker.utils.keys import format_issue_key


class Issue(models.Model):
    IssueType = IssueType
    Priority = Priority
    Status = IssueStatus

    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='issues'
    )
    issue_number = models.PositiveIntegerField(editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    type = models.CharField(
        max_length=16,
        choices=IssueType.choices,
        default=IssueType.TASK
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM
    )
    status = models.CharField(
        max_length=16,
        choices=IssueStatus.choices,
        default=IssueStatus.TODO,
        db_index=True
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_issues'
    )
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reported_issues'
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children'
    )
    story_points = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    sprint = models.ForeignKey(
        'Sprint',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='issues'
    )
    fix_version = models.ForeignKey(
        'Version',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fixed_issues'
    )
    affects_version = models.ForeignKey(
        'Version',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='affected_issues'
    )
    labels = models.ManyToManyField(
        'Label',
        blank=True,
        related_name='issues',
        db_table='issue_labels'
    )
    components = models.ManyToManyField(
        'Component',
        blank=True,
        related_name='issues',
        db_table='issue_components'
    )

    # Time tracking, in minutes
    original_estimate = models.PositiveIntegerField(null=True, blank=True)
    time_spent = models.PositiveIntegerField(default=0)
    time_remaining = models.PositiveIntegerField(null=True, blank=True)

    start_date = models.DateField(null=True, blank=True)
    due_date = models.DateField(null=True, blank=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'issues'
        ordering = ['sort_order', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'issue_number'], name='uniq_issue_number_per_project'),
        ]
        indexes = [
            models.Index(fields=['project', 'status']),
            models.Index(fields=['assignee']),
            models.Index(fields=['sprint']),
            models.Index(fields=['parent']),
        ]

    @property
    def key(self) -> str:
        return format_issue_key(self.project.key, self.issue_number)

    def __str__(self):
        return f"{self.key} - {self.title}"
