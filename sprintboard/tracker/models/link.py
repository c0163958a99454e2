# ============================================
# tracker/models/link.py
# ============================================
from django.db import models

from tracker.constants import LinkType


class IssueLink(models.Model):
    LinkType = LinkType

    source = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        related_name='outgoing_links'
    )
    target = models.ForeignKey(
        'Issue',
        on_delete=models.CASCADE,
        related_name='incoming_links'
    )
    link_type = models.CharField(max_length=20, choices=LinkType.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'issue_links'
        ordering = ['created_at']
        unique_together = ['source', 'target', 'link_type']

    def __str__(self):
        return f"{self.source_id} {self.link_type} {self.target_id}"
