# ============================================
# tracker/models/board.py
# ============================================
from django.db import models

from tracker.constants import SwimlaneBy, STATUS_COLUMNS


def default_column_order():
    return list(STATUS_COLUMNS)


class BoardConfig(models.Model):
    """Presentation settings for a project's board. Never affects issue validity."""

    SwimlaneBy = SwimlaneBy

    project = models.OneToOneField(
        'Project',
        on_delete=models.CASCADE,
        related_name='board_config'
    )
    swimlane_by = models.CharField(
        max_length=16,
        choices=SwimlaneBy.choices,
        default=SwimlaneBy.NONE
    )
    wip_limits = models.JSONField(default=dict, blank=True)
    column_order = models.JSONField(default=default_column_order, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board_configs'

    def __str__(self):
        return f"Board config for {self.project.key}"
