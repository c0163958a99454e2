# ============================================
# tracker/models/component.py
# ============================================
from django.conf import settings
from django.db import models


class Component(models.Model):
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='components'
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    lead = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='led_components'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'components'
        ordering = ['name']
        unique_together = ['project', 'name']

    def __str__(self):
        return self.name
