# ============================================
# tracker/models/label.py
# ============================================
from django.db import models


class Label(models.Model):
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='labels'
    )
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=16, default='#6B778C')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'labels'
        ordering = ['name']
        unique_together = ['project', 'name']

    def __str__(self):
        return self.name
