from django.db import models
from organizer.core.models import OwnedModel


class Project(OwnedModel):
    """Multi-step outcome that groups tasks"""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('completed', 'Completed'),
        ('on_hold', 'On Hold'),
    ]

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    goal = models.TextField(blank=True, null=True)

    def __str__(self):
        return self.name

    class Meta(OwnedModel.Meta):
        db_table = 'projects'
        indexes = [
            models.Index(fields=['user', 'status'], name='idx_project_user_status'),
        ]


class Context(OwnedModel):
    """Tool, place or mode a task needs (e.g. @phone, @computer)"""
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)

    def __str__(self):
        return self.name

    class Meta(OwnedModel.Meta):
        db_table = 'contexts'
