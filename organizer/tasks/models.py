from django.db import models
from organizer.core.models import OwnedModel
from organizer.core.utils import epoch_millis


class Task(OwnedModel):
    """GTD task.

    Dates are epoch milliseconds. References to projects, contexts and
    locations are checked when written but carry no database constraint, so
    deleting the referenced record leaves a dangling id behind.
    """
    STATUS_INBOX = 'inbox'
    STATUS_COMPLETED = 'completed'

    STATUS_CHOICES = [
        ('inbox', 'Inbox'),
        ('next_action', 'Next Action'),
        ('waiting_for', 'Waiting For'),
        ('scheduled', 'Scheduled'),
        ('completed', 'Completed'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    title = models.CharField(max_length=300)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='inbox')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
    due_date = models.BigIntegerField(null=True, blank=True)
    scheduled_date = models.BigIntegerField(null=True, blank=True)
    completion_date = models.BigIntegerField(null=True, blank=True)
    estimated_time = models.PositiveIntegerField(null=True, blank=True, help_text="Estimated effort in minutes")
    tags = models.JSONField(default=list, blank=True)
    project = models.ForeignKey(
        'organization.Project', on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='tasks'
    )
    context = models.ForeignKey(
        'organization.Context', on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='tasks'
    )
    location = models.ForeignKey(
        'locations.Location', on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='tasks'
    )

    def __str__(self):
        return self.title

    def apply_status(self, new_status, now=None):
        """Set ``status`` and keep ``completion_date`` consistent with it.

        Entering ``completed`` stamps the completion time, staying in
        ``completed`` keeps the existing stamp, and any other status clears it.
        """
        if new_status == self.STATUS_COMPLETED:
            if self.status != self.STATUS_COMPLETED or self.completion_date is None:
                self.completion_date = now if now is not None else epoch_millis()
        else:
            self.completion_date = None
        self.status = new_status

    class Meta(OwnedModel.Meta):
        db_table = 'tasks'
        indexes = [
            models.Index(fields=['user', 'status'], name='idx_task_user_status'),
            models.Index(fields=['user', 'project'], name='idx_task_user_project'),
            models.Index(fields=['user', 'due_date'], name='idx_task_user_due_date'),
        ]
