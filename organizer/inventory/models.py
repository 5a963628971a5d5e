from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from organizer.core.models import OwnedModel


class DisposalCategory(models.TextChoices):
    """Reserved inventory categories that spawn a follow-up task"""
    TO_DISCARD = 'ToDiscard', 'To Discard'
    TO_DONATE = 'ToDonate', 'To Donate'
    TO_SELL = 'ToSell', 'To Sell'


class InventoryItem(OwnedModel):
    """Item the user owns; ``category`` is free text except for the disposal values"""
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    category = models.CharField(max_length=100)
    current_location = models.ForeignKey(
        'locations.Location', on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='inventory_items'
    )
    quantity = models.PositiveIntegerField(default=1)
    purchase_date = models.BigIntegerField(null=True, blank=True)
    item_value = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    keywords = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    # Task ids in link order; entries may outlive the task they point to
    linked_task_ids = models.JSONField(default=list, blank=True)

    def __str__(self):
        return self.name

    class Meta(OwnedModel.Meta):
        db_table = 'inventory_items'
        indexes = [
            models.Index(fields=['user', 'category'], name='idx_item_user_category'),
            models.Index(fields=['user', 'current_location'], name='idx_item_user_location'),
        ]


class DisposalTaskOutbox(models.Model):
    """Pending follow-up task for an item moved into a disposal category.

    Written in the same transaction as the triggering item write and
    processed after commit; processing is idempotent per entry.
    """
    STATUS_PENDING = 'pending'
    STATUS_PROCESSED = 'processed'
    STATUS_FAILED = 'failed'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PROCESSED, 'Processed'),
        (STATUS_FAILED, 'Failed'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    item = models.ForeignKey(
        InventoryItem, on_delete=models.DO_NOTHING, db_constraint=False, related_name='disposal_outbox'
    )
    item_name = models.CharField(max_length=200)
    category = models.CharField(max_length=20, choices=DisposalCategory.choices)
    idempotency_key = models.CharField(max_length=150, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True, default='')
    task = models.ForeignKey(
        'tasks.Task', on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return self.idempotency_key

    class Meta:
        db_table = 'disposal_task_outbox'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='idx_outbox_status_created'),
        ]
