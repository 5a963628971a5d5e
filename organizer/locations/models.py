from django.db import models
from organizer.core.models import OwnedModel


class Location(OwnedModel):
    """Physical place where tasks happen or items are kept"""
    TYPE_CHOICES = [
        ('home', 'Home'),
        ('work', 'Work'),
        ('storage', 'Storage'),
        ('other', 'Other'),
    ]

    name = models.CharField(max_length=200)
    address = models.TextField(blank=True, null=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='other')

    def __str__(self):
        return self.name

    class Meta(OwnedModel.Meta):
        db_table = 'locations'
