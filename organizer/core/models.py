from django.contrib.auth.models import AbstractUser
from django.conf import settings
from django.db import models


class User(AbstractUser):
    """Extended user model; every organizer record is owned by one user"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class OwnedModel(models.Model):
    """Base for records owned exclusively by one user.

    ``user`` is stamped on create from the request context and is never
    exposed as a writable serializer field.
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at', '-id']


class UserSettings(models.Model):
    """Per-user preferences (at most one row per user)"""
    TASK_VIEW_CHOICES = [
        ('list', 'List'),
        ('calendar', 'Calendar'),
        ('kanban', 'Kanban'),
    ]

    THEME_CHOICES = [
        ('light', 'Light'),
        ('dark', 'Dark'),
    ]

    DEFAULTS = {
        'gemini_api_key': '',
        'default_task_view': 'list',
        'theme': 'light',
    }

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='organizer_settings')
    gemini_api_key = models.CharField(max_length=255, blank=True, default='')
    default_task_view = models.CharField(max_length=20, choices=TASK_VIEW_CHOICES, default='list')
    theme = models.CharField(max_length=10, choices=THEME_CHOICES, default='light')
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Settings for {self.user}"

    class Meta:
        db_table = 'user_settings'
        verbose_name_plural = 'user settings'
