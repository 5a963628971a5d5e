"""
Owner-scoped data access shared by the entity apps.

Each helper takes a RequestContext first so that ownership is applied before
any query runs.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import ValidationError

from .models import UserSettings
from .permissions import get_owned_or_raise

logger = logging.getLogger(__name__)


def owned_queryset(model, ctx):
    """All of the caller's records of ``model``, newest first"""
    return model.objects.filter(user_id=ctx.user_id).order_by('-created_at', '-id')


def filter_owned(model, ctx, filterset_class=None, params=None):
    """Caller's records narrowed by a django-filter FilterSet"""
    queryset = owned_queryset(model, ctx)
    if filterset_class is None:
        return queryset
    filterset = filterset_class(params or {}, queryset=queryset)
    if not filterset.is_valid():
        raise ValidationError(filterset.errors)
    return filterset.qs


def create_owned(serializer, ctx):
    """Validate ``serializer`` and insert its record stamped with the caller"""
    serializer.is_valid(raise_exception=True)
    return serializer.save(user=ctx.user)


def update_owned(model, ctx, pk, serializer_class, data, serializer_context=None, entity=None):
    """Patch only the provided fields of the caller's record"""
    record = get_owned_or_raise(model, ctx, pk, entity=entity)
    serializer = serializer_class(record, data=data, partial=True, context=serializer_context or {})
    serializer.is_valid(raise_exception=True)
    return serializer.save()


def remove_owned(model, ctx, pk, entity=None):
    record = get_owned_or_raise(model, ctx, pk, entity=entity)
    record_id = record.pk
    record.delete()
    logger.info(f"User {ctx.user_id} deleted {model.__name__} {record_id}")
    return record_id


# Settings

def get_user_settings(ctx):
    """Stored settings for the caller, or None when never saved"""
    return UserSettings.objects.filter(user_id=ctx.user_id).first()


def get_settings_values(ctx):
    """Caller's settings as a dict, falling back to defaults"""
    stored = get_user_settings(ctx)
    if stored is None:
        return dict(UserSettings.DEFAULTS)
    return {
        'gemini_api_key': stored.gemini_api_key,
        'default_task_view': stored.default_task_view,
        'theme': stored.theme,
    }


def upsert_user_settings(ctx, validated_data):
    """Patch the caller's settings row, inserting it with defaults if absent"""
    with transaction.atomic():
        values = dict(UserSettings.DEFAULTS)
        values.update(validated_data)
        stored, created = UserSettings.objects.select_for_update().get_or_create(
            user=ctx.user,
            defaults=values,
        )
        if not created and validated_data:
            for field, value in validated_data.items():
                setattr(stored, field, value)
            stored.save(update_fields=list(validated_data.keys()) + ['updated_at'])
    logger.info(f"User {ctx.user_id} {'created' if created else 'updated'} settings")
    return stored
