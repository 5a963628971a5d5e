"""
Inventory operations scoped to the requesting user.
"""
import logging

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from organizer.core.permissions import get_owned_or_none, get_owned_or_raise
from organizer.core.services import filter_owned, owned_queryset, create_owned, remove_owned
from organizer.core.utils import names_by_id
from organizer.locations.models import Location
from .disposal import should_trigger, enqueue_disposal_task
from .filters import InventoryItemFilter
from .models import InventoryItem
from .serializers import InventoryItemSerializer
from .signals import get_category_cache_key

logger = logging.getLogger(__name__)


def get_category_cache_ttl():
    return getattr(settings, 'ORGANIZER', {}).get('CATEGORY_CACHE_TTL', 300)


def list_items(ctx, params=None):
    return filter_owned(InventoryItem, ctx, InventoryItemFilter, params)


def enrichment_context(ctx, items):
    return {
        'location_names': names_by_id(Location, ctx.user_id, (i.current_location_id for i in items)),
    }


def get_item(ctx, pk):
    """The caller's item or None"""
    return get_owned_or_none(InventoryItem, ctx, pk)


def create_item(ctx, data, request=None):
    serializer = InventoryItemSerializer(data=data, context={'request': request})
    with transaction.atomic():
        item = create_owned(serializer, ctx)
        if should_trigger(None, item.category):
            enqueue_disposal_task(item)
    logger.info(f"User {ctx.user_id} created inventory item {item.pk} in '{item.category}'")
    return item


def update_item(ctx, pk, data, request=None):
    """Patch an item; entering a disposal category queues one follow-up task"""
    with transaction.atomic():
        item = get_owned_or_raise(InventoryItem, ctx, pk, entity='Item')
        previous_category = item.category

        serializer = InventoryItemSerializer(item, data=data, partial=True, context={'request': request})
        serializer.is_valid(raise_exception=True)
        item = serializer.save()

        if 'category' in serializer.validated_data and should_trigger(previous_category, item.category):
            enqueue_disposal_task(item)
    logger.info(f"User {ctx.user_id} updated inventory item {pk}")
    return item


def remove_item(ctx, pk):
    return remove_owned(InventoryItem, ctx, pk, entity='Item')


def get_categories(ctx):
    """Sorted, distinct categories across the caller's items"""
    cache_key = get_category_cache_key(ctx.user_id)
    try:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for categories of user {ctx.user_id}")
            return cached
    except Exception as e:
        logger.warning(f"Cache unavailable, proceeding without cache: {e}")

    categories = sorted(set(
        owned_queryset(InventoryItem, ctx).values_list('category', flat=True)
    ))

    try:
        cache.set(cache_key, categories, get_category_cache_ttl())
    except Exception as e:
        logger.warning(f"Could not cache categories for user {ctx.user_id}: {e}")
    return categories
