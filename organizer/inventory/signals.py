"""
Category cache invalidation
Drops a user's cached category list whenever one of their items changes
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.core.cache import cache
import logging

from .models import InventoryItem

logger = logging.getLogger(__name__)

CATEGORY_CACHE_KEY_PREFIX = 'inventory_categories:'


def get_category_cache_key(user_id):
    return f"{CATEGORY_CACHE_KEY_PREFIX}{user_id}"


def invalidate_category_cache(user_id):
    try:
        cache.delete(get_category_cache_key(user_id))
        logger.debug(f"Invalidated category cache for user {user_id}")
    except Exception as e:
        logger.warning(f"Could not invalidate category cache for user {user_id}: {str(e)}")


@receiver(post_save, sender=InventoryItem)
def inventory_item_saved(sender, instance, **kwargs):
    invalidate_category_cache(instance.user_id)


@receiver(post_delete, sender=InventoryItem)
def inventory_item_deleted(sender, instance, **kwargs):
    invalidate_category_cache(instance.user_id)
