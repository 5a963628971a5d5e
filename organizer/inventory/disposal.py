"""
Follow-up tasks for inventory items moved into a disposal category.

The triggering create/update writes a DisposalTaskOutbox row inside its own
transaction. Once that transaction commits the entry is dispatched according
to ``settings.ORGANIZER['DISPOSAL_DISPATCH']``:

- ``thread``: processed on a daemon thread, the request does not wait for it
- ``sync``: processed inside the on-commit hook (tests)
- ``manual``: left pending for ``manage.py process_disposal_outbox``

Processing is idempotent per entry, so re-delivering an entry never creates a
second task.
"""
import logging
import re
import threading

from django.conf import settings
from django.db import connection, transaction
from django.db.models import F
from django.utils import timezone

from organizer.tasks.models import Task
from .models import DisposalCategory, DisposalTaskOutbox, InventoryItem

logger = logging.getLogger(__name__)

DISPATCH_THREAD = 'thread'
DISPATCH_SYNC = 'sync'
DISPATCH_MANUAL = 'manual'

AUTO_TASK_TAGS = ['auto-generated', 'inventory']

# What the follow-up task asks the user to do for each disposal category
DISPOSAL_ACTIONS = {
    DisposalCategory.TO_DISCARD: 'Throw it away or recycle it.',
    DisposalCategory.TO_DONATE: 'Find a charity or person to give it to.',
    DisposalCategory.TO_SELL: 'List it for sale and record the buyer.',
}

_CATEGORY_SEPARATORS = re.compile(r'[\s_\-]+')
_CANONICAL_CATEGORIES = {
    choice.value.lower(): choice.value for choice in DisposalCategory
}


def normalize_category(value):
    """Canonical spelling for disposal categories, other categories trimmed as-is.

    ``"to discard"``, ``"to_discard"`` and ``"TODISCARD"`` all become
    ``"ToDiscard"``.
    """
    if value is None:
        return value
    value = value.strip()
    key = _CATEGORY_SEPARATORS.sub('', value).lower()
    return _CANONICAL_CATEGORIES.get(key, value)


def is_disposal_category(category):
    return category in DISPOSAL_ACTIONS


def should_trigger(previous_category, new_category):
    """True when ``new_category`` enters the disposal set from outside it.

    ``previous_category`` is None for newly created items.
    """
    return is_disposal_category(new_category) and not is_disposal_category(previous_category)


def get_dispatch_mode():
    return getattr(settings, 'ORGANIZER', {}).get('DISPOSAL_DISPATCH', DISPATCH_THREAD)


def build_task_fields(item_name, category):
    action = DISPOSAL_ACTIONS.get(category, '')
    description = f"Item '{item_name}' marked as '{category}'. Needs processing."
    if action:
        description = f"{description} {action}"
    return {
        'title': f"Process item: {item_name}",
        'description': description,
        'status': 'inbox',
        'priority': 'medium',
        'tags': list(AUTO_TASK_TAGS),
    }


def enqueue_disposal_task(item):
    """Record the follow-up for ``item`` and dispatch it after commit.

    Must run inside the transaction that wrote the item.
    """
    ordinal = DisposalTaskOutbox.objects.filter(item_id=item.pk).count() + 1
    entry = DisposalTaskOutbox.objects.create(
        user_id=item.user_id,
        item_id=item.pk,
        item_name=item.name,
        category=item.category,
        idempotency_key=f"{item.pk}:{item.category}:{ordinal}",
    )
    logger.info(f"Queued disposal task {entry.idempotency_key} for user {item.user_id}")

    mode = get_dispatch_mode()
    if mode != DISPATCH_MANUAL:
        transaction.on_commit(lambda: dispatch(entry.pk, mode))
    return entry


def dispatch(entry_id, mode=None):
    mode = mode or get_dispatch_mode()
    if mode == DISPATCH_SYNC:
        process_outbox_entry(entry_id)
    elif mode == DISPATCH_THREAD:
        worker = threading.Thread(
            target=_process_in_thread,
            args=(entry_id,),
            name=f"disposal-outbox-{entry_id}",
            daemon=True,
        )
        worker.start()


def _process_in_thread(entry_id):
    try:
        process_outbox_entry(entry_id)
    finally:
        connection.close()


def process_outbox_entry(entry_id):
    """Create the follow-up task for one outbox entry and link it to its item.

    Returns the task id, or None when the entry is missing or failed. Failures
    are recorded on the entry and never raised to the caller.
    """
    try:
        with transaction.atomic():
            entry = DisposalTaskOutbox.objects.select_for_update().filter(pk=entry_id).first()
            if entry is None:
                logger.warning(f"Disposal outbox entry {entry_id} no longer exists")
                return None
            if entry.status == DisposalTaskOutbox.STATUS_PROCESSED:
                logger.info(f"Disposal outbox entry {entry.idempotency_key} already processed")
                return entry.task_id

            task = Task.objects.create(user_id=entry.user_id, **build_task_fields(entry.item_name, entry.category))

            item = InventoryItem.objects.select_for_update().filter(pk=entry.item_id).first()
            if item is not None:
                item.linked_task_ids = list(item.linked_task_ids or []) + [task.pk]
                item.save(update_fields=['linked_task_ids', 'updated_at'])
            else:
                logger.warning(f"Item {entry.item_id} removed before its disposal task {task.pk} was linked")

            entry.status = DisposalTaskOutbox.STATUS_PROCESSED
            entry.task_id = task.pk
            entry.attempts += 1
            entry.last_error = ''
            entry.processed_at = timezone.now()
            entry.save(update_fields=['status', 'task', 'attempts', 'last_error', 'processed_at'])

        logger.info(f"Created disposal task {task.pk} for item {entry.item_id} ({entry.category})")
        return task.pk
    except Exception as e:
        logger.error(f"Failed to process disposal outbox entry {entry_id}: {str(e)}", exc_info=True)
        DisposalTaskOutbox.objects.filter(pk=entry_id).update(
            status=DisposalTaskOutbox.STATUS_FAILED,
            attempts=F('attempts') + 1,
            last_error=str(e)[:2000],
        )
        return None


def pending_entries(include_failed=False):
    statuses = [DisposalTaskOutbox.STATUS_PENDING]
    if include_failed:
        statuses.append(DisposalTaskOutbox.STATUS_FAILED)
    return DisposalTaskOutbox.objects.filter(status__in=statuses).order_by('created_at', 'id')


def process_pending(limit=None, include_failed=False):
    """Drain outstanding entries; returns ``(processed, failed)`` counts"""
    entries = pending_entries(include_failed=include_failed)
    if limit:
        entries = entries[:limit]

    processed = failed = 0
    for entry_id in list(entries.values_list('id', flat=True)):
        if process_outbox_entry(entry_id) is None:
            failed += 1
        else:
            processed += 1
    return processed, failed
