"""
Ownership policy.

Every read-by-id and every mutation goes through one of the lookups below so
that records owned by another user are indistinguishable from missing ones.
"""
import logging

from .exceptions import NotFoundOrForbidden

logger = logging.getLogger(__name__)


def can_access(user, record):
    """True when ``record`` is owned by ``user``"""
    if user is None or record is None:
        return False
    user_id = getattr(user, 'pk', user)
    return user_id is not None and record.user_id == user_id


def get_owned_or_none(model, ctx, pk):
    """Read path: the caller's record, or None when absent or foreign"""
    record = model.objects.filter(pk=pk).first()
    if not can_access(ctx.user, record):
        return None
    return record


def get_owned_or_raise(model, ctx, pk, entity=None):
    """Write path: the caller's record, or NotFoundOrForbidden"""
    record = model.objects.filter(pk=pk).first()
    if not can_access(ctx.user, record):
        if record is not None:
            logger.warning(f"User {ctx.user_id} denied access to {model.__name__} {pk}")
        raise NotFoundOrForbidden(entity or model._meta.verbose_name.capitalize())
    return record
