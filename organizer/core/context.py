"""Per-request caller context handed to every service function"""
from dataclasses import dataclass

from rest_framework.exceptions import NotAuthenticated


@dataclass(frozen=True)
class RequestContext:
    user: object
    user_id: int


def get_request_context(request):
    """Resolve the authenticated caller of ``request``.

    Raises NotAuthenticated when no identity resolves, before any data access.
    """
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        raise NotAuthenticated('User not authenticated')
    return RequestContext(user=user, user_id=user.pk)


def context_for_user(user):
    """Build a context for code paths that run outside a request (commands, deferred work)"""
    return RequestContext(user=user, user_id=user.pk)
