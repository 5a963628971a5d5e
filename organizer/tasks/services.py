"""
Task operations scoped to the requesting user.
"""
import logging

from django.db.models import Q

from organizer.core.permissions import get_owned_or_none
from organizer.core.services import filter_owned, owned_queryset, create_owned, update_owned, remove_owned
from organizer.core.utils import names_by_id
from organizer.locations.models import Location
from organizer.organization.models import Project, Context
from .filters import TaskFilter
from .models import Task
from .serializers import TaskSerializer

logger = logging.getLogger(__name__)


def list_tasks(ctx, params=None):
    return filter_owned(Task, ctx, TaskFilter, params)


def enrichment_context(ctx, tasks):
    """Serializer context carrying display names for the tasks' references"""
    tasks = list(tasks)
    return {
        'project_names': names_by_id(Project, ctx.user_id, (t.project_id for t in tasks)),
        'context_names': names_by_id(Context, ctx.user_id, (t.context_id for t in tasks)),
        'location_names': names_by_id(Location, ctx.user_id, (t.location_id for t in tasks)),
    }


def get_task(ctx, pk):
    """The caller's task or None"""
    return get_owned_or_none(Task, ctx, pk)


def create_task(ctx, data, request=None):
    task = create_owned(TaskSerializer(data=data, context={'request': request}), ctx)
    logger.info(f"User {ctx.user_id} created task {task.pk} ({task.status})")
    return task


def update_task(ctx, pk, data, request=None):
    task = update_owned(Task, ctx, pk, TaskSerializer, data, {'request': request}, entity='Task')
    logger.info(f"User {ctx.user_id} updated task {pk}")
    return task


def remove_task(ctx, pk):
    return remove_owned(Task, ctx, pk, entity='Task')


def tasks_for_calendar(ctx, start, end):
    """Tasks whose due or scheduled date falls within [start, end] inclusive"""
    in_range = (
        Q(due_date__gte=start, due_date__lte=end) |
        Q(scheduled_date__gte=start, scheduled_date__lte=end)
    )
    return owned_queryset(Task, ctx).filter(in_range)
