"""Small helpers shared across apps"""
import time


def epoch_millis():
    """Current time as integer milliseconds since the Unix epoch"""
    return int(time.time() * 1000)


def names_by_id(model, user_id, ids):
    """Map of ``id -> name`` for the user's records among ``ids``.

    Ids that no longer resolve are simply absent from the result.
    """
    ids = {pk for pk in ids if pk is not None}
    if not ids:
        return {}
    return dict(model.objects.filter(user_id=user_id, pk__in=ids).values_list('id', 'name'))
