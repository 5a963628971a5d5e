import django_filters
from .models import Task


class TaskFilter(django_filters.FilterSet):
    """Equality filters on the caller's tasks; multiple filters combine with AND"""
    status = django_filters.ChoiceFilter(choices=Task.STATUS_CHOICES)
    priority = django_filters.ChoiceFilter(choices=Task.PRIORITY_CHOICES)
    project = django_filters.NumberFilter(field_name='project_id', lookup_expr='exact')
    context = django_filters.NumberFilter(field_name='context_id', lookup_expr='exact')
    location = django_filters.NumberFilter(field_name='location_id', lookup_expr='exact')

    class Meta:
        model = Task
        fields = ['status', 'priority', 'project', 'context', 'location']
