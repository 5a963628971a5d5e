import django_filters
from .disposal import normalize_category
from .models import InventoryItem


class InventoryItemFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(method='filter_category')
    location = django_filters.NumberFilter(field_name='current_location_id', lookup_expr='exact')

    class Meta:
        model = InventoryItem
        fields = ['category', 'location']

    def filter_category(self, queryset, name, value):
        # Same canonical spelling the write path stores
        return queryset.filter(category=normalize_category(value))
