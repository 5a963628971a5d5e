import django_filters
from .models import Location


class LocationFilter(django_filters.FilterSet):
    type = django_filters.ChoiceFilter(choices=Location.TYPE_CHOICES)

    class Meta:
        model = Location
        fields = ['type']
