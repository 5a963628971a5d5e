from rest_framework import serializers
from organizer.core.serializers import OwnedPrimaryKeyRelatedField, OwnedModelSerializer, StringListField
from organizer.locations.models import Location
from .disposal import normalize_category
from .models import InventoryItem


class InventoryItemSerializer(OwnedModelSerializer):
    current_location = OwnedPrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    keywords = StringListField()
    linked_task_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, default=list)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'name', 'description', 'category', 'current_location', 'quantity',
            'purchase_date', 'item_value', 'keywords', 'image_url', 'linked_task_ids',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_category(self, value):
        value = normalize_category(value)
        if not value:
            raise serializers.ValidationError('Category is required')
        return value


class InventoryItemListSerializer(InventoryItemSerializer):
    """Item plus ``location_name`` resolved from the ``location_names`` context map"""
    location_name = serializers.SerializerMethodField()

    omit_when_none = ('location_name',)

    class Meta(InventoryItemSerializer.Meta):
        fields = InventoryItemSerializer.Meta.fields + ['location_name']

    def get_location_name(self, obj):
        if obj.current_location_id is None:
            return None
        return self.context.get('location_names', {}).get(obj.current_location_id)
