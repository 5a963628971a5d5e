from rest_framework import serializers
from organizer.core.serializers import OwnedPrimaryKeyRelatedField, OwnedModelSerializer, StringListField
from organizer.locations.models import Location
from organizer.organization.models import Project, Context
from .models import Task


class TaskSerializer(OwnedModelSerializer):
    project = OwnedPrimaryKeyRelatedField(queryset=Project.objects.all(), required=False, allow_null=True)
    context = OwnedPrimaryKeyRelatedField(queryset=Context.objects.all(), required=False, allow_null=True)
    location = OwnedPrimaryKeyRelatedField(queryset=Location.objects.all(), required=False, allow_null=True)
    tags = StringListField()

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'status', 'priority',
            'due_date', 'scheduled_date', 'completion_date', 'estimated_time',
            'tags', 'project', 'context', 'location', 'created_at', 'updated_at'
        ]
        read_only_fields = ['completion_date', 'created_at', 'updated_at']

    def create(self, validated_data):
        new_status = validated_data.pop('status', Task.STATUS_INBOX)
        task = Task(**validated_data)
        task.status = Task.STATUS_INBOX
        task.apply_status(new_status)
        task.save()
        return task

    def update(self, instance, validated_data):
        new_status = validated_data.pop('status', None)
        if new_status is not None:
            instance.apply_status(new_status)
        return super().update(instance, validated_data)


class TaskListSerializer(TaskSerializer):
    """Task with display names of its resolvable references.

    Expects ``project_names``, ``context_names`` and ``location_names`` maps in
    the serializer context.
    """
    project_name = serializers.SerializerMethodField()
    context_name = serializers.SerializerMethodField()
    location_name = serializers.SerializerMethodField()

    omit_when_none = ('project_name', 'context_name', 'location_name')

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ['project_name', 'context_name', 'location_name']

    def _lookup(self, names_key, ref_id):
        if ref_id is None:
            return None
        return self.context.get(names_key, {}).get(ref_id)

    def get_project_name(self, obj):
        return self._lookup('project_names', obj.project_id)

    def get_context_name(self, obj):
        return self._lookup('context_names', obj.context_id)

    def get_location_name(self, obj):
        return self._lookup('location_names', obj.location_id)


class CalendarRangeSerializer(serializers.Serializer):
    start = serializers.IntegerField()
    end = serializers.IntegerField()

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError({'end': 'end must not be before start'})
        return attrs
