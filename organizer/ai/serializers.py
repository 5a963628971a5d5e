from rest_framework import serializers


class DescriptionSuggestionRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=100)


class PrioritySuggestionRequestSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=300)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
