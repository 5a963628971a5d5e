from rest_framework import serializers
from .models import Project, Context


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name', 'description', 'status', 'goal', 'created_at', 'updated_at']


class ContextSerializer(serializers.ModelSerializer):
    class Meta:
        model = Context
        fields = ['id', 'name', 'description', 'created_at', 'updated_at']
