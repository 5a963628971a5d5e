from django.contrib import admin
from .models import Project, Context


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'goal', 'user__username']
    ordering = ['-created_at']


@admin.register(Context)
class ContextAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'user__username']
    ordering = ['name']
