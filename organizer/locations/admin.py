from django.contrib import admin
from .models import Location


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'type', 'address', 'created_at']
    list_filter = ['type', 'created_at']
    search_fields = ['name', 'address', 'user__username']
    ordering = ['name']
