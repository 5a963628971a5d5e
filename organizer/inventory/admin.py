from django.contrib import admin
from .models import InventoryItem, DisposalTaskOutbox


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'user', 'category', 'quantity', 'item_value', 'created_at']
    list_filter = ['category', 'created_at']
    search_fields = ['name', 'description', 'category', 'user__username']
    ordering = ['-created_at']


@admin.register(DisposalTaskOutbox)
class DisposalTaskOutboxAdmin(admin.ModelAdmin):
    list_display = ['idempotency_key', 'user', 'item_name', 'category', 'status', 'attempts', 'created_at', 'processed_at']
    list_filter = ['status', 'category', 'created_at']
    search_fields = ['idempotency_key', 'item_name', 'user__username']
    readonly_fields = ['idempotency_key', 'attempts', 'last_error', 'task', 'processed_at']
    ordering = ['-created_at']
