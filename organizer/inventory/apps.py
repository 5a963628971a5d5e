from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'organizer.inventory'
    label = 'inventory'

    def ready(self):
        """Import signals when app is ready"""
        import organizer.inventory.signals  # noqa: F401  # Category cache invalidation
