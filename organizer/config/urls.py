"""
URL configuration for the organizer project.

Every domain app mounts its routes under ``/api/v1/``.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "Organizer Admin Panel"
admin.site.site_title = "Organizer Admin Portal"
admin.site.index_title = "Tasks, inventory and taxonomies"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('organizer.core.urls')),
    path('api/v1/', include('organizer.organization.urls')),
    path('api/v1/', include('organizer.locations.urls')),
    path('api/v1/', include('organizer.tasks.urls')),
    path('api/v1/', include('organizer.inventory.urls')),
    path('api/v1/', include('organizer.ai.urls')),
]
