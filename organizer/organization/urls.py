from django.urls import path
from .views import (
    project_list_create, project_detail,
    context_list_create, context_detail
)

urlpatterns = [
    path('projects/', project_list_create, name='project-list-create'),
    path('projects/<int:pk>/', project_detail, name='project-detail'),
    path('contexts/', context_list_create, name='context-list-create'),
    path('contexts/<int:pk>/', context_detail, name='context-detail'),
]
