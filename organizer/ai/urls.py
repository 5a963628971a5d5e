from django.urls import path
from .views import suggest_description, suggest_priority

urlpatterns = [
    path('ai/suggest-description/', suggest_description, name='ai-suggest-description'),
    path('ai/suggest-priority/', suggest_priority, name='ai-suggest-priority'),
]
