from django.urls import path
from .views import (
    LoginView, RefreshView, register, user_me, user_settings,
)

urlpatterns = [
    # Auth endpoints
    path('auth/register/', register, name='register'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/refresh/', RefreshView.as_view(), name='token-refresh'),
    path('auth/me/', user_me, name='user-me'),

    # Per-user settings
    path('settings/', user_settings, name='user-settings'),
]
