from django.urls import path
from .views import task_list_create, task_detail, task_calendar

urlpatterns = [
    path('tasks/', task_list_create, name='task-list-create'),
    path('tasks/calendar/', task_calendar, name='task-calendar'),
    path('tasks/<int:pk>/', task_detail, name='task-detail'),
]
