from django.urls import path
from .views import inventory_list_create, inventory_detail, inventory_categories

urlpatterns = [
    path('inventory/', inventory_list_create, name='inventory-list-create'),
    path('inventory/categories/', inventory_categories, name='inventory-categories'),
    path('inventory/<int:pk>/', inventory_detail, name='inventory-detail'),
]
