"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from organizer.core.models import UserSettings
from organizer.organization.models import Project, Context
from organizer.locations.models import Location
from organizer.tasks.models import Task
from organizer.inventory.models import InventoryItem
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )

    @staticmethod
    def create_settings(user, gemini_api_key='test-key', default_task_view='list', theme='light'):
        """Create stored settings for a user"""
        return UserSettings.objects.create(
            user=user,
            gemini_api_key=gemini_api_key,
            default_task_view=default_task_view,
            theme=theme
        )

    @staticmethod
    def create_project(user, name=None, status='active', description=None, goal=None):
        """Create a test project"""
        if not name:
            name = f'Project_{TestDataFactory.random_string(6)}'
        return Project.objects.create(user=user, name=name, status=status, description=description, goal=goal)

    @staticmethod
    def create_context(user, name=None, description=None):
        """Create a test context"""
        if not name:
            name = f'@context_{TestDataFactory.random_string(6)}'
        return Context.objects.create(user=user, name=name, description=description)

    @staticmethod
    def create_location(user, name=None, type='home', address=None):
        """Create a test location"""
        if not name:
            name = f'Location_{TestDataFactory.random_string(6)}'
        return Location.objects.create(
            user=user,
            name=name,
            type=type,
            address=address or f'Test Address {name}'
        )

    @staticmethod
    def create_task(user, title=None, status='inbox', priority='medium', **fields):
        """Create a test task directly, bypassing the completion bookkeeping"""
        if not title:
            title = f'Task_{TestDataFactory.random_string(6)}'
        fields.setdefault('tags', [])
        return Task.objects.create(user=user, title=title, status=status, priority=priority, **fields)

    @staticmethod
    def create_item(user, name=None, category='Electronics', quantity=1, **fields):
        """Create a test inventory item directly (no disposal side effect)"""
        if not name:
            name = f'Item_{TestDataFactory.random_string(6)}'
        fields.setdefault('keywords', [])
        fields.setdefault('linked_task_ids', [])
        return InventoryItem.objects.create(user=user, name=name, category=category, quantity=quantity, **fields)


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
