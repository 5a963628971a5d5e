"""
Test suite for the core module
Tests: ownership policy, authentication boundary, settings upsert, error rendering
"""
from types import SimpleNamespace
from unittest import mock
from django.test import TestCase, SimpleTestCase
from rest_framework import status
from organizer.core.context import context_for_user
from organizer.core.exceptions import NotFoundOrForbidden
from organizer.core.models import UserSettings
from organizer.core.permissions import can_access, get_owned_or_none, get_owned_or_raise
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.organization.models import Project


class CanAccessTests(SimpleTestCase):
    """Ownership policy without touching the database"""

    def test_owner_can_access(self):
        user = SimpleNamespace(pk=7)
        record = SimpleNamespace(user_id=7)
        self.assertTrue(can_access(user, record))

    def test_other_user_cannot_access(self):
        self.assertFalse(can_access(SimpleNamespace(pk=7), SimpleNamespace(user_id=8)))

    def test_missing_record_or_user(self):
        self.assertFalse(can_access(SimpleNamespace(pk=7), None))
        self.assertFalse(can_access(None, SimpleNamespace(user_id=7)))

    def test_accepts_raw_user_id(self):
        self.assertTrue(can_access(7, SimpleNamespace(user_id=7)))


class OwnedLookupTests(TestCase):
    def setUp(self):
        self.owner = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.project = TestDataFactory.create_project(self.owner)

    def test_read_lookup_returns_none_for_foreign_record(self):
        self.assertIsNone(get_owned_or_none(Project, context_for_user(self.other), self.project.pk))
        self.assertEqual(get_owned_or_none(Project, context_for_user(self.owner), self.project.pk), self.project)

    def test_write_lookup_raises_same_error_for_missing_and_foreign(self):
        ctx = context_for_user(self.other)
        with self.assertRaises(NotFoundOrForbidden) as foreign:
            get_owned_or_raise(Project, ctx, self.project.pk, entity='Project')
        with self.assertRaises(NotFoundOrForbidden) as missing:
            get_owned_or_raise(Project, ctx, 999999, entity='Project')
        self.assertEqual(str(foreign.exception.detail), str(missing.exception.detail))


class AuthBoundaryTests(TestCase):
    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_entity_endpoints_require_authentication(self):
        for url in ['/api/v1/projects/', '/api/v1/contexts/', '/api/v1/locations/',
                    '/api/v1/tasks/', '/api/v1/inventory/', '/api/v1/settings/']:
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, url)
            self.assertIn('error', response.data)

    def test_register_returns_tokens(self):
        response = self.client.post('/api/v1/auth/register/', {
            'username': 'newperson',
            'email': 'newperson@test.com',
            'password': 'S0me-long-passphrase',
            'password_confirm': 'S0me-long-passphrase',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_register_password_mismatch(self):
        response = self.client.post('/api/v1/auth/register/', {
            'username': 'newperson',
            'password': 'S0me-long-passphrase',
            'password_confirm': 'different-passphrase',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_and_me(self):
        user = TestDataFactory.create_user(username='loginuser', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {'username': 'loginuser', 'password': 'testpass123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get('/api/v1/auth/me/')
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data['id'], user.id)

    def test_inactive_user_cannot_log_in(self):
        user = TestDataFactory.create_user(username='dormant', password='testpass123')
        user.is_active = False
        user.save()
        response = self.client.post('/api/v1/auth/login/', {'username': 'dormant', 'password': 'testpass123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn('access', response.data)

    def test_refresh_for_removed_user_is_rejected(self):
        user = TestDataFactory.create_user(username='gone', password='testpass123')
        login = self.client.post('/api/v1/auth/login/', {'username': 'gone', 'password': 'testpass123'}, format='json')
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

        user.delete()
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserSettingsTests(TestCase):
    """Settings read with defaults and upsert"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_defaults_when_never_saved(self):
        response = self.client.get('/api/v1/settings/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'gemini_api_key': '',
            'default_task_view': 'list',
            'theme': 'light',
        })
        self.assertFalse(UserSettings.objects.filter(user=self.user).exists())

    def test_first_patch_inserts_with_defaults(self):
        response = self.client.patch('/api/v1/settings/', {'theme': 'dark'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['theme'], 'dark')
        self.assertEqual(response.data['default_task_view'], 'list')
        self.assertEqual(UserSettings.objects.filter(user=self.user).count(), 1)

    def test_repeated_updates_keep_single_record(self):
        self.client.patch('/api/v1/settings/', {'gemini_api_key': 'abc'}, format='json')
        self.client.put('/api/v1/settings/', {'default_task_view': 'kanban'}, format='json')
        self.assertEqual(UserSettings.objects.filter(user=self.user).count(), 1)
        stored = UserSettings.objects.get(user=self.user)
        self.assertEqual(stored.gemini_api_key, 'abc')
        self.assertEqual(stored.default_task_view, 'kanban')

    def test_invalid_enum_rejected(self):
        response = self.client.patch('/api/v1/settings/', {'theme': 'purple'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('theme', response.data)

    def test_settings_are_per_user(self):
        other = TestDataFactory.create_user()
        TestDataFactory.create_settings(other, gemini_api_key='secret', theme='dark')
        response = self.client.get('/api/v1/settings/')
        self.assertEqual(response.data['gemini_api_key'], '')
        self.assertEqual(response.data['theme'], 'light')


class UnexpectedErrorTests(TestCase):
    def test_unhandled_exception_becomes_generic_500(self):
        user = TestDataFactory.create_user()
        client = AuthenticatedAPIClient().authenticate_user(user)
        with mock.patch('organizer.organization.views.filter_owned', side_effect=RuntimeError('boom')):
            response = client.get('/api/v1/projects/')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'An unexpected error occurred'})
