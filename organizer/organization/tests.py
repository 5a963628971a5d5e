"""
Test suite for the organization module
Tests: project and context CRUD, owner scoping, partial updates
"""
from django.test import TestCase
from rest_framework import status
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.organization.models import Project, Context


class ProjectAPITests(TestCase):
    """Test Project API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other_user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_project_returns_id(self):
        response = self.client.post('/api/v1/projects/', {
            'name': 'Move house',
            'status': 'active',
            'goal': 'Settled in by spring',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        project = Project.objects.get(pk=response.data['id'])
        self.assertEqual(project.user, self.user)
        self.assertEqual(project.goal, 'Settled in by spring')

    def test_create_project_rejects_unknown_status(self):
        response = self.client.post('/api/v1/projects/', {'name': 'X', 'status': 'archived'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('status', response.data)

    def test_user_cannot_be_assigned_through_payload(self):
        response = self.client.post('/api/v1/projects/', {'name': 'Mine', 'user': self.other_user.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Project.objects.get(pk=response.data['id']).user, self.user)

    def test_list_is_scoped_and_newest_first(self):
        first = TestDataFactory.create_project(self.user, name='First')
        second = TestDataFactory.create_project(self.user, name='Second')
        TestDataFactory.create_project(self.other_user, name='Not mine')

        response = self.client.get('/api/v1/projects/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data], [second.id, first.id])

    def test_list_filters_by_status(self):
        TestDataFactory.create_project(self.user, status='active')
        held = TestDataFactory.create_project(self.user, status='on_hold')
        response = self.client.get('/api/v1/projects/?status=on_hold')
        self.assertEqual([p['id'] for p in response.data], [held.id])

    def test_get_foreign_project_is_not_found(self):
        project = TestDataFactory.create_project(self.other_user)
        response = self.client.get(f'/api/v1/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_changes_only_provided_fields(self):
        project = TestDataFactory.create_project(self.user, name='Garden', description='Raised beds', goal='Vegetables')
        response = self.client.patch(f'/api/v1/projects/{project.id}/', {'status': 'completed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        project.refresh_from_db()
        self.assertEqual(project.status, 'completed')
        self.assertEqual(project.name, 'Garden')
        self.assertEqual(project.description, 'Raised beds')
        self.assertEqual(project.goal, 'Vegetables')

    def test_empty_patch_is_idempotent(self):
        project = TestDataFactory.create_project(self.user, name='Garden', goal='Vegetables')
        for _ in range(2):
            response = self.client.patch(f'/api/v1/projects/{project.id}/', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)
        project.refresh_from_db()
        self.assertEqual((project.name, project.status, project.goal), ('Garden', 'active', 'Vegetables'))

    def test_update_and_delete_by_non_owner_fail(self):
        project = TestDataFactory.create_project(self.other_user, name='Theirs')

        response = self.client.patch(f'/api/v1/projects/{project.id}/', {'name': 'Mine now'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'not_found_or_forbidden')

        response = self.client.delete(f'/api/v1/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Project.objects.filter(pk=project.id, name='Theirs').exists())

    def test_missing_and_foreign_are_indistinguishable(self):
        project = TestDataFactory.create_project(self.other_user)
        foreign = self.client.delete(f'/api/v1/projects/{project.id}/')
        missing = self.client.delete('/api/v1/projects/999999/')
        self.assertEqual(foreign.status_code, missing.status_code)
        self.assertEqual(foreign.data, missing.data)

    def test_delete_project(self):
        project = TestDataFactory.create_project(self.user)
        response = self.client.delete(f'/api/v1/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Project.objects.filter(pk=project.id).exists())


class ContextAPITests(TestCase):
    """Test Context API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other_user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_and_get_context(self):
        response = self.client.post('/api/v1/contexts/', {'name': '@phone'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        detail = self.client.get(f"/api/v1/contexts/{response.data['id']}/")
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(detail.data['name'], '@phone')

    def test_other_users_context_absent_from_list(self):
        TestDataFactory.create_context(self.other_user, name='@errands')
        response = self.client.get('/api/v1/contexts/')
        self.assertEqual(response.data, [])

    def test_non_owner_update_fails(self):
        context_obj = TestDataFactory.create_context(self.other_user, name='@errands')
        response = self.client.patch(f'/api/v1/contexts/{context_obj.id}/', {'name': '@mine'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        context_obj.refresh_from_db()
        self.assertEqual(context_obj.name, '@errands')

    def test_empty_patch_is_idempotent(self):
        context_obj = TestDataFactory.create_context(self.user, name='@desk', description='Computer work')
        for _ in range(2):
            response = self.client.patch(f'/api/v1/contexts/{context_obj.id}/', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)
        context_obj.refresh_from_db()
        self.assertEqual((context_obj.name, context_obj.description), ('@desk', 'Computer work'))

    def test_delete_context(self):
        context_obj = TestDataFactory.create_context(self.user)
        response = self.client.delete(f'/api/v1/contexts/{context_obj.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Context.objects.filter(pk=context_obj.id).exists())
