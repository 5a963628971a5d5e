"""
Comprehensive test suite for Tasks module
Tests: CRUD, completion bookkeeping, reference validation, enrichment, calendar range
"""
from unittest import mock
from django.test import TestCase
from rest_framework import status
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.tasks.models import Task

DAY_MS = 24 * 60 * 60 * 1000


class TaskModelTests(TestCase):
    """Test Task.apply_status"""

    def setUp(self):
        self.user = TestDataFactory.create_user()

    def test_entering_completed_stamps(self):
        task = TestDataFactory.create_task(self.user, status='next_action')
        task.apply_status('completed', now=1000)
        self.assertEqual(task.completion_date, 1000)

    def test_completed_to_completed_keeps_stamp(self):
        task = TestDataFactory.create_task(self.user, status='completed', completion_date=1000)
        task.apply_status('completed', now=5000)
        self.assertEqual(task.completion_date, 1000)

    def test_leaving_completed_clears(self):
        task = TestDataFactory.create_task(self.user, status='completed', completion_date=1000)
        task.apply_status('waiting_for')
        self.assertIsNone(task.completion_date)
        self.assertEqual(task.status, 'waiting_for')


class TaskAPITests(TestCase):
    """Test Task API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other_user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_task_with_defaults(self):
        response = self.client.post('/api/v1/tasks/', {'title': 'Call plumber'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        task = Task.objects.get(pk=response.data['id'])
        self.assertEqual(task.status, 'inbox')
        self.assertEqual(task.priority, 'medium')
        self.assertEqual(task.tags, [])
        self.assertIsNone(task.completion_date)
        self.assertEqual(task.user, self.user)

    @mock.patch('organizer.tasks.models.epoch_millis', return_value=1_700_000_000_000)
    def test_create_completed_task_stamps_completion(self, _now):
        response = self.client.post('/api/v1/tasks/', {
            'title': 'Already done',
            'status': 'completed',
            'priority': 'low',
            'tags': ['home'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        task = Task.objects.get(pk=response.data['id'])
        self.assertEqual(task.completion_date, 1_700_000_000_000)

    def test_create_rejects_invalid_enums_and_negative_estimate(self):
        response = self.client.post('/api/v1/tasks/', {'title': 'X', 'status': 'someday'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/v1/tasks/', {'title': 'X', 'priority': 'critical'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/v1/tasks/', {'title': 'X', 'estimated_time': -5}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_completion_date_is_not_writable(self):
        response = self.client.post('/api/v1/tasks/', {'title': 'X', 'completion_date': 123}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(Task.objects.get(pk=response.data['id']).completion_date)

    def test_completion_lifecycle_through_updates(self):
        task = TestDataFactory.create_task(self.user, status='next_action')
        url = f'/api/v1/tasks/{task.id}/'

        with mock.patch('organizer.tasks.models.epoch_millis', return_value=1000):
            response = self.client.patch(url, {'status': 'completed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['completion_date'], 1000)

        with mock.patch('organizer.tasks.models.epoch_millis', return_value=2000):
            response = self.client.patch(url, {'status': 'completed'}, format='json')
        self.assertEqual(response.data['completion_date'], 1000)

        response = self.client.patch(url, {'title': 'Renamed'}, format='json')
        self.assertEqual(response.data['completion_date'], 1000)

        response = self.client.patch(url, {'status': 'inbox'}, format='json')
        self.assertIsNone(response.data['completion_date'])

    def test_empty_patch_leaves_task_unchanged(self):
        task = TestDataFactory.create_task(self.user, title='Stable', status='completed',
                                           completion_date=1000, tags=['a', 'b'], due_date=5000)
        for _ in range(2):
            response = self.client.patch(f'/api/v1/tasks/{task.id}/', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)
        task.refresh_from_db()
        self.assertEqual(
            (task.title, task.status, task.completion_date, task.tags, task.due_date),
            ('Stable', 'completed', 1000, ['a', 'b'], 5000)
        )

    def test_reference_must_belong_to_caller(self):
        foreign_project = TestDataFactory.create_project(self.other_user)
        response = self.client.post('/api/v1/tasks/', {
            'title': 'Sneaky',
            'project': foreign_project.id,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('project', response.data)

    def test_list_enriches_reference_names(self):
        project = TestDataFactory.create_project(self.user, name='Garden')
        context_obj = TestDataFactory.create_context(self.user, name='@outside')
        location = TestDataFactory.create_location(self.user, name='Backyard')
        TestDataFactory.create_task(self.user, title='Plant beans', project=project,
                                    context=context_obj, location=location)

        response = self.client.get('/api/v1/tasks/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['project_name'], 'Garden')
        self.assertEqual(response.data[0]['context_name'], '@outside')
        self.assertEqual(response.data[0]['location_name'], 'Backyard')

    def test_dangling_reference_omits_name(self):
        project = TestDataFactory.create_project(self.user, name='Old project')
        task = TestDataFactory.create_task(self.user, project=project)
        project_id = project.id
        project.delete()

        response = self.client.get('/api/v1/tasks/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        row = response.data[0]
        self.assertEqual(row['id'], task.id)
        self.assertEqual(row['project'], project_id)
        self.assertNotIn('project_name', row)
        self.assertNotIn('context_name', row)

    def test_resending_dangling_reference_on_update(self):
        project = TestDataFactory.create_project(self.user, name='Old project')
        task = TestDataFactory.create_task(self.user, title='Keep me', project=project)
        project_id = project.id
        project.delete()

        body = self.client.get(f'/api/v1/tasks/{task.id}/').data
        body['title'] = 'Renamed'
        response = self.client.put(f'/api/v1/tasks/{task.id}/', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['project'], project_id)
        task.refresh_from_db()
        self.assertEqual((task.title, task.project_id), ('Renamed', project_id))

    def test_changing_reference_is_still_checked(self):
        own = TestDataFactory.create_project(self.user)
        foreign = TestDataFactory.create_project(self.other_user)
        task = TestDataFactory.create_task(self.user, project=own)

        response = self.client.patch(f'/api/v1/tasks/{task.id}/', {'project': foreign.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.patch(f'/api/v1/tasks/{task.id}/', {'project': 999999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        task.refresh_from_db()
        self.assertEqual(task.project_id, own.id)

    def test_list_filters(self):
        project = TestDataFactory.create_project(self.user)
        wanted = TestDataFactory.create_task(self.user, status='next_action', project=project)
        TestDataFactory.create_task(self.user, status='next_action')
        TestDataFactory.create_task(self.user, status='inbox', project=project)
        TestDataFactory.create_task(self.other_user, status='next_action')

        response = self.client.get('/api/v1/tasks/?status=next_action')
        self.assertEqual(len(response.data), 2)

        response = self.client.get(f'/api/v1/tasks/?status=next_action&project={project.id}')
        self.assertEqual([t['id'] for t in response.data], [wanted.id])

    def test_other_users_tasks_are_invisible(self):
        task = TestDataFactory.create_task(self.other_user)
        self.assertEqual(self.client.get('/api/v1/tasks/').data, [])
        self.assertEqual(self.client.get(f'/api/v1/tasks/{task.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            self.client.patch(f'/api/v1/tasks/{task.id}/', {'title': 'x'}, format='json').status_code,
            status.HTTP_404_NOT_FOUND
        )
        self.assertEqual(self.client.delete(f'/api/v1/tasks/{task.id}/').status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Task.objects.filter(pk=task.id).exists())

    def test_delete_task(self):
        task = TestDataFactory.create_task(self.user)
        response = self.client.delete(f'/api/v1/tasks/{task.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Task.objects.filter(pk=task.id).exists())


class TaskCalendarTests(TestCase):
    """Test the calendar range query"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.start = 10 * DAY_MS
        self.end = 20 * DAY_MS

    def _calendar_ids(self, start, end):
        response = self.client.get(f'/api/v1/tasks/calendar/?start={start}&end={end}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return {t['id'] for t in response.data}

    def test_due_or_scheduled_in_range(self):
        due_inside = TestDataFactory.create_task(self.user, due_date=15 * DAY_MS, scheduled_date=40 * DAY_MS)
        scheduled_inside = TestDataFactory.create_task(self.user, due_date=1 * DAY_MS, scheduled_date=12 * DAY_MS)
        TestDataFactory.create_task(self.user, due_date=30 * DAY_MS)
        TestDataFactory.create_task(self.user)

        self.assertEqual(self._calendar_ids(self.start, self.end), {due_inside.id, scheduled_inside.id})

    def test_bounds_are_inclusive(self):
        on_start = TestDataFactory.create_task(self.user, due_date=self.start)
        on_end = TestDataFactory.create_task(self.user, scheduled_date=self.end)
        self.assertEqual(self._calendar_ids(self.start, self.end), {on_start.id, on_end.id})

    def test_other_users_tasks_excluded(self):
        other = TestDataFactory.create_user()
        TestDataFactory.create_task(other, due_date=15 * DAY_MS)
        self.assertEqual(self._calendar_ids(self.start, self.end), set())

    def test_calendar_rows_are_not_enriched(self):
        project = TestDataFactory.create_project(self.user, name='Garden')
        TestDataFactory.create_task(self.user, due_date=15 * DAY_MS, project=project)
        response = self.client.get(f'/api/v1/tasks/calendar/?start={self.start}&end={self.end}')
        self.assertNotIn('project_name', response.data[0])

    def test_invalid_range(self):
        response = self.client.get('/api/v1/tasks/calendar/?start=abc&end=10')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get(f'/api/v1/tasks/calendar/?start={self.end}&end={self.start}')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get('/api/v1/tasks/calendar/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
