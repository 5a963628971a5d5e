"""
Test suite for AI suggestions
Gemini is never contacted: requests.post is mocked in every test
"""
from unittest import mock
import requests
from django.test import TestCase, SimpleTestCase
from rest_framework import status
from organizer.ai import gemini
from organizer.core.models import UserSettings
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.inventory.models import InventoryItem
from organizer.tasks.models import Task


def gemini_response(text=None, status_code=200, payload=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if payload is None:
        payload = {'candidates': [{'content': {'parts': [{'text': text}]}}]}
    response.json.return_value = payload
    return response


class ExtractionTests(SimpleTestCase):
    """Parsing helpers for Gemini output"""

    def test_extract_priority_first_keyword(self):
        self.assertEqual(gemini.extract_priority('Priority: this is a high priority task because...'), 'high')
        self.assertEqual(gemini.extract_priority('URGENT - the deadline is today'), 'urgent')
        self.assertEqual(gemini.extract_priority('low, though it could become high'), 'low')

    def test_extract_priority_defaults_to_medium(self):
        self.assertEqual(gemini.extract_priority('Do it whenever you like.'), 'medium')
        self.assertEqual(gemini.extract_priority('highway maintenance'), 'medium')
        self.assertEqual(gemini.extract_priority(''), 'medium')

    def test_extract_text(self):
        payload = {'candidates': [{'content': {'parts': [{'text': 'hello'}]}}]}
        self.assertEqual(gemini.extract_text(payload), 'hello')
        self.assertIsNone(gemini.extract_text({}))
        self.assertIsNone(gemini.extract_text({'candidates': []}))
        self.assertIsNone(gemini.extract_text({'candidates': [{'content': {'parts': [{'text': '  '}]}}]}))

    def test_generate_url(self):
        self.assertTrue(gemini.get_generate_url('gemini-test').endswith('/models/gemini-test:generateContent'))


class SuggestionAPITests(TestCase):
    """Test the suggestion endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def _with_key(self, key='test-key'):
        TestDataFactory.create_settings(self.user, gemini_api_key=key)

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_missing_key_fails_without_calling_gemini(self, mock_post):
        response = self.client.post('/api/v1/ai/suggest-description/', {'name': 'Drill', 'category': 'Tools'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'missing_credential')
        self.assertIn('error', response.data)
        mock_post.assert_not_called()

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_description_is_trimmed(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response('  A cordless power drill for home repairs.\n')

        response = self.client.post('/api/v1/ai/suggest-description/', {'name': 'Drill', 'category': 'Tools'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'suggestion': 'A cordless power drill for home repairs.'})

        _, kwargs = mock_post.call_args
        self.assertEqual(kwargs['params'], {'key': 'test-key'})
        self.assertIn('Name: Drill', kwargs['json']['contents'][0]['parts'][0]['text'])
        self.assertIn('timeout', kwargs)

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_priority_parsed_from_text(self, mock_post):
        self._with_key()
        text = 'Priority: this is a high priority task because the lease ends Friday.'
        mock_post.return_value = gemini_response(text)

        response = self.client.post('/api/v1/ai/suggest-priority/', {'title': 'Renew lease'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'priority': 'high', 'explanation': text})
        prompt = mock_post.call_args.kwargs['json']['contents'][0]['parts'][0]['text']
        self.assertIn('No description provided', prompt)

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_priority_without_keyword_is_medium(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response('Hard to say, do it when convenient.')
        response = self.client.post('/api/v1/ai/suggest-priority/', {'title': 'Sort photos', 'description': 'Old albums'}, format='json')
        self.assertEqual(response.data['priority'], 'medium')

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_upstream_status_error(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response(status_code=403, payload={'error': {'message': 'bad key'}})
        response = self.client.post('/api/v1/ai/suggest-priority/', {'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['code'], 'upstream_error')

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_transport_failure(self, mock_post):
        self._with_key()
        mock_post.side_effect = requests.exceptions.ConnectionError('unreachable')
        response = self.client.post('/api/v1/ai/suggest-description/', {'name': 'Drill', 'category': 'Tools'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['code'], 'upstream_error')

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_non_json_body(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response()
        mock_post.return_value.json.side_effect = ValueError('not json')
        response = self.client.post('/api/v1/ai/suggest-description/', {'name': 'Drill', 'category': 'Tools'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['code'], 'upstream_error')

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_missing_text_is_empty_response(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response(payload={'candidates': []})
        response = self.client.post('/api/v1/ai/suggest-priority/', {'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['code'], 'empty_response')

    @mock.patch('organizer.ai.gemini.requests.post')
    def test_suggestions_persist_nothing(self, mock_post):
        self._with_key()
        mock_post.return_value = gemini_response('urgent: pipes are leaking')
        self.client.post('/api/v1/ai/suggest-priority/', {'title': 'Fix sink'}, format='json')
        self.client.post('/api/v1/ai/suggest-description/', {'name': 'Wrench', 'category': 'Tools'}, format='json')
        self.assertFalse(Task.objects.exists())
        self.assertFalse(InventoryItem.objects.exists())
        self.assertEqual(UserSettings.objects.get(user=self.user).gemini_api_key, 'test-key')

    def test_requires_fields(self):
        response = self.client.post('/api/v1/ai/suggest-description/', {'name': 'Drill'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('category', response.data)

    def test_requires_authentication(self):
        anonymous = AuthenticatedAPIClient()
        response = anonymous.post('/api/v1/ai/suggest-priority/', {'title': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
