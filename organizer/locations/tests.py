"""
Test suite for Locations module
"""
from django.test import TestCase
from rest_framework import status
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.locations.models import Location


class LocationAPITests(TestCase):
    """Test Location API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other_user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_location(self):
        response = self.client.post('/api/v1/locations/', {
            'name': 'Garage',
            'type': 'storage',
            'address': '12 Elm St',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        location = Location.objects.get(pk=response.data['id'])
        self.assertEqual(location.type, 'storage')
        self.assertEqual(location.user, self.user)

    def test_create_location_rejects_unknown_type(self):
        response = self.client.post('/api/v1/locations/', {'name': 'Moon', 'type': 'space'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filters_by_type(self):
        TestDataFactory.create_location(self.user, type='home')
        office = TestDataFactory.create_location(self.user, type='work')
        TestDataFactory.create_location(self.other_user, type='work')

        response = self.client.get('/api/v1/locations/?type=work')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([loc['id'] for loc in response.data], [office.id])

    def test_foreign_location_hidden_from_get(self):
        location = TestDataFactory.create_location(self.other_user)
        response = self.client.get(f'/api/v1/locations/{location.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_and_delete(self):
        location = TestDataFactory.create_location(self.user, name='Attic')
        response = self.client.patch(f'/api/v1/locations/{location.id}/', {'address': 'Top floor'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Attic')
        self.assertEqual(response.data['address'], 'Top floor')

        response = self.client.delete(f'/api/v1/locations/{location.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_empty_patch_is_idempotent(self):
        location = TestDataFactory.create_location(self.user, name='Garage', type='storage', address='12 Elm St')
        for _ in range(2):
            response = self.client.patch(f'/api/v1/locations/{location.id}/', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)
        location.refresh_from_db()
        self.assertEqual((location.name, location.type, location.address), ('Garage', 'storage', '12 Elm St'))

    def test_non_owner_delete_fails(self):
        location = TestDataFactory.create_location(self.other_user)
        response = self.client.delete(f'/api/v1/locations/{location.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Location.objects.filter(pk=location.id).exists())
