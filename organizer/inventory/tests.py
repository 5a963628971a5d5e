"""
Comprehensive test suite for Inventory module
Tests: item CRUD, categories, disposal follow-up tasks, outbox processing
"""
from io import StringIO
from unittest import mock
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase, SimpleTestCase, override_settings
from rest_framework import status
from organizer.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from organizer.inventory import disposal
from organizer.inventory.models import InventoryItem, DisposalTaskOutbox
from organizer.tasks.models import Task

SYNC_DISPATCH = {'DISPOSAL_DISPATCH': 'sync', 'CATEGORY_CACHE_TTL': 300}
MANUAL_DISPATCH = {'DISPOSAL_DISPATCH': 'manual', 'CATEGORY_CACHE_TTL': 300}


def auto_tasks(user):
    # JSON containment lookups are not supported on SQLite
    return [t for t in Task.objects.filter(user=user).order_by('id') if 'auto-generated' in t.tags]


class CategoryRulesTests(SimpleTestCase):
    """Disposal category lookup and normalisation"""

    def test_normalize_disposal_spellings(self):
        for raw in ['ToDiscard', 'to discard', 'TO_DISCARD', ' todiscard ', 'to-discard']:
            self.assertEqual(disposal.normalize_category(raw), 'ToDiscard', raw)
        self.assertEqual(disposal.normalize_category('to sell'), 'ToSell')
        self.assertEqual(disposal.normalize_category('To Donate'), 'ToDonate')

    def test_normalize_leaves_other_categories(self):
        self.assertEqual(disposal.normalize_category('  Electronics '), 'Electronics')
        self.assertEqual(disposal.normalize_category('kitchen tools'), 'kitchen tools')

    def test_should_trigger(self):
        self.assertTrue(disposal.should_trigger(None, 'ToDiscard'))
        self.assertTrue(disposal.should_trigger('Electronics', 'ToSell'))
        self.assertFalse(disposal.should_trigger(None, 'Electronics'))
        self.assertFalse(disposal.should_trigger('ToSell', 'ToDonate'))
        self.assertFalse(disposal.should_trigger('ToSell', 'ToSell'))
        self.assertFalse(disposal.should_trigger('ToSell', 'Electronics'))

    def test_task_fields(self):
        fields = disposal.build_task_fields('Old lamp', 'ToDonate')
        self.assertEqual(fields['title'], 'Process item: Old lamp')
        self.assertIn("Item 'Old lamp' marked as 'ToDonate'", fields['description'])
        self.assertEqual(fields['status'], 'inbox')
        self.assertEqual(fields['priority'], 'medium')
        self.assertEqual(fields['tags'], ['auto-generated', 'inventory'])


@override_settings(ORGANIZER=SYNC_DISPATCH)
class InventoryAPITests(TestCase):
    """Test inventory item endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.other_user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_item(self):
        location = TestDataFactory.create_location(self.user, name='Closet')
        response = self.client.post('/api/v1/inventory/', {
            'name': 'Drill',
            'category': 'Tools',
            'current_location': location.id,
            'quantity': 2,
            'item_value': '89.90',
            'keywords': ['power', 'cordless'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        item = InventoryItem.objects.get(pk=response.data['id'])
        self.assertEqual(item.user, self.user)
        self.assertEqual(item.keywords, ['power', 'cordless'])
        self.assertEqual(item.linked_task_ids, [])

    def test_create_rejects_negative_quantity_and_missing_category(self):
        response = self.client.post('/api/v1/inventory/', {'name': 'X', 'category': 'A', 'quantity': -1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/v1/inventory/', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_foreign_location_rejected(self):
        location = TestDataFactory.create_location(self.other_user)
        response = self.client.post('/api/v1/inventory/', {
            'name': 'Drill', 'category': 'Tools', 'current_location': location.id,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('current_location', response.data)

    def test_list_enriches_location_and_filters(self):
        closet = TestDataFactory.create_location(self.user, name='Closet')
        coat = TestDataFactory.create_item(self.user, name='Coat', category='Clothing', current_location=closet)
        TestDataFactory.create_item(self.user, name='Phone', category='Electronics')
        TestDataFactory.create_item(self.other_user, name='Hat', category='Clothing')

        response = self.client.get('/api/v1/inventory/?category=Clothing')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([i['id'] for i in response.data], [coat.id])
        self.assertEqual(response.data[0]['location_name'], 'Closet')

        response = self.client.get(f'/api/v1/inventory/?location={closet.id}')
        self.assertEqual([i['id'] for i in response.data], [coat.id])

        response = self.client.get('/api/v1/inventory/')
        self.assertEqual(len(response.data), 2)
        self.assertNotIn('location_name', response.data[0])

    def test_foreign_item_is_invisible(self):
        item = TestDataFactory.create_item(self.other_user)
        self.assertEqual(self.client.get(f'/api/v1/inventory/{item.id}/').status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.patch(f'/api/v1/inventory/{item.id}/', {'quantity': 9}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'not_found_or_forbidden')
        self.assertEqual(self.client.delete(f'/api/v1/inventory/{item.id}/').status_code, status.HTTP_404_NOT_FOUND)
        item.refresh_from_db()
        self.assertEqual(item.quantity, 1)

    def test_delete_item_keeps_linked_tasks(self):
        task = TestDataFactory.create_task(self.user)
        item = TestDataFactory.create_item(self.user, linked_task_ids=[task.id])
        response = self.client.delete(f'/api/v1/inventory/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(Task.objects.filter(pk=task.id).exists())

    def test_resending_dangling_location_on_update(self):
        location = TestDataFactory.create_location(self.user, name='Old shed')
        item = TestDataFactory.create_item(self.user, name='Rake', category='Garden', current_location=location)
        location_id = location.id
        location.delete()

        body = self.client.get(f'/api/v1/inventory/{item.id}/').data
        body['quantity'] = 2
        response = self.client.put(f'/api/v1/inventory/{item.id}/', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        item.refresh_from_db()
        self.assertEqual((item.quantity, item.current_location_id), (2, location_id))

        foreign = TestDataFactory.create_location(self.other_user)
        response = self.client.patch(f'/api/v1/inventory/{item.id}/', {'current_location': foreign.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_empty_patch_leaves_disposal_item_unchanged(self):
        item = TestDataFactory.create_item(self.user, name='Bike', category='ToSell', quantity=2,
                                           keywords=['red'], item_value='120.00')
        before = self.client.get(f'/api/v1/inventory/{item.id}/').data

        for _ in range(2):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.patch(f'/api/v1/inventory/{item.id}/', {}, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)

        after = self.client.get(f'/api/v1/inventory/{item.id}/').data
        before.pop('updated_at')
        after.pop('updated_at')
        self.assertEqual(after, before)
        self.assertFalse(DisposalTaskOutbox.objects.exists())
        self.assertEqual(auto_tasks(self.user), [])

    def test_category_filter_accepts_any_spelling(self):
        wanted = TestDataFactory.create_item(self.user, category='ToDiscard')
        TestDataFactory.create_item(self.user, category='Electronics')

        for spelling in ['ToDiscard', 'to discard', 'TO_DISCARD']:
            response = self.client.get('/api/v1/inventory/', {'category': spelling})
            self.assertEqual([i['id'] for i in response.data], [wanted.id], spelling)

    def test_categories_sorted_and_distinct(self):
        for category in ['B', 'A', 'B']:
            TestDataFactory.create_item(self.user, category=category)
        TestDataFactory.create_item(self.other_user, category='C')

        response = self.client.get('/api/v1/inventory/categories/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, ['A', 'B'])

    def test_categories_cache_invalidated_on_change(self):
        TestDataFactory.create_item(self.user, category='A')
        self.assertEqual(self.client.get('/api/v1/inventory/categories/').data, ['A'])

        TestDataFactory.create_item(self.user, category='Z')
        self.assertEqual(self.client.get('/api/v1/inventory/categories/').data, ['A', 'Z'])

        InventoryItem.objects.filter(user=self.user, category='A').first().delete()
        self.assertEqual(self.client.get('/api/v1/inventory/categories/').data, ['Z'])


@override_settings(ORGANIZER=SYNC_DISPATCH)
class DisposalTaskTests(TestCase):
    """Follow-up tasks created when items enter a disposal category"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def _create(self, **data):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/v1/inventory/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return InventoryItem.objects.get(pk=response.data['id'])

    def _patch(self, item, **data):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(f'/api/v1/inventory/{item.id}/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        item.refresh_from_db()
        return item

    def test_create_in_disposal_category_creates_linked_task(self):
        item = self._create(name='Broken chair', category='ToDiscard')

        tasks = auto_tasks(self.user)
        self.assertEqual(len(tasks), 1)
        task = tasks[0]
        self.assertEqual(task.title, 'Process item: Broken chair')
        self.assertEqual(task.status, 'inbox')
        self.assertEqual(task.priority, 'medium')
        self.assertEqual(task.tags, ['auto-generated', 'inventory'])
        self.assertEqual(item.linked_task_ids, [task.id])

    def test_create_in_regular_category_creates_nothing(self):
        item = self._create(name='Laptop', category='Electronics')
        self.assertEqual(auto_tasks(self.user), [])
        self.assertEqual(item.linked_task_ids, [])
        self.assertFalse(DisposalTaskOutbox.objects.exists())

    def test_task_is_deferred_until_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            response = self.client.post('/api/v1/inventory/', {'name': 'Lamp', 'category': 'ToSell'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(auto_tasks(self.user), [])
        self.assertEqual(len(callbacks), 1)

        callbacks[0]()
        self.assertEqual(len(auto_tasks(self.user)), 1)

    def test_transition_into_disposal_triggers_once(self):
        item = self._create(name='Old TV', category='Electronics')

        item = self._patch(item, category='ToSell')
        self.assertEqual(len(auto_tasks(self.user)), 1)
        self.assertEqual(len(item.linked_task_ids), 1)

        item = self._patch(item, category='ToDonate')
        self.assertEqual(len(auto_tasks(self.user)), 1)

        item = self._patch(item, quantity=3)
        self.assertEqual(len(auto_tasks(self.user)), 1)
        self.assertEqual(len(item.linked_task_ids), 1)

    def test_leaving_and_reentering_triggers_again(self):
        item = self._create(name='Bike', category='ToSell')
        item = self._patch(item, category='Sports')
        item = self._patch(item, category='ToDonate')
        self.assertEqual(len(auto_tasks(self.user)), 2)
        self.assertEqual(len(item.linked_task_ids), 2)

    def test_update_uses_new_name(self):
        item = self._create(name='Desk', category='Furniture')
        self._patch(item, name='Standing desk', category='ToDiscard')
        self.assertEqual(auto_tasks(self.user)[0].title, 'Process item: Standing desk')

    def test_category_typo_is_canonicalised_and_triggers(self):
        item = self._create(name='Toaster', category='to discard')
        self.assertEqual(item.category, 'ToDiscard')
        self.assertEqual(len(auto_tasks(self.user)), 1)

    def test_processing_is_idempotent(self):
        item = self._create(name='Sofa', category='ToDonate')
        entry = DisposalTaskOutbox.objects.get(item_id=item.id)
        self.assertEqual(entry.status, DisposalTaskOutbox.STATUS_PROCESSED)

        task_id = disposal.process_outbox_entry(entry.id)
        self.assertEqual(task_id, entry.task_id)
        self.assertEqual(len(auto_tasks(self.user)), 1)
        item.refresh_from_db()
        self.assertEqual(item.linked_task_ids, [task_id])

    def test_item_deleted_before_processing(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            response = self.client.post('/api/v1/inventory/', {'name': 'Vase', 'category': 'ToSell'}, format='json')
        InventoryItem.objects.filter(pk=response.data['id']).delete()

        callbacks[0]()
        self.assertEqual(len(auto_tasks(self.user)), 1)
        self.assertEqual(DisposalTaskOutbox.objects.get().status, DisposalTaskOutbox.STATUS_PROCESSED)

    def test_failure_is_recorded_not_raised(self):
        with mock.patch('organizer.inventory.disposal.Task.objects.create', side_effect=RuntimeError('db down')):
            item = self._create(name='Rug', category='ToDiscard')
        entry = DisposalTaskOutbox.objects.get(item_id=item.id)
        self.assertEqual(entry.status, DisposalTaskOutbox.STATUS_FAILED)
        self.assertEqual(entry.attempts, 1)
        self.assertIn('db down', entry.last_error)
        self.assertEqual(auto_tasks(self.user), [])

        processed, failed = disposal.process_pending(include_failed=True)
        self.assertEqual((processed, failed), (1, 0))
        item.refresh_from_db()
        self.assertEqual(len(item.linked_task_ids), 1)


@override_settings(ORGANIZER=MANUAL_DISPATCH)
class DisposalOutboxCommandTests(TestCase):
    """Manual dispatch and the process_disposal_outbox command"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_manual_mode_leaves_entry_pending_until_command(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            response = self.client.post('/api/v1/inventory/', {'name': 'Piano', 'category': 'ToSell'}, format='json')
        self.assertEqual(callbacks, [])
        entry = DisposalTaskOutbox.objects.get(item_id=response.data['id'])
        self.assertEqual(entry.status, DisposalTaskOutbox.STATUS_PENDING)

        out = StringIO()
        call_command('process_disposal_outbox', '--dry-run', stdout=out)
        self.assertIn('DRY RUN', out.getvalue())
        self.assertEqual(auto_tasks(self.user), [])

        call_command('process_disposal_outbox', stdout=out)
        entry.refresh_from_db()
        self.assertEqual(entry.status, DisposalTaskOutbox.STATUS_PROCESSED)
        self.assertEqual(len(auto_tasks(self.user)), 1)

        call_command('process_disposal_outbox', stdout=out)
        self.assertEqual(len(auto_tasks(self.user)), 1)

    def test_thread_dispatch_starts_daemon_worker(self):
        with mock.patch('organizer.inventory.disposal.threading.Thread') as thread_cls:
            disposal.dispatch(42, mode=disposal.DISPATCH_THREAD)
        thread_cls.assert_called_once()
        self.assertTrue(thread_cls.call_args.kwargs['daemon'])
        self.assertEqual(thread_cls.call_args.kwargs['args'], (42,))
        thread_cls.return_value.start.assert_called_once()
