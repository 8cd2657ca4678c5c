# tasks/tests/test_api.py
"""
Tasks API Test Suite
====================

Test Categories:
----------------
1. Prioritization endpoint - analyze, apply, cached reads, error mapping
2. Task endpoints - create, validate, filter
"""

import datetime
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from projects.models import Project
from tasks.models import Task
from tasks.prioritization import PersistenceError, UpstreamFetchError

User = get_user_model()

LOCMEM_CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "tasks-api-tests",
    }
}


class TasksAPITestCase(APITestCase):

    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(
            email='producer@example.com',
            password='testpass123',
            username='producer',
            role=User.Role.PROJECT_MANAGER,
        )
        self.crew = User.objects.create_user(
            email='editor@example.com',
            password='testpass123',
            username='editor',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

        now = timezone.now()
        self.project = Project.objects.create(
            name='Documentary',
            status=Project.Status.ACTIVE,
            budget=60000,
            start_date=now - datetime.timedelta(days=30),
            end_date=now + datetime.timedelta(days=5),
        )
        self.urgent = Task.objects.create(
            project=self.project,
            assignee=self.crew,
            title='Deliver final cut',
            status=Task.Status.IN_PROGRESS,
            priority=Task.Priority.LOW,
            start_date=now - datetime.timedelta(days=1),
            due_date=now + datetime.timedelta(hours=12),
            estimated_hours=45,
        )
        self.vague = Task.objects.create(
            project=self.project,
            assignee=self.crew,
            title='Archive rushes',
            priority=Task.Priority.LOW,
            due_date=now + datetime.timedelta(days=60),
            estimated_hours=0,
        )


# ===========================================================================
# PRIORITIZATION ENDPOINT
# ===========================================================================

@override_settings(CACHES=LOCMEM_CACHES)
class PrioritizationAPITest(TasksAPITestCase):

    url = '/api/v1/tasks/prioritize/'

    def test_unauthenticated_request_rejected(self):
        anonymous = APIClient()

        response = anonymous.post(self.url, {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_analyze_then_served_from_cache(self):
        payload = {'projectId': str(self.project.id)}

        first = self.client.post(self.url, payload, format='json')
        second = self.client.post(self.url, payload, format='json')

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertFalse(first.data['cached'])
        self.assertTrue(second.data['cached'])
        self.assertEqual(first.data['results'], second.data['results'])
        self.assertEqual(first.data['mode'], 'analyze')
        self.assertEqual(
            [r['taskId'] for r in first.data['results']],
            [str(self.urgent.id), str(self.vague.id)],
        )
        self.assertIn('analysisDate', first.data)

    def test_analyze_never_writes(self):
        self.client.post(self.url, {}, format='json')

        self.urgent.refresh_from_db()
        self.assertEqual(self.urgent.priority, Task.Priority.LOW)

    def test_apply_updates_confident_changes(self):
        response = self.client.post(self.url, {'mode': 'apply'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['appliedChanges'], 1)
        self.urgent.refresh_from_db()
        self.vague.refresh_from_db()
        self.assertEqual(self.urgent.priority, Task.Priority.HIGH)
        self.assertEqual(self.vague.priority, Task.Priority.LOW)

    def test_apply_drops_cached_analysis(self):
        self.client.post(self.url, {}, format='json')

        self.client.post(self.url, {'mode': 'apply'}, format='json')
        response = self.client.get(self.url)

        self.assertFalse(response.data['cached'])
        self.assertEqual(response.data['message'], 'No cached results found')

    def test_invalid_mode_returns_400(self):
        response = self.client.post(self.url, {'mode': 'rewrite'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('mode', response.data)

    def test_malformed_project_id_returns_400(self):
        response = self.client.post(self.url, {'projectId': 'episode-4'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('projectId', response.data['error'])

    def test_unknown_ids_return_empty_result(self):
        response = self.client.post(
            self.url,
            {'taskIds': ['00000000-0000-0000-0000-000000000999']},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['results'], [])
        self.assertEqual(response.data['message'], 'No tasks found for prioritization')

    def test_get_miss_does_not_compute(self):
        with patch('tasks.prioritization.orchestrator.score_tasks') as scorer:
            response = self.client.get(self.url, {'projectId': str(self.project.id)})

        scorer.assert_not_called()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            {'message': 'No cached results found', 'results': [], 'cached': False},
        )

    def test_get_returns_cached_analysis(self):
        ids = f'{self.vague.id},{self.urgent.id}'
        self.client.post(
            self.url,
            {'taskIds': [str(self.urgent.id), str(self.vague.id)]},
            format='json',
        )

        response = self.client.get(self.url, {'taskIds': ids})

        self.assertTrue(response.data['cached'])
        self.assertEqual(len(response.data['results']), 2)
        self.assertEqual(response.data['results'][0]['suggestedPriority'], 'high')

    def test_get_malformed_task_id_returns_400(self):
        response = self.client.get(self.url, {'taskIds': 'abc,def'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_fetch_failure_maps_to_500(self):
        with patch('tasks.views.PriorityOrchestrator') as orchestrator:
            orchestrator.return_value.analyze_or_apply.side_effect = UpstreamFetchError('db down')
            response = self.client.post(self.url, {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to analyze task priorities'})

    def test_write_failure_maps_to_500(self):
        with patch(
            'tasks.repository.DjangoTaskRepository.bulk_update_priorities',
            side_effect=PersistenceError('write rejected'),
        ):
            response = self.client.post(self.url, {'mode': 'apply'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.urgent.refresh_from_db()
        self.assertEqual(self.urgent.priority, Task.Priority.LOW)

    def test_cached_lookup_failure_maps_to_500(self):
        with patch('tasks.views.PriorityOrchestrator') as orchestrator:
            orchestrator.return_value.get_cached_result.side_effect = UpstreamFetchError('boom')
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'Failed to retrieve prioritization results'})


# ===========================================================================
# TASK ENDPOINTS
# ===========================================================================

class TaskAPITest(TasksAPITestCase):

    url = '/api/v1/tasks/'

    def test_create_task(self):
        due = timezone.now() + datetime.timedelta(days=3)

        response = self.client.post(
            self.url,
            {
                'project': str(self.project.id),
                'assignee': self.crew.pk,
                'title': 'Colour grade',
                'due_date': due.isoformat(),
                'estimated_hours': 12,
            },
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['priority'], 'medium')
        self.assertEqual(response.data['status'], 'todo')
        self.assertEqual(response.data['project_name'], 'Documentary')
        self.assertEqual(response.data['assignee_detail']['role'], 'crew_member')

    def test_due_before_start_rejected(self):
        now = timezone.now()

        response = self.client.post(
            self.url,
            {
                'project': str(self.project.id),
                'assignee': self.crew.pk,
                'title': 'Backwards',
                'start_date': now.isoformat(),
                'due_date': (now - datetime.timedelta(days=1)).isoformat(),
            },
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('due_date', response.data)

    def test_list_filters_by_project_and_status(self):
        other = Project.objects.create(
            name='Commercial',
            start_date=timezone.now(),
            end_date=timezone.now() + datetime.timedelta(days=10),
        )
        Task.objects.create(
            project=other,
            assignee=self.crew,
            title='Location scout',
            due_date=timezone.now() + datetime.timedelta(days=2),
        )

        by_project = self.client.get(self.url, {'projectId': str(self.project.id)})
        by_status = self.client.get(self.url, {'status': 'in_progress'})
        bad_id = self.client.get(self.url, {'projectId': 'nope'})

        self.assertEqual(by_project.status_code, status.HTTP_200_OK)
        self.assertEqual(by_project.data['count'], 2)
        self.assertEqual([t['title'] for t in by_status.data['results']], ['Deliver final cut'])
        self.assertEqual(bad_id.data['results'], [])

    def test_list_filters_by_priority_and_search(self):
        self.vague.priority = Task.Priority.HIGH
        self.vague.description = 'Back up the B-camera rushes'
        self.vague.save()

        by_priority = self.client.get(self.url, {'priority': 'high'})
        by_title = self.client.get(self.url, {'search': 'final CUT'})
        by_description = self.client.get(self.url, {'search': 'b-camera'})
        combined = self.client.get(self.url, {'search': 'rushes', 'priority': 'low'})

        self.assertEqual([t['title'] for t in by_priority.data['results']], ['Archive rushes'])
        self.assertEqual([t['title'] for t in by_title.data['results']], ['Deliver final cut'])
        self.assertEqual([t['title'] for t in by_description.data['results']], ['Archive rushes'])
        self.assertEqual(combined.data['count'], 0)

    def test_list_is_paginated(self):
        for n in range(11):
            Task.objects.create(
                project=self.project,
                assignee=self.crew,
                title=f'Shot {n}',
                due_date=timezone.now() + datetime.timedelta(days=n + 1),
            )

        first_page = self.client.get(self.url)
        last_page = self.client.get(self.url, {'page': 3, 'limit': 5})
        past_end = self.client.get(self.url, {'page': 9, 'limit': 5})

        self.assertEqual(first_page.data['count'], 13)
        self.assertEqual(len(first_page.data['results']), 10)
        self.assertIsNotNone(first_page.data['next'])
        self.assertEqual(len(last_page.data['results']), 3)
        self.assertIsNone(last_page.data['next'])
        self.assertIsNotNone(last_page.data['previous'])
        self.assertEqual(past_end.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_priority(self):
        response = self.client.patch(
            f'{self.url}{self.vague.id}/', {'priority': 'high'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.vague.refresh_from_db()
        self.assertEqual(self.vague.priority, Task.Priority.HIGH)
