# projects/tests.py
"""
Projects App Test Suite
=======================

Test Categories:
----------------
1. Project Model Tests - Date validation
2. Project Serializer Tests - Data transformation
3. Projects API Tests - HTTP endpoints
"""

import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from .models import Project
from .serializers import ProjectSerializer

User = get_user_model()


# ===========================================================================
# MODEL TESTS
# ===========================================================================

class ProjectModelTest(TestCase):
    """Tests for the Project model validation logic."""

    def setUp(self):
        self.start = timezone.now()

    def test_valid_project_saves(self):
        project = Project(
            name='Brand film',
            budget=Decimal('25000.00'),
            start_date=self.start,
            end_date=self.start + datetime.timedelta(days=30),
        )

        project.full_clean()
        project.save()

        self.assertEqual(Project.objects.count(), 1)
        self.assertEqual(Project.objects.first().status, Project.Status.PLANNING)

    def test_end_before_start_raises_validation_error(self):
        project = Project(
            name='Time travel',
            start_date=self.start,
            end_date=self.start - datetime.timedelta(days=1),
        )

        with self.assertRaises(ValidationError) as ctx:
            project.full_clean()

        self.assertIn('end_date', ctx.exception.message_dict)

    def test_negative_budget_rejected(self):
        project = Project(
            name='Overspent',
            budget=Decimal('-1'),
            start_date=self.start,
            end_date=self.start + datetime.timedelta(days=1),
        )

        with self.assertRaises(ValidationError):
            project.full_clean()

    def test_progress_above_hundred_rejected(self):
        project = Project(
            name='Overdelivered',
            progress=120,
            start_date=self.start,
            end_date=self.start + datetime.timedelta(days=1),
        )

        with self.assertRaises(ValidationError):
            project.full_clean()


# ===========================================================================
# SERIALIZER TESTS
# ===========================================================================

class ProjectSerializerTest(TestCase):
    """Tests for the ProjectSerializer."""

    def setUp(self):
        self.manager = User.objects.create_user(
            email='pm@example.com',
            password='testpass123',
            role=User.Role.PROJECT_MANAGER,
        )
        self.start = timezone.now()
        self.project = Project.objects.create(
            name='Music video',
            project_manager=self.manager,
            start_date=self.start,
            end_date=self.start + datetime.timedelta(days=14),
        )

    def test_serializer_output_format(self):
        data = ProjectSerializer(self.project).data

        self.assertEqual(data['name'], 'Music video')
        self.assertEqual(data['project_manager_email'], 'pm@example.com')
        self.assertIn('budget', data)
        self.assertIn('end_date', data)

    def test_partial_update_checks_existing_dates(self):
        serializer = ProjectSerializer(
            self.project,
            data={'end_date': (self.start - datetime.timedelta(days=2)).isoformat()},
            partial=True,
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn('end_date', serializer.errors)


# ===========================================================================
# API ENDPOINT TESTS
# ===========================================================================

class ProjectsAPITest(APITestCase):
    """Tests for the Projects API endpoints."""

    def setUp(self):
        self.user = User.objects.create_user(
            email='api@example.com',
            password='testpass123',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)
        self.url = '/api/v1/projects/'
        self.start = timezone.now()

    def test_create_project(self):
        response = self.client.post(
            self.url,
            {
                'name': 'Feature trailer',
                'status': 'active',
                'budget': '55000.00',
                'start_date': self.start.isoformat(),
                'end_date': (self.start + datetime.timedelta(days=20)).isoformat(),
            },
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['budget'], '55000.00')
        self.assertEqual(Project.objects.get().status, Project.Status.ACTIVE)

    def test_list_filters_by_status(self):
        for name, project_status in (('A', 'active'), ('B', 'completed')):
            Project.objects.create(
                name=name,
                status=project_status,
                start_date=self.start,
                end_date=self.start + datetime.timedelta(days=5),
            )

        response = self.client.get(self.url, {'status': 'active'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['name'] for p in response.data['results']], ['A'])

    def test_list_search_and_limit(self):
        for name, description in (
            ('Wedding film', 'Two-camera ceremony coverage'),
            ('Product launch', 'Studio shoot'),
            ('Festival recap', 'Drone and handheld coverage'),
        ):
            Project.objects.create(
                name=name,
                description=description,
                start_date=self.start,
                end_date=self.start + datetime.timedelta(days=5),
            )

        searched = self.client.get(self.url, {'search': 'coverage'})
        limited = self.client.get(self.url, {'limit': 2})

        self.assertEqual(searched.data['count'], 2)
        self.assertEqual(
            {p['name'] for p in searched.data['results']},
            {'Wedding film', 'Festival recap'},
        )
        self.assertEqual(limited.data['count'], 3)
        self.assertEqual(len(limited.data['results']), 2)

    def test_unauthenticated_request_rejected(self):
        anonymous = APIClient()

        response = anonymous.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
