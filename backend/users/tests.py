# users/tests.py
"""
Users App Test Suite
====================

Test Categories:
----------------
1. Registration API Tests - sign-up and validation
2. User Directory API Tests - admin-only listing with filters
"""

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

User = get_user_model()


# ===========================================================================
# REGISTRATION
# ===========================================================================

class RegisterAPITest(APITestCase):
    """Tests for the open sign-up endpoint."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/v1/auth/register/'
        self.payload = {
            'email': 'Grip@Example.com',
            'username': 'grip',
            'password': 'Dolly-Track-42',
            'password2': 'Dolly-Track-42',
            'first_name': 'Robin',
            'last_name': 'Reyes',
        }

    def test_register_creates_crew_member(self):
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn('password', response.data)
        user = User.objects.get(username='grip')
        self.assertEqual(user.email, 'Grip@example.com')
        self.assertEqual(user.role, User.Role.CREW_MEMBER)
        self.assertTrue(user.check_password('Dolly-Track-42'))

    def test_register_project_manager(self):
        response = self.client.post(
            self.url, {**self.payload, 'role': 'project_manager'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], 'project_manager')

    def test_admin_role_cannot_be_self_assigned(self):
        response = self.client.post(self.url, {**self.payload, 'role': 'admin'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)
        self.assertFalse(User.objects.exists())

    def test_password_mismatch_rejected(self):
        response = self.client.post(
            self.url, {**self.payload, 'password2': 'Something-else-9'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_weak_password_rejected(self):
        response = self.client.post(
            self.url, {**self.payload, 'password': '12345678', 'password2': '12345678'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_duplicate_email_rejected(self):
        User.objects.create_user(email='grip@example.com', password='testpass123')

        response = self.client.post(
            self.url, {**self.payload, 'email': 'grip@example.com'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_registered_user_can_log_in(self):
        self.client.post(self.url, self.payload, format='json')

        response = self.client.post(
            '/api/v1/auth/login/',
            {'email': 'Grip@example.com', 'password': 'Dolly-Track-42'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)


# ===========================================================================
# USER DIRECTORY
# ===========================================================================

class UserListAPITest(APITestCase):
    """Tests for the admin-only user directory."""

    def setUp(self):
        self.admin = User.objects.create_superuser(
            email='admin@example.com', password='testpass123'
        )
        self.manager = User.objects.create_user(
            email='pm@example.com',
            password='testpass123',
            first_name='Pat',
            last_name='Morgan',
            role=User.Role.PROJECT_MANAGER,
        )
        self.crew = User.objects.create_user(
            email='sound@example.com',
            password='testpass123',
            first_name='Sky',
            last_name='Lane',
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)
        self.url = '/api/v1/auth/users/'

    def test_admin_lists_all_users(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 3)
        self.assertEqual(
            set(response.data['results'][0]),
            {'id', 'email', 'name', 'role', 'date_joined'},
        )

    def test_filter_by_role(self):
        response = self.client.get(self.url, {'role': 'crew_member'})

        self.assertEqual([u['email'] for u in response.data['results']], ['sound@example.com'])
        self.assertEqual(response.data['results'][0]['name'], 'Sky Lane')

    def test_search_by_name_or_email(self):
        by_name = self.client.get(self.url, {'search': 'morgan'})
        by_email = self.client.get(self.url, {'search': 'sound@'})

        self.assertEqual([u['email'] for u in by_name.data['results']], ['pm@example.com'])
        self.assertEqual([u['email'] for u in by_email.data['results']], ['sound@example.com'])

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(user=self.manager)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_request_rejected(self):
        anonymous = APIClient()

        response = anonymous.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
