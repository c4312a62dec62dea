"""API tests for the user directory endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.list_url = reverse("user-list")

    def test_create_user(self) -> None:
        payload = {"name": "Alice", "email": "alice@example.com"}

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["email"], payload["email"])
        self.assertEqual(response.data["name"], payload["name"])
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_duplicate_email_is_conflict(self) -> None:
        User.objects.create_user(email="alice@example.com", name="Alice")

        response = self.client.post(
            self.list_url,
            {"name": "Other", "email": "alice@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["error"], "Conflict")
        self.assertEqual(response.data["message"], "Email already exists: alice@example.com")

    def test_invalid_email_is_bad_request(self) -> None:
        response = self.client.post(self.list_url, {"name": "Bob", "email": "not-an-email"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_partial_update_changes_only_given_fields(self) -> None:
        user = User.objects.create_user(email="bob@example.com", name="Bob")

        response = self.client.patch(
            reverse("user-detail", args=[user.id]),
            {"name": "Robert"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user.refresh_from_db()
        self.assertEqual(user.name, "Robert")
        self.assertEqual(user.email, "bob@example.com")

    def test_update_to_taken_email_is_conflict(self) -> None:
        User.objects.create_user(email="alice@example.com", name="Alice")
        bob = User.objects.create_user(email="bob@example.com", name="Bob")

        response = self.client.patch(
            reverse("user-detail", args=[bob.id]),
            {"email": "alice@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        bob.refresh_from_db()
        self.assertEqual(bob.email, "bob@example.com")

    def test_get_list_and_delete(self) -> None:
        user = User.objects.create_user(email="carol@example.com", name="Carol")
        detail_url = reverse("user-detail", args=[user.id])

        self.assertEqual(self.client.get(detail_url).data["name"], "Carol")
        self.assertEqual(len(self.client.get(self.list_url).data), 1)

        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=user.id).exists())

    def test_unknown_user_is_not_found(self) -> None:
        response = self.client.get(reverse("user-detail", args=[404]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["message"], "User not found with id: 404")
