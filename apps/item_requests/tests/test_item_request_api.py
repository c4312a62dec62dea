"""Integration tests for the request board endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.item_requests.models import ItemRequest
from apps.items.models import Item
from apps.users.models import User


class ItemRequestAPITests(APITestCase):
    """Создание запросов, свои и чужие запросы, ответы вещами."""

    def setUp(self) -> None:
        self.alice = User.objects.create_user(email="alice@example.com", name="Alice")
        self.bob = User.objects.create_user(email="bob@example.com", name="Bob")
        self.list_url = reverse("item-request-list")
        self.all_url = reverse("item-request-all-requests")

    def _headers(self, user: User) -> dict[str, str]:
        return {"HTTP_X_SHARER_USER_ID": str(user.id)}

    def _make_request(self, user: User, description: str, minutes_ago: int) -> ItemRequest:
        return ItemRequest.objects.create(
            requestor=user,
            description=description,
            created=timezone.now() - timedelta(minutes=minutes_ago),
        )

    def test_create_request(self) -> None:
        response = self.client.post(
            self.list_url,
            {"description": "Нужна дрель"},
            format="json",
            **self._headers(self.alice),
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["description"], "Нужна дрель")
        self.assertEqual(response.data["requestor_id"], self.alice.id)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(ItemRequest.objects.count(), 1)

    def test_blank_description_is_rejected(self) -> None:
        response = self.client.post(
            self.list_url,
            {"description": "   "},
            format="json",
            **self._headers(self.alice),
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "Bad Request")
        self.assertEqual(ItemRequest.objects.count(), 0)

    def test_unknown_user_cannot_create_request(self) -> None:
        response = self.client.post(
            self.list_url,
            {"description": "Нужна лестница"},
            format="json",
            HTTP_X_SHARER_USER_ID="999",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_missing_header_is_bad_request(self) -> None:
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_own_requests_newest_first_with_answers(self) -> None:
        older = self._make_request(self.alice, "Палатка", minutes_ago=30)
        newer = self._make_request(self.alice, "Велосипед", minutes_ago=5)
        self._make_request(self.bob, "Каяк", minutes_ago=1)
        Item.objects.create(
            name="Палатка двухместная",
            description="Почти новая",
            available=True,
            owner=self.bob,
            request=older,
        )

        response = self.client.get(self.list_url, **self._headers(self.alice))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([r["id"] for r in response.data], [newer.id, older.id])
        answers = response.data[1]["items"]
        self.assertEqual(len(answers), 1)
        self.assertEqual(answers[0]["owner_id"], self.bob.id)

    def test_all_requests_excludes_own_and_paginates(self) -> None:
        ids = [self._make_request(self.bob, f"Запрос {n}", minutes_ago=n).id for n in range(1, 4)]
        self._make_request(self.alice, "Свой запрос", minutes_ago=0)

        first = self.client.get(self.all_url, {"from": 0, "size": 2}, **self._headers(self.alice))
        second = self.client.get(self.all_url, {"from": 2, "size": 2}, **self._headers(self.alice))

        self.assertEqual(first.status_code, status.HTTP_200_OK, first.data)
        self.assertEqual([r["id"] for r in first.data], ids[:2])
        self.assertEqual([r["id"] for r in second.data], ids[2:])

    def test_all_requests_rejects_bad_paging(self) -> None:
        response = self.client.get(self.all_url, {"from": -1, "size": 2}, **self._headers(self.alice))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

        response = self.client.get(self.all_url, {"from": 0, "size": 0}, **self._headers(self.alice))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_retrieve_request(self) -> None:
        item_request = self._make_request(self.bob, "Утюг", minutes_ago=3)

        response = self.client.get(
            reverse("item-request-detail", args=[item_request.id]),
            **self._headers(self.alice),
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["description"], "Утюг")

    def test_retrieve_unknown_request(self) -> None:
        response = self.client.get(
            reverse("item-request-detail", args=[12345]),
            **self._headers(self.alice),
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["message"], "Request not found with id: 12345")
