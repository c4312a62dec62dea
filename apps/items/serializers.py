"""Serializers for the item catalog."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import BookingShortSerializer

from .models import Comment, Item


class CommentSerializer(serializers.ModelSerializer):
    author_name = serializers.ReadOnlyField(source="author.name")

    class Meta:
        model = Comment
        fields = ["id", "text", "author_name", "created"]
        read_only_fields = ["id", "created"]


class CommentCreateSerializer(serializers.Serializer):
    # Blank text is rejected by the service after the eligibility lookups
    text = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)


class ItemCreateSerializer(serializers.Serializer):
    """Новая вещь: все поля, кроме запроса, обязательны."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField()
    available = serializers.BooleanField()
    request_id = serializers.IntegerField(required=False, allow_null=True)


class ItemUpdateSerializer(serializers.Serializer):
    """Частичное обновление: передаются только изменяемые поля."""

    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False)
    available = serializers.BooleanField(required=False)


class ItemSerializer(serializers.ModelSerializer):
    """Карточка вещи с комментариями и, для владельца, ближайшими бронями."""

    owner_id = serializers.ReadOnlyField(source="owner.id")
    request_id = serializers.SerializerMethodField()
    last_booking = BookingShortSerializer(read_only=True, allow_null=True)
    next_booking = BookingShortSerializer(read_only=True, allow_null=True)
    comments = CommentSerializer(many=True, read_only=True)

    class Meta:
        model = Item
        fields = [
            "id",
            "name",
            "description",
            "available",
            "owner_id",
            "request_id",
            "last_booking",
            "next_booking",
            "comments",
        ]

    def get_request_id(self, obj: Item) -> int | None:
        return obj.request_id
