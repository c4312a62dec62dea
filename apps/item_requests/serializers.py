"""Serializers for the request board."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import ItemRequest


class AnsweringItemSerializer(serializers.Serializer):
    """Вещь, добавленная в ответ на запрос."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    owner_id = serializers.IntegerField()


class ItemRequestCreateSerializer(serializers.Serializer):
    # Blank descriptions are rejected by the service with its own message
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ItemRequestSerializer(serializers.ModelSerializer):
    requestor_id = serializers.ReadOnlyField(source="requestor.id")
    items = AnsweringItemSerializer(many=True, read_only=True)

    class Meta:
        model = ItemRequest
        fields = ["id", "description", "requestor_id", "created", "items"]
