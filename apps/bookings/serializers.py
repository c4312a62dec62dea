"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import datetime

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer


class BookingCreateSerializer(serializers.Serializer):
    """Запрос на бронирование: вещь и интервал.

    Здесь проверяется только положение дат относительно текущего момента;
    порядок дат проверяет домен, чтобы сообщение об ошибке было единым.
    """

    item_id = serializers.IntegerField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()

    def validate_start(self, value: datetime) -> datetime:
        if value < timezone.now():
            raise serializers.ValidationError("Start time must be in the present or future")
        return value

    def validate_end(self, value: datetime) -> datetime:
        if value <= timezone.now():
            raise serializers.ValidationError("End time must be in the future")
        return value


class BookingItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class BookingSerializer(serializers.Serializer):
    """Представление брони с именами арендатора и вещи."""

    id = serializers.IntegerField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    status = serializers.CharField(source="status.value")
    booker = UserShortSerializer()
    item = BookingItemSerializer()


class BookingShortSerializer(serializers.Serializer):
    """Последняя/следующая бронь в карточке вещи."""

    id = serializers.IntegerField()
    booker_id = serializers.IntegerField(source="booker.id")
