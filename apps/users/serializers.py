"""Serializers for user-related API endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Основной сериализатор пользователя."""

    class Meta:
        model = User
        fields = ["id", "name", "email"]
        read_only_fields = ["id"]
        extra_kwargs = {
            # Uniqueness is a directory rule reported as 409, not a 400 field error
            "email": {"validators": []},
        }


class UserShortSerializer(serializers.Serializer):
    """Краткая информация о пользователе во вложенных ответах."""

    id = serializers.IntegerField()
    name = serializers.CharField()
