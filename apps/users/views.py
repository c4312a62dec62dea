"""User API views."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .serializers import UserSerializer


class UserViewSet(viewsets.ViewSet):
    """Управление пользователями.

    - ``create`` регистрирует пользователя (email уникален, иначе 409)
    - ``partial_update`` меняет только переданные поля
    - ``destroy`` удаляет пользователя
    """

    serializer_class = UserSerializer
    lookup_value_regex = r"\d+"

    def list(self, request):  # type: ignore
        return Response(UserSerializer(services.list_users(), many=True).data)

    def create(self, request):  # type: ignore
        serializer = UserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.create_user(**serializer.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(UserSerializer(services.get_user(int(pk))).data)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = UserSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = services.update_user(int(pk), serializer.validated_data)
        return Response(UserSerializer(user).data)

    def destroy(self, request, pk=None):  # type: ignore
        services.delete_user(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
