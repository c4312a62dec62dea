"""API views for the item catalog."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.params import get_sharer_user_id

from . import services
from .serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    ItemCreateSerializer,
    ItemSerializer,
    ItemUpdateSerializer,
)

logger = logging.getLogger(__name__)


class ItemViewSet(viewsets.ViewSet):
    """Вещи владельцев: добавление, правка, просмотр, поиск и отзывы."""

    serializer_class = ItemSerializer
    lookup_value_regex = r"\d+"

    def create(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        serializer = ItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = services.add_item(user_id, **serializer.validated_data)
        logger.info(f"Item {item.id} added by user {user_id}")
        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        user_id = get_sharer_user_id(request)
        serializer = ItemUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        item = services.update_item(int(pk), user_id, serializer.validated_data)
        return Response(ItemSerializer(item).data)

    def retrieve(self, request, pk=None):  # type: ignore
        user_id = get_sharer_user_id(request)
        return Response(ItemSerializer(services.get_item_for_viewer(int(pk), user_id)).data)

    def list(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        return Response(ItemSerializer(services.list_owner_items(user_id), many=True).data)

    @action(detail=False, methods=["get"])
    def search(self, request):  # type: ignore
        get_sharer_user_id(request)
        items = services.search_items(request.query_params.get("text"))
        return Response(ItemSerializer(items, many=True).data)

    @action(detail=True, methods=["post"], url_path="comment")
    def comment(self, request, pk=None):  # type: ignore
        user_id = get_sharer_user_id(request)
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = services.add_comment(int(pk), user_id, serializer.validated_data.get("text"))
        logger.info(f"Comment {comment.id} left on item {pk} by user {user_id}")
        return Response(CommentSerializer(comment).data)
