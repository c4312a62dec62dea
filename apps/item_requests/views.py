"""API views for the request board."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.params import get_int_param, get_sharer_user_id
from shared.application.pagination import DEFAULT_PAGE_SIZE

from . import services
from .serializers import ItemRequestCreateSerializer, ItemRequestSerializer

logger = logging.getLogger(__name__)


class ItemRequestViewSet(viewsets.ViewSet):
    """Запросы вещей: создание, свои запросы, чужие запросы постранично."""

    serializer_class = ItemRequestSerializer
    lookup_value_regex = r"\d+"

    def create(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        logger.debug(f"Creating request by user ID={user_id}")
        serializer = ItemRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item_request = services.create_request(user_id, serializer.validated_data.get("description"))
        return Response(ItemRequestSerializer(item_request).data, status=status.HTTP_201_CREATED)

    def list(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        requests = services.list_own_requests(user_id)
        return Response(ItemRequestSerializer(requests, many=True).data)

    @action(detail=False, methods=["get"], url_path="all")
    def all_requests(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        requests = services.list_other_requests(
            user_id,
            get_int_param(request, "from", 0),
            get_int_param(request, "size", DEFAULT_PAGE_SIZE),
        )
        return Response(ItemRequestSerializer(requests, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        get_sharer_user_id(request)
        return Response(ItemRequestSerializer(services.get_request(int(pk))).data)
