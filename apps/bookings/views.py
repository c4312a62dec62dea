"""API views for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.api.params import get_bool_param, get_int_param, get_sharer_user_id
from shared.application.pagination import DEFAULT_PAGE_SIZE

from . import services
from .application.command_handlers import ApproveBookingCommand, CreateBookingCommand
from .application.query_handlers import GetBookingQuery, ListBookingsQuery
from .domain.entities import BookingRole, BookingState
from .serializers import BookingCreateSerializer, BookingSerializer

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.ViewSet):
    """Бронирования: создание, решение владельца, просмотр и списки.

    Вызывающий пользователь передаётся в заголовке ``X-Sharer-User-Id``.
    """

    serializer_class = BookingSerializer
    lookup_value_regex = r"\d+"

    def create(self, request):  # type: ignore
        user_id = get_sharer_user_id(request)
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = services.build_message_bus().handle(
            CreateBookingCommand(
                booker_id=user_id,
                item_id=data["item_id"],
                start=data["start"],
                end=data["end"],
            )
        )
        logger.info(
            f"Booking {booking.id} requested by user {user_id} "
            f"for item {booking.item.id}: {booking.start} - {booking.end}"
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        user_id = get_sharer_user_id(request)
        approved = get_bool_param(request, "approved")
        booking = services.build_message_bus().handle(
            ApproveBookingCommand(booking_id=int(pk), owner_id=user_id, approved=approved)
        )
        logger.info(f"Booking {booking.id} decided by user {user_id}: {booking.status.value}")
        return Response(BookingSerializer(booking).data)

    def retrieve(self, request, pk=None):  # type: ignore
        user_id = get_sharer_user_id(request)
        booking = services.build_message_bus().handle(GetBookingQuery(booking_id=int(pk), user_id=user_id))
        return Response(BookingSerializer(booking).data)

    def list(self, request):  # type: ignore
        return self._list(request, BookingRole.BOOKER)

    @action(detail=False, methods=["get"])
    def owner(self, request):  # type: ignore
        return self._list(request, BookingRole.OWNER)

    def _list(self, request, role: BookingRole) -> Response:  # type: ignore
        user_id = get_sharer_user_id(request)
        query = ListBookingsQuery(
            user_id=user_id,
            role=role,
            state=request.query_params.get("state", BookingState.ALL.value),
            from_index=get_int_param(request, "from", 0),
            size=get_int_param(request, "size", DEFAULT_PAGE_SIZE),
        )
        bookings = services.build_message_bus().handle(query)
        return Response(BookingSerializer(bookings, many=True).data)
