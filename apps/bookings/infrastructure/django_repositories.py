"""
Django ORM Repositories

Production implementations of the booking ports. Rows are mapped to
domain entities here so handlers never touch querysets.
"""

from datetime import datetime
from typing import assert_never
import logging

from django.contrib.auth import get_user_model  # type: ignore
from django.db import NotSupportedError, transaction  # type: ignore
from django.db.models import Q, QuerySet  # type: ignore

from shared.application.pagination import PageRequest
from shared.domain.exceptions import DomainValidationError, NotFoundError
from shared.domain.value_objects import TimeRange
from apps.bookings.domain.entities import (
    Booking,
    BookingRole,
    BookingState,
    BookingStatus,
    ItemSnapshot,
    UserSnapshot,
)
from apps.bookings.domain.repositories import BookingRepository, ItemCatalog, UserDirectory
from apps.bookings.models import Booking as BookingModel
from apps.items.models import Item as ItemModel

logger = logging.getLogger(__name__)

ORDERING = ("-start", "-id")


def _lock_queryset_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def state_filter(state: BookingState, now: datetime) -> Q:
    """Queryset counterpart of ``Booking.matches``"""
    match state:
        case BookingState.ALL:
            return Q()
        case BookingState.CURRENT:
            return Q(start__lt=now, end__gt=now)
        case BookingState.PAST:
            return Q(end__lt=now)
        case BookingState.FUTURE:
            return Q(start__gt=now)
        case BookingState.WAITING:
            return Q(status=BookingModel.Status.WAITING)
        case BookingState.REJECTED:
            return Q(status=BookingModel.Status.REJECTED)
        case _:
            assert_never(state)


def subject_filter(role: BookingRole, user_id: int) -> Q:
    match role:
        case BookingRole.BOOKER:
            return Q(booker_id=user_id)
        case BookingRole.OWNER:
            return Q(item__owner_id=user_id)
        case _:
            assert_never(role)


def user_to_snapshot(user) -> UserSnapshot:  # type: ignore
    return UserSnapshot(id=user.id, name=user.name)


def item_to_snapshot(item: ItemModel) -> ItemSnapshot:
    return ItemSnapshot(
        id=item.id,
        name=item.name,
        owner_id=item.owner_id,
        available=item.available,
    )


def booking_to_entity(row: BookingModel) -> Booking:
    return Booking(
        id=row.id,
        period=TimeRange(row.start, row.end),
        item=item_to_snapshot(row.item),
        booker=user_to_snapshot(row.booker),
        status=BookingStatus(row.status),
    )


class DjangoUserDirectory(UserDirectory):

    def get_by_id(self, user_id: int) -> UserSnapshot:
        User = get_user_model()
        try:
            return user_to_snapshot(User.objects.get(pk=user_id))
        except User.DoesNotExist:
            logger.warning(f"User not found: ID={user_id}")
            raise NotFoundError(f"User not found with id: {user_id}")


class DjangoItemCatalog(ItemCatalog):

    def get_by_id(self, item_id: int) -> ItemSnapshot:
        try:
            return item_to_snapshot(ItemModel.objects.get(pk=item_id))
        except ItemModel.DoesNotExist:
            logger.warning(f"Item not found: ID={item_id}")
            raise NotFoundError(f"Item not found with id: {item_id}")


class DjangoBookingRepository(BookingRepository):
    """Booking storage backed by ``apps.bookings.models.Booking``"""

    def _queryset(self) -> QuerySet:
        return BookingModel.objects.select_related("item", "booker")

    def get_by_id(self, booking_id: int, lock: bool = False) -> Booking:
        queryset = self._queryset()
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        try:
            return booking_to_entity(queryset.get(pk=booking_id))
        except BookingModel.DoesNotExist:
            logger.warning(f"Booking not found: ID={booking_id}")
            raise NotFoundError(f"Booking not found with id: {booking_id}")

    def add(self, booking: Booking) -> Booking:
        row = BookingModel.objects.create(
            start=booking.start,
            end=booking.end,
            item_id=booking.item.id,
            booker_id=booking.booker.id,
            status=booking.status.value,
        )
        booking.id = row.id
        logger.debug(f"Saved booking: ID={row.id}, Item={row.item_id}, Booker={row.booker_id}")
        return booking

    def save(self, booking: Booking) -> Booking:
        # Only a WAITING row may change status; a stale writer matches nothing
        updated = BookingModel.objects.filter(
            pk=booking.id, status=BookingModel.Status.WAITING
        ).update(status=booking.status.value)
        if not updated:
            if not BookingModel.objects.filter(pk=booking.id).exists():
                raise NotFoundError(f"Booking not found with id: {booking.id}")
            logger.warning(f"Booking {booking.id} was decided by a concurrent request")
            raise DomainValidationError("Booking is not in waiting status")
        return booking

    def find_for_subject(
        self,
        role: BookingRole,
        user_id: int,
        state: BookingState,
        now: datetime,
        page: PageRequest,
    ) -> list[Booking]:
        queryset = (
            self._queryset()
            .filter(subject_filter(role, user_id), state_filter(state, now))
            .order_by(*ORDERING)
        )
        return [booking_to_entity(row) for row in page.slice(queryset)]

    def find_completed(self, item_id: int, booker_id: int, now: datetime) -> list[Booking]:
        queryset = self._queryset().filter(
            item_id=item_id,
            booker_id=booker_id,
            status=BookingModel.Status.APPROVED,
            end__lt=now,
        )
        return [booking_to_entity(row) for row in queryset.order_by(*ORDERING)]

    def find_last_approved(self, item_id: int, now: datetime) -> Booking | None:
        row = (
            self._queryset()
            .filter(item_id=item_id, status=BookingModel.Status.APPROVED, start__lt=now)
            .order_by("-start", "-id")
            .first()
        )
        return booking_to_entity(row) if row else None

    def find_next_approved(self, item_id: int, now: datetime) -> Booking | None:
        row = (
            self._queryset()
            .filter(item_id=item_id, status=BookingModel.Status.APPROVED, start__gt=now)
            .order_by("start", "id")
            .first()
        )
        return booking_to_entity(row) if row else None
