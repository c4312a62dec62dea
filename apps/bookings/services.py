"""Wiring of the booking handlers for the Django runtime.

Views and other apps never build handlers themselves: they ask for a bus
and send it commands and queries.
"""

from __future__ import annotations

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.clock import Clock, SystemClock

from .application.command_handlers import (
    ApproveBookingCommand,
    ApproveBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from .application.query_handlers import (
    CompletedBookingsHandler,
    CompletedBookingsQuery,
    GetBookingHandler,
    GetBookingQuery,
    ItemBookings,
    ItemBookingsHandler,
    ItemBookingsQuery,
    ListBookingsHandler,
    ListBookingsQuery,
)
from .domain.entities import Booking
from .infrastructure.django_repositories import (
    DjangoBookingRepository,
    DjangoItemCatalog,
    DjangoUserDirectory,
)


def build_message_bus(clock: Clock | None = None) -> MessageBus:
    """Bus with every booking handler registered against the ORM repositories."""
    clock = clock or SystemClock()
    bookings = DjangoBookingRepository()
    users = DjangoUserDirectory()
    items = DjangoItemCatalog()

    bus = MessageBus()
    bus.register(
        CreateBookingCommand,
        CreateBookingHandler(bookings, users, items, uow_factory=DjangoUnitOfWork).handle,
    )
    bus.register(
        ApproveBookingCommand,
        ApproveBookingHandler(bookings, uow_factory=DjangoUnitOfWork).handle,
    )
    bus.register(GetBookingQuery, GetBookingHandler(bookings).handle)
    bus.register(ListBookingsQuery, ListBookingsHandler(bookings, users, clock).handle)
    bus.register(CompletedBookingsQuery, CompletedBookingsHandler(bookings, clock).handle)
    bus.register(ItemBookingsQuery, ItemBookingsHandler(bookings, clock).handle)
    return bus


def has_completed_booking(item_id: int, user_id: int, clock: Clock | None = None) -> bool:
    """Comment eligibility: an approved booking of the item that already ended."""
    completed: list[Booking] = build_message_bus(clock).handle(CompletedBookingsQuery(item_id, user_id))
    return bool(completed)


def item_bookings(item_id: int, clock: Clock | None = None) -> ItemBookings:
    return build_message_bus(clock).handle(ItemBookingsQuery(item_id))
