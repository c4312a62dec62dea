"""
Booking Command Handlers

These are the write use cases for the booking domain.
They orchestrate domain operations within one unit of work each.

Commands:
- CreateBookingCommand: Request a booking of an item
- ApproveBookingCommand: Owner approves or rejects a waiting booking
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
import logging

from shared.application.uow import AbstractUnitOfWork, DjangoUnitOfWork
from shared.domain.value_objects import TimeRange
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.repositories import BookingRepository, ItemCatalog, UserDirectory

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    booker_id comes from the caller identity, never from the request body.
    """
    booker_id: int
    item_id: int
    start: datetime
    end: datetime


@dataclass
class ApproveBookingCommand:
    """Command to approve (approved=True) or reject a booking"""
    booking_id: int
    owner_id: int
    approved: bool


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Validation order:
    1. Booker exists (NotFoundError)
    2. Item exists (NotFoundError)
    3. End not before start (DomainValidationError)
    4. Item available (UnavailableItemError)
    5. Booker is not the owner (SelfBookingError)

    Overlapping bookings of the same item are allowed.
    """

    def __init__(
        self,
        booking_repo: BookingRepository,
        users: UserDirectory,
        items: ItemCatalog,
        uow_factory: Callable[[], AbstractUnitOfWork] = DjangoUnitOfWork,
    ):
        self.booking_repo = booking_repo
        self.users = users
        self.items = items
        self.uow_factory = uow_factory

    def handle(self, command: CreateBookingCommand) -> Booking:
        logger.info(
            f"Creating booking for item {command.item_id}, "
            f"booker {command.booker_id}, period {command.start} - {command.end}"
        )

        with self.uow_factory():
            booker = self.users.get_by_id(command.booker_id)
            item = self.items.get_by_id(command.item_id)

            booking = Booking.request(TimeRange(command.start, command.end), item, booker)
            booking = self.booking_repo.add(booking)

        logger.info(f"Booking created successfully (ID: {booking.id})")
        return booking


class ApproveBookingHandler:
    """
    Handler for ApproveBooking command

    The booking row is loaded with a lock and the status write only matches
    a WAITING row, so of two concurrent decisions the second one fails even
    where the database ignores row locks.
    """

    def __init__(
        self,
        booking_repo: BookingRepository,
        uow_factory: Callable[[], AbstractUnitOfWork] = DjangoUnitOfWork,
    ):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory

    def handle(self, command: ApproveBookingCommand) -> Booking:
        decision = "Approving" if command.approved else "Rejecting"
        logger.info(f"{decision} booking {command.booking_id} by user {command.owner_id}")

        with self.uow_factory():
            booking = self.booking_repo.get_by_id(command.booking_id, lock=True)

            # FSM transition WAITING -> APPROVED | REJECTED
            booking.decide(command.owner_id, command.approved)

            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} is now {booking.status.value}")
        return booking
