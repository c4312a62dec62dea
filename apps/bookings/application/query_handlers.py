"""
Booking Query Handlers

Read use cases for the booking domain. Every "now" dependent answer uses
the injected clock.

Queries:
- GetBookingQuery: One booking, for its booker or item owner only
- ListBookingsQuery: A page of bookings by state, as booker or as owner
- CompletedBookingsQuery: Finished approved stays (comment eligibility)
- ItemBookingsQuery: Last and next approved booking of an item
"""

from dataclasses import dataclass
import logging

from shared.application.pagination import DEFAULT_PAGE_SIZE, PageRequest
from shared.domain.clock import Clock
from shared.domain.exceptions import NotFoundError
from apps.bookings.domain.entities import Booking, BookingRole, BookingState
from apps.bookings.domain.repositories import BookingRepository, UserDirectory

logger = logging.getLogger(__name__)


# ===== Queries =====

@dataclass
class GetBookingQuery:
    booking_id: int
    user_id: int


@dataclass
class ListBookingsQuery:
    """
    Page of bookings for a user

    ``state`` is the raw filter value as received from the caller.
    """
    user_id: int
    role: BookingRole = BookingRole.BOOKER
    state: str = BookingState.ALL.value
    from_index: int = 0
    size: int = DEFAULT_PAGE_SIZE


@dataclass
class CompletedBookingsQuery:
    item_id: int
    booker_id: int


@dataclass
class ItemBookingsQuery:
    item_id: int


@dataclass
class ItemBookings:
    """Approved bookings around "now" for an item"""
    last: Booking | None = None
    next: Booking | None = None


# ===== Query Handlers =====

class GetBookingHandler:
    """
    Handler for GetBooking query

    A booking the caller may not see is reported exactly like a missing one.
    """

    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    def handle(self, query: GetBookingQuery) -> Booking:
        logger.debug(f"Fetching booking {query.booking_id} for user {query.user_id}")

        booking = self.booking_repo.get_by_id(query.booking_id)
        if not booking.is_visible_to(query.user_id):
            logger.warning(f"User {query.user_id} is not allowed to see booking {query.booking_id}")
            raise NotFoundError(f"Booking not found with id: {query.booking_id}")

        return booking


class ListBookingsHandler:
    """
    Handler for ListBookings query

    Checks, in order: user exists, paging bounds, state filter value.
    """

    def __init__(self, booking_repo: BookingRepository, users: UserDirectory, clock: Clock):
        self.booking_repo = booking_repo
        self.users = users
        self.clock = clock

    def handle(self, query: ListBookingsQuery) -> list[Booking]:
        logger.debug(
            f"Listing bookings of user {query.user_id} as {query.role.value}: "
            f"state={query.state}, from={query.from_index}, size={query.size}"
        )

        self.users.get_by_id(query.user_id)
        page = PageRequest(query.from_index, query.size)
        state = BookingState.parse(query.state)

        bookings = self.booking_repo.find_for_subject(
            query.role, query.user_id, state, self.clock.now(), page
        )
        logger.debug(f"Found {len(bookings)} bookings on page {page.page_number}")
        return bookings


class CompletedBookingsHandler:
    """Handler for CompletedBookings query"""

    def __init__(self, booking_repo: BookingRepository, clock: Clock):
        self.booking_repo = booking_repo
        self.clock = clock

    def handle(self, query: CompletedBookingsQuery) -> list[Booking]:
        bookings = self.booking_repo.find_completed(query.item_id, query.booker_id, self.clock.now())
        logger.debug(
            f"User {query.booker_id} has {len(bookings)} completed bookings of item {query.item_id}"
        )
        return bookings


class ItemBookingsHandler:
    """Handler for ItemBookings query"""

    def __init__(self, booking_repo: BookingRepository, clock: Clock):
        self.booking_repo = booking_repo
        self.clock = clock

    def handle(self, query: ItemBookingsQuery) -> ItemBookings:
        now = self.clock.now()
        return ItemBookings(
            last=self.booking_repo.find_last_approved(query.item_id, now),
            next=self.booking_repo.find_next_approved(query.item_id, now),
        )
