"""
In-memory Repositories

Fakes for the booking ports. Every instance owns its own storage and id
counter; nothing is shared between instances.
"""

from dataclasses import replace
from datetime import datetime
import itertools

from shared.application.pagination import PageRequest
from shared.domain.exceptions import DomainValidationError, NotFoundError
from apps.bookings.domain.entities import (
    Booking,
    BookingRole,
    BookingState,
    BookingStatus,
    ItemSnapshot,
    UserSnapshot,
)
from apps.bookings.domain.repositories import BookingRepository, ItemCatalog, UserDirectory


class InMemoryUserDirectory(UserDirectory):

    def __init__(self, *users: UserSnapshot):
        self._users = {user.id: user for user in users}

    def add(self, user: UserSnapshot) -> UserSnapshot:
        self._users[user.id] = user
        return user

    def get_by_id(self, user_id: int) -> UserSnapshot:
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError(f"User not found with id: {user_id}")


class InMemoryItemCatalog(ItemCatalog):

    def __init__(self, *items: ItemSnapshot):
        self._items = {item.id: item for item in items}

    def add(self, item: ItemSnapshot) -> ItemSnapshot:
        self._items[item.id] = item
        return item

    def get_by_id(self, item_id: int) -> ItemSnapshot:
        try:
            return self._items[item_id]
        except KeyError:
            raise NotFoundError(f"Item not found with id: {item_id}")


def _newest_first(bookings: list[Booking]) -> list[Booking]:
    return sorted(bookings, key=lambda b: (b.start, b.id), reverse=True)


class InMemoryBookingRepository(BookingRepository):
    """
    Booking storage kept in a dict

    Stored entities are copies, so a handler has to call save() for a
    change to become visible, just as with the database.
    """

    def __init__(self):
        self._rows: dict[int, Booking] = {}
        self._ids = itertools.count(1)

    def get_by_id(self, booking_id: int, lock: bool = False) -> Booking:
        try:
            return replace(self._rows[booking_id])
        except KeyError:
            raise NotFoundError(f"Booking not found with id: {booking_id}")

    def add(self, booking: Booking) -> Booking:
        booking.id = next(self._ids)
        self._rows[booking.id] = replace(booking)
        return booking

    def save(self, booking: Booking) -> Booking:
        stored = self._rows.get(booking.id)
        if stored is None:
            raise NotFoundError(f"Booking not found with id: {booking.id}")
        if stored.status is not BookingStatus.WAITING:
            raise DomainValidationError("Booking is not in waiting status")
        self._rows[booking.id] = replace(booking)
        return booking

    def all(self) -> list[Booking]:
        return [replace(b) for b in self._rows.values()]

    def find_for_subject(
        self,
        role: BookingRole,
        user_id: int,
        state: BookingState,
        now: datetime,
        page: PageRequest,
    ) -> list[Booking]:
        matching = [
            b for b in self.all()
            if b.belongs_to(role, user_id) and b.matches(state, now)
        ]
        return page.slice(_newest_first(matching))

    def find_completed(self, item_id: int, booker_id: int, now: datetime) -> list[Booking]:
        return _newest_first([
            b for b in self.all()
            if b.item.id == item_id and b.booker.id == booker_id and b.is_completed(now)
        ])

    def find_last_approved(self, item_id: int, now: datetime) -> Booking | None:
        started = [
            b for b in self.all()
            if b.item.id == item_id and b.status is BookingStatus.APPROVED and b.period.has_started(now)
        ]
        return _newest_first(started)[0] if started else None

    def find_next_approved(self, item_id: int, now: datetime) -> Booking | None:
        upcoming = [
            b for b in self.all()
            if b.item.id == item_id and b.status is BookingStatus.APPROVED and b.period.is_upcoming(now)
        ]
        return min(upcoming, key=lambda b: (b.start, b.id)) if upcoming else None
