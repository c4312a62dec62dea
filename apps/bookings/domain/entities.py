"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Aggregate representing one reservation request for an item
- BookingStatus: FSM states for the approval workflow
- BookingState: Query-time filter used by listings (not persisted)
- BookingRole: Which side of a booking a listing is built for
- UserSnapshot / ItemSnapshot: Read-only views of the collaborators
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import assert_never

from shared.domain.base import Entity, ValueObject
from shared.domain.exceptions import (
    DomainValidationError,
    SelfBookingError,
    UnavailableItemError,
    UnknownStateError,
)
from shared.domain.value_objects import TimeRange


class BookingStatus(str, Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - WAITING -> APPROVED (owner accepted)
    - WAITING -> REJECTED (owner declined)

    CANCELED is part of the vocabulary but no operation produces it yet.
    """
    WAITING = 'WAITING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    CANCELED = 'CANCELED'


class BookingState(str, Enum):
    """Listing filter, evaluated against "now" at query time"""
    ALL = 'ALL'
    CURRENT = 'CURRENT'
    PAST = 'PAST'
    FUTURE = 'FUTURE'
    WAITING = 'WAITING'
    REJECTED = 'REJECTED'

    @classmethod
    def parse(cls, raw: str) -> 'BookingState':
        """
        Parse a filter value coming from the outside world

        Case-insensitive. Raises UnknownStateError for anything else.
        """
        try:
            return cls(raw.strip().upper())
        except (ValueError, AttributeError):
            raise UnknownStateError(raw)


class BookingRole(Enum):
    """Subject of a listing: bookings I made, or bookings of my items"""
    BOOKER = 'booker'
    OWNER = 'owner'


@dataclass(frozen=True)
class UserSnapshot(ValueObject):
    id: int
    name: str


@dataclass(frozen=True)
class ItemSnapshot(ValueObject):
    id: int
    name: str
    owner_id: int
    available: bool


@dataclass(eq=False)
class Booking(Entity):
    """
    Booking Aggregate Root

    Key invariants:
    - end is not before start (checked once, at creation)
    - status leaves WAITING exactly once, by the item owner's decision
    - visible only to the booker and to the item owner
    """

    period: TimeRange
    item: ItemSnapshot
    booker: UserSnapshot
    status: BookingStatus = BookingStatus.WAITING
    id: int | None = None

    @classmethod
    def request(cls, period: TimeRange, item: ItemSnapshot, booker: UserSnapshot) -> 'Booking':
        """
        Create a WAITING booking

        Checks run in a fixed order: dates, availability, ownership.
        Equal start and end are accepted.

        Raises:
            DomainValidationError: If end is before start
            UnavailableItemError: If the item is not available
            SelfBookingError: If the booker owns the item
        """
        if period.is_reversed:
            raise DomainValidationError("End time must be after start time")

        if not item.available:
            raise UnavailableItemError(f"Item is not available: {item.id}")

        if booker.id == item.owner_id:
            raise SelfBookingError("Owner cannot book own item")

        return cls(period=period, item=item, booker=booker)

    def decide(self, actor_id: int, approved: bool):
        """
        Approve or reject (WAITING -> APPROVED | REJECTED)

        A second decision always fails, even if it repeats the first one.
        """
        if not self.is_owned_by(actor_id):
            raise DomainValidationError("User is not the owner of the item")

        match self.status:
            case BookingStatus.WAITING:
                pass
            case BookingStatus.APPROVED | BookingStatus.REJECTED | BookingStatus.CANCELED:
                raise DomainValidationError("Booking is not in waiting status")
            case _:
                assert_never(self.status)

        self.status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED

    def is_owned_by(self, user_id: int) -> bool:
        return self.item.owner_id == user_id

    def is_visible_to(self, user_id: int) -> bool:
        return self.booker.id == user_id or self.is_owned_by(user_id)

    def belongs_to(self, role: BookingRole, user_id: int) -> bool:
        match role:
            case BookingRole.BOOKER:
                return self.booker.id == user_id
            case BookingRole.OWNER:
                return self.is_owned_by(user_id)
            case _:
                assert_never(role)

    def matches(self, state: BookingState, now: datetime) -> bool:
        """Whether the booking falls into the given listing bucket"""
        match state:
            case BookingState.ALL:
                return True
            case BookingState.CURRENT:
                return self.period.is_ongoing(now)
            case BookingState.PAST:
                return self.period.has_ended(now)
            case BookingState.FUTURE:
                return self.period.is_upcoming(now)
            case BookingState.WAITING:
                return self.status is BookingStatus.WAITING
            case BookingState.REJECTED:
                return self.status is BookingStatus.REJECTED
            case _:
                assert_never(state)

    def is_completed(self, now: datetime) -> bool:
        """Approved and already over: the precondition for a comment"""
        return self.status is BookingStatus.APPROVED and self.period.has_ended(now)

    @property
    def start(self) -> datetime:
        return self.period.start

    @property
    def end(self) -> datetime:
        return self.period.end

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, item={self.item.id}, booker={self.booker.id}, "
            f"status={self.status.value}, period={self.period})"
        )
