"""
Booking Ports

Interfaces the booking handlers depend on. The Django ORM implementations
live in ``apps.bookings.infrastructure.django_repositories``; in-memory
ones for unit tests in ``apps.bookings.infrastructure.memory``.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from apps.bookings.domain.entities import (
    Booking,
    BookingRole,
    BookingState,
    ItemSnapshot,
    UserSnapshot,
)
from shared.application.pagination import PageRequest


class UserDirectory(ABC):
    """Read access to users"""

    @abstractmethod
    def get_by_id(self, user_id: int) -> UserSnapshot:
        """Raises NotFoundError if the user does not exist"""
        pass


class ItemCatalog(ABC):
    """Read access to items (availability and owner included)"""

    @abstractmethod
    def get_by_id(self, item_id: int) -> ItemSnapshot:
        """Raises NotFoundError if the item does not exist"""
        pass


class BookingRepository(ABC):
    """
    Booking storage

    Listing results are ordered by start descending, then id descending.
    """

    @abstractmethod
    def get_by_id(self, booking_id: int, lock: bool = False) -> Booking:
        """
        Load a booking

        With lock=True the row stays locked until the surrounding unit of
        work ends. Raises NotFoundError if the booking does not exist.
        """
        pass

    @abstractmethod
    def add(self, booking: Booking) -> Booking:
        """Persist a new booking and assign its id"""
        pass

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """
        Persist the decision on a booking

        Raises DomainValidationError when the stored booking is no longer
        WAITING, e.g. another request decided it first.
        """
        pass

    @abstractmethod
    def find_for_subject(
        self,
        role: BookingRole,
        user_id: int,
        state: BookingState,
        now: datetime,
        page: PageRequest,
    ) -> list[Booking]:
        """One page of the user's bookings (as booker or as owner) in a state bucket"""
        pass

    @abstractmethod
    def find_completed(self, item_id: int, booker_id: int, now: datetime) -> list[Booking]:
        """Approved bookings of the item by the user that ended before now"""
        pass

    @abstractmethod
    def find_last_approved(self, item_id: int, now: datetime) -> Booking | None:
        """Latest approved booking of the item that started before now"""
        pass

    @abstractmethod
    def find_next_approved(self, item_id: int, now: datetime) -> Booking | None:
        """Earliest approved booking of the item that starts after now"""
        pass
