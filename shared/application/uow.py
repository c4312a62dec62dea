"""
Unit of Work Pattern

Manages database transactions: every booking operation runs its reads,
validation and single write inside one unit of work.
"""

from abc import ABC, abstractmethod
import logging

from django.db import transaction

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Wraps ``transaction.atomic`` so row locks taken by repositories
    (``select_for_update``) are held until the operation finishes.

    Usage:
        with DjangoUnitOfWork():
            booking = booking_repo.get_by_id(booking_id, lock=True)
            booking.decide(actor_id, approved=True)
            booking_repo.save(booking)
            # Transaction commits here
    """

    def __init__(self):
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        # The atomic block commits on a clean __exit__
        logger.debug("Committing transaction")

    def rollback(self):
        # The atomic block rolls back when __exit__ receives an exception
        logger.debug("Rolling back transaction")


class NullUnitOfWork(AbstractUnitOfWork):
    """Unit of work for in-memory repositories, which have nothing to commit"""

    committed = False
    rolled_back = False

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
