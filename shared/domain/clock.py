"""
Clock

Time source injected into handlers so that "now" dependent rules
(CURRENT/PAST/FUTURE classification, comment eligibility) are testable.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from django.utils import timezone  # type: ignore


class Clock(ABC):
    """Abstract time source"""

    @abstractmethod
    def now(self) -> datetime:
        """Current moment as an aware datetime"""
        pass


class SystemClock(Clock):
    """Wall clock, honours Django's USE_TZ setting"""

    def now(self) -> datetime:
        return timezone.now()


class FixedClock(Clock):
    """
    Clock frozen at a given moment

    Usage:
        clock = FixedClock(datetime(2030, 1, 1, tzinfo=UTC))
        clock.advance(days=2)
    """

    def __init__(self, moment: datetime):
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime):
        self._moment = moment

    def advance(self, **delta):
        self._moment = self._moment + timedelta(**delta)
