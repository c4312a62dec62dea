"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: Represents a rental window (start to end timestamp)
"""

from dataclasses import dataclass
from datetime import datetime

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents a window from start to end. The range does not validate its
    own ordering: a booking checks it once, at creation time, and reports
    its own error.
    """
    start: datetime
    end: datetime

    @property
    def is_reversed(self) -> bool:
        """True when end lies before start (equal bounds are not reversed)"""
        return self.end < self.start

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Overlap formula: start1 < end2 AND end1 > start2
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")
        return self.start < other.end and self.end > other.start

    def is_ongoing(self, moment: datetime) -> bool:
        """Both bounds are exclusive"""
        return self.start < moment < self.end

    def has_ended(self, moment: datetime) -> bool:
        return self.end < moment

    def has_started(self, moment: datetime) -> bool:
        return self.start < moment

    def is_upcoming(self, moment: datetime) -> bool:
        return self.start > moment

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"
