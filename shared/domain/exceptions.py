"""
Domain Exceptions

Error taxonomy shared by every app. These exceptions carry no transport
details; ``shared.api.exception_handler`` maps them to HTTP responses.
"""


class DomainError(Exception):
    """Base class for errors the caller can fix and retry"""

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class NotFoundError(DomainError):
    """
    Referenced user, item, request or booking does not exist

    Also raised when a booking exists but the caller may not see it.
    """


class DomainValidationError(DomainError):
    """Malformed business input (dates, pagination, approver, status)"""


class UnknownStateError(DomainValidationError):
    """State filter string outside the supported set"""

    def __init__(self, raw_state: str):
        super().__init__(f"Unknown state: {raw_state}")
        self.raw_state = raw_state


class UnavailableItemError(DomainError):
    """Item exists but its owner marked it unavailable"""


class SelfBookingError(DomainError):
    """Owner tried to book their own item"""


class ConflictError(DomainError):
    """Uniqueness violation, e.g. an email already taken"""
