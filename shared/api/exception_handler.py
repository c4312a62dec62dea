"""DRF exception handler translating domain errors into HTTP responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    DomainValidationError,
    NotFoundError,
    SelfBookingError,
    UnavailableItemError,
)

logger = logging.getLogger(__name__)

# Order matters: the first matching class wins.
ERROR_MAPPING: list[tuple[type[DomainError], int, str]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (ConflictError, status.HTTP_409_CONFLICT, "Conflict"),
    (UnavailableItemError, status.HTTP_400_BAD_REQUEST, "Business Rule Violation"),
    (SelfBookingError, status.HTTP_400_BAD_REQUEST, "Business Rule Violation"),
    (DomainValidationError, status.HTTP_400_BAD_REQUEST, "Bad Request"),
]


def error_body(error: str, message: str) -> dict[str, str]:
    return {"error": error, "message": message}


def domain_exception_handler(exc, context):  # type: ignore
    """Map domain errors to 4xx, defer to DRF, and turn the rest into a logged 500."""

    for error_class, status_code, title in ERROR_MAPPING:
        if isinstance(exc, error_class):
            logger.warning(f"{title}: {exc}")
            return Response(error_body(title, str(exc)), status=status_code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.error(
        f"Internal server error in {view.__class__.__name__ if view else 'unknown view'}",
        exc_info=exc,
    )
    return Response(
        error_body("Internal Server Error", "Please contact support"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
