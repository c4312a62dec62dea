"""Tests for paging, time ranges and the HTTP error mapping."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework import status
from rest_framework.exceptions import ValidationError

from shared.api.exception_handler import domain_exception_handler
from shared.application.pagination import PageRequest
from shared.domain.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    SelfBookingError,
    UnavailableItemError,
    UnknownStateError,
)
from shared.domain.value_objects import TimeRange

T0 = datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "from_index, size, window",
    [(0, 10, (0, 10)), (4, 2, (4, 6)), (3, 2, (2, 4)), (9, 5, (5, 10))],
)
def test_page_window_uses_integer_division(from_index, size, window):
    page = PageRequest(from_index, size)

    assert (page.offset, page.limit) == window
    assert page.page_number == from_index // size


def test_page_slice():
    assert PageRequest(2, 2).slice(list(range(5))) == [2, 3]
    assert PageRequest(4, 2).slice(list(range(5))) == [4]


@pytest.mark.parametrize(
    "from_index, size, message",
    [(-1, 1, "'from' must be positive or zero"), (0, 0, "'size' must be positive")],
)
def test_page_bounds(from_index, size, message):
    with pytest.raises(DomainValidationError, match=message):
        PageRequest(from_index, size)


def test_time_range_buckets():
    period = TimeRange(T0, T0 + timedelta(days=1))

    assert period.is_ongoing(T0 + timedelta(hours=1))
    assert not period.is_ongoing(T0)
    assert period.has_ended(T0 + timedelta(days=2))
    assert not period.has_ended(T0 + timedelta(days=1))
    assert period.is_upcoming(T0 - timedelta(seconds=1))
    assert not period.is_reversed
    assert TimeRange(T0, T0).is_reversed is False
    assert TimeRange(T0 + timedelta(days=1), T0).is_reversed


def test_time_range_overlap():
    first = TimeRange(T0, T0 + timedelta(days=2))

    assert first.overlaps_with(TimeRange(T0 + timedelta(days=1), T0 + timedelta(days=3)))
    assert not first.overlaps_with(TimeRange(T0 + timedelta(days=2), T0 + timedelta(days=3)))


@pytest.mark.parametrize(
    "error, status_code, title",
    [
        (NotFoundError("gone"), status.HTTP_404_NOT_FOUND, "Not Found"),
        (ConflictError("taken"), status.HTTP_409_CONFLICT, "Conflict"),
        (UnavailableItemError("busy"), status.HTTP_400_BAD_REQUEST, "Business Rule Violation"),
        (SelfBookingError("mine"), status.HTTP_400_BAD_REQUEST, "Business Rule Violation"),
        (DomainValidationError("bad"), status.HTTP_400_BAD_REQUEST, "Bad Request"),
        (UnknownStateError("BOGUS"), status.HTTP_400_BAD_REQUEST, "Bad Request"),
    ],
)
def test_domain_errors_map_to_client_errors(error, status_code, title):
    response = domain_exception_handler(error, {})

    assert response.status_code == status_code
    assert response.data == {"error": title, "message": str(error)}


def test_framework_errors_keep_default_body():
    response = domain_exception_handler(ValidationError({"email": ["Enter a valid email address."]}), {})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "email" in response.data


def test_unexpected_errors_become_500():
    response = domain_exception_handler(RuntimeError("db down"), {"view": None})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data == {"error": "Internal Server Error", "message": "Please contact support"}
