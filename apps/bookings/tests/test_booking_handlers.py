"""Unit tests for booking handlers on in-memory repositories and a fixed clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from apps.bookings.application.command_handlers import (
    ApproveBookingCommand,
    ApproveBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
)
from apps.bookings.application.query_handlers import (
    CompletedBookingsHandler,
    CompletedBookingsQuery,
    GetBookingHandler,
    GetBookingQuery,
    ItemBookingsHandler,
    ItemBookingsQuery,
    ListBookingsHandler,
    ListBookingsQuery,
)
from apps.bookings.domain.entities import (
    BookingRole,
    BookingState,
    BookingStatus,
    ItemSnapshot,
    UserSnapshot,
)
from apps.bookings.infrastructure.memory import (
    InMemoryBookingRepository,
    InMemoryItemCatalog,
    InMemoryUserDirectory,
)
from shared.application.uow import NullUnitOfWork
from shared.domain.clock import FixedClock
from shared.domain.exceptions import (
    DomainValidationError,
    NotFoundError,
    SelfBookingError,
    UnavailableItemError,
    UnknownStateError,
)

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=timezone.utc)

OWNER = UserSnapshot(id=1, name="Owner")
BOOKER = UserSnapshot(id=2, name="Booker")
STRANGER = UserSnapshot(id=3, name="Stranger")

DRILL = ItemSnapshot(id=10, name="Drill", owner_id=OWNER.id, available=True)
SAW = ItemSnapshot(id=11, name="Saw", owner_id=OWNER.id, available=False)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def repo():
    return InMemoryBookingRepository()


@pytest.fixture
def users():
    return InMemoryUserDirectory(OWNER, BOOKER, STRANGER)


@pytest.fixture
def items():
    return InMemoryItemCatalog(DRILL, SAW)


@pytest.fixture
def create(repo, users, items):
    handler = CreateBookingHandler(repo, users, items, uow_factory=NullUnitOfWork)

    def _create(start, end, item_id=DRILL.id, booker_id=BOOKER.id):
        return handler.handle(CreateBookingCommand(booker_id=booker_id, item_id=item_id, start=start, end=end))

    return _create


@pytest.fixture
def decide(repo):
    handler = ApproveBookingHandler(repo, uow_factory=NullUnitOfWork)

    def _decide(booking_id, approved=True, owner_id=OWNER.id):
        return handler.handle(ApproveBookingCommand(booking_id=booking_id, owner_id=owner_id, approved=approved))

    return _decide


@pytest.fixture
def get(repo):
    handler = GetBookingHandler(repo)
    return lambda booking_id, user_id: handler.handle(GetBookingQuery(booking_id, user_id))


@pytest.fixture
def list_bookings(repo, users, clock):
    handler = ListBookingsHandler(repo, users, clock)
    return lambda **kwargs: handler.handle(ListBookingsQuery(**kwargs))


def days(n: float) -> datetime:
    return NOW + timedelta(days=n)


# ===== Creation =====

def test_new_booking_is_waiting_with_id(create):
    booking = create(days(1), days(2))

    assert booking.id is not None
    assert booking.status is BookingStatus.WAITING
    assert booking.booker == BOOKER
    assert booking.item.name == "Drill"


def test_end_before_start_is_rejected(create, repo):
    with pytest.raises(DomainValidationError, match="End time must be after start time"):
        create(days(2), days(1))

    assert repo.all() == []


def test_zero_length_booking_is_accepted(create):
    booking = create(days(1), days(1))

    assert booking.start == booking.end
    assert booking.status is BookingStatus.WAITING


def test_unknown_booker_is_checked_before_item(create):
    with pytest.raises(NotFoundError, match="User not found with id: 99"):
        create(days(1), days(2), item_id=999, booker_id=99)


def test_unknown_item(create):
    with pytest.raises(NotFoundError, match="Item not found with id: 999"):
        create(days(1), days(2), item_id=999)


@pytest.mark.parametrize(
    "start, end",
    [(days(1), days(2)), (days(-3), days(-2)), (days(1), days(1))],
    ids=["future", "past", "zero-length"],
)
@pytest.mark.parametrize("booker_id", [BOOKER.id, OWNER.id], ids=["renter", "owner"])
def test_unavailable_item_always_fails(create, start, end, booker_id):
    with pytest.raises(UnavailableItemError):
        create(start, end, item_id=SAW.id, booker_id=booker_id)


def test_owner_cannot_book_own_item(create):
    with pytest.raises(SelfBookingError):
        create(days(1), days(2), booker_id=OWNER.id)


def test_overlapping_bookings_can_both_be_approved(create, decide):
    first = create(days(1), days(3))
    second = create(days(2), days(4))

    assert decide(first.id).status is BookingStatus.APPROVED
    assert decide(second.id).status is BookingStatus.APPROVED


# ===== Approval =====

@pytest.mark.parametrize("approved, expected", [(True, BookingStatus.APPROVED), (False, BookingStatus.REJECTED)])
def test_owner_decides_waiting_booking(create, decide, repo, approved, expected):
    booking = create(days(1), days(2))

    result = decide(booking.id, approved=approved)

    assert result.status is expected
    assert repo.get_by_id(booking.id).status is expected


@pytest.mark.parametrize("status", [BookingStatus.APPROVED, BookingStatus.REJECTED, BookingStatus.CANCELED])
@pytest.mark.parametrize("approved", [True, False])
def test_decision_on_decided_booking_fails(create, decide, repo, status, approved):
    booking = create(days(1), days(2))
    booking.status = status
    repo.save(booking)

    with pytest.raises(DomainValidationError, match="Booking is not in waiting status"):
        decide(booking.id, approved=approved)

    assert repo.get_by_id(booking.id).status is status


@pytest.mark.parametrize("actor", [BOOKER, STRANGER], ids=["booker", "stranger"])
def test_only_owner_may_decide(create, decide, repo, actor):
    booking = create(days(1), days(2))

    with pytest.raises(DomainValidationError, match="User is not the owner of the item"):
        decide(booking.id, owner_id=actor.id)

    assert repo.get_by_id(booking.id).status is BookingStatus.WAITING


def test_owner_check_comes_before_status_check(create, decide):
    booking = create(days(1), days(2))
    decide(booking.id)

    with pytest.raises(DomainValidationError, match="User is not the owner of the item"):
        decide(booking.id, owner_id=STRANGER.id)


def test_stale_decision_cannot_overwrite_the_first(create, repo):
    booking = create(days(1), days(2))
    first = repo.get_by_id(booking.id, lock=True)
    second = repo.get_by_id(booking.id, lock=True)

    first.decide(OWNER.id, approved=True)
    repo.save(first)
    second.decide(OWNER.id, approved=False)

    with pytest.raises(DomainValidationError, match="Booking is not in waiting status"):
        repo.save(second)

    assert repo.get_by_id(booking.id).status is BookingStatus.APPROVED


def test_decision_on_unknown_booking(decide):
    with pytest.raises(NotFoundError):
        decide(12345)


# ===== Single booking =====

@pytest.mark.parametrize("viewer", [BOOKER, OWNER], ids=["booker", "owner"])
def test_booker_and_owner_see_booking(create, get, viewer):
    booking = create(days(1), days(2))

    assert get(booking.id, viewer.id) == booking


def test_third_party_and_missing_booking_look_the_same(create, get):
    booking = create(days(1), days(2))

    with pytest.raises(NotFoundError) as hidden:
        get(booking.id, STRANGER.id)
    with pytest.raises(NotFoundError) as missing:
        get(booking.id + 100, STRANGER.id)

    assert str(hidden.value) == f"Booking not found with id: {booking.id}"
    assert str(missing.value) == f"Booking not found with id: {booking.id + 100}"


# ===== Listing =====

@pytest.fixture
def categories(create, decide):
    """One booking per bucket; keys name the bucket it was built for."""
    past = create(days(-3), days(-2))
    current = create(days(-1), days(1))
    future = create(days(2), days(3))
    waiting = create(days(4), days(5))
    rejected = create(days(6), days(7))
    for booking in (past, current, future):
        decide(booking.id, approved=True)
    decide(rejected.id, approved=False)
    return {
        "past": past.id,
        "current": current.id,
        "future": future.id,
        "waiting": waiting.id,
        "rejected": rejected.id,
    }


@pytest.mark.parametrize(
    "state, expected",
    [
        ("ALL", ["rejected", "waiting", "future", "current", "past"]),
        ("CURRENT", ["current"]),
        ("PAST", ["past"]),
        ("FUTURE", ["rejected", "waiting", "future"]),
        ("WAITING", ["waiting"]),
        ("REJECTED", ["rejected"]),
    ],
)
@pytest.mark.parametrize(
    "role, user",
    [(BookingRole.BOOKER, BOOKER), (BookingRole.OWNER, OWNER)],
    ids=["as-booker", "as-owner"],
)
def test_state_filter_returns_exact_subset_newest_first(list_bookings, categories, state, expected, role, user):
    result = list_bookings(user_id=user.id, role=role, state=state)

    assert [b.id for b in result] == [categories[key] for key in expected]


def test_listing_is_empty_for_the_other_side(list_bookings, categories):
    assert list_bookings(user_id=OWNER.id, role=BookingRole.BOOKER) == []
    assert list_bookings(user_id=BOOKER.id, role=BookingRole.OWNER) == []


def test_state_is_case_insensitive(list_bookings, categories):
    result = list_bookings(user_id=BOOKER.id, state="current")

    assert [b.id for b in result] == [categories["current"]]


def test_unknown_state_is_an_error(list_bookings, categories):
    with pytest.raises(UnknownStateError, match="Unknown state: BOGUS"):
        list_bookings(user_id=BOOKER.id, state="BOGUS")


def test_unknown_user_is_checked_first(list_bookings):
    with pytest.raises(NotFoundError):
        list_bookings(user_id=404, state="BOGUS", from_index=-1)


@pytest.mark.parametrize("from_index, size", [(-1, 10), (0, 0), (0, -5)])
def test_bad_paging_is_rejected(list_bookings, from_index, size):
    with pytest.raises(DomainValidationError):
        list_bookings(user_id=BOOKER.id, from_index=from_index, size=size)


def test_pages_cover_everything_once(list_bookings, categories):
    pages = [list_bookings(user_id=BOOKER.id, from_index=start, size=2) for start in (0, 2, 4)]

    assert [len(page) for page in pages] == [2, 2, 1]
    seen = [b.id for page in pages for b in page]
    assert len(set(seen)) == 5
    assert set(seen) == set(categories.values())


def test_offset_snaps_to_page_boundary(list_bookings, categories):
    snapped = list_bookings(user_id=BOOKER.id, from_index=3, size=2)
    page = list_bookings(user_id=BOOKER.id, from_index=2, size=2)

    assert [b.id for b in snapped] == [b.id for b in page]


def test_state_parse_rejects_garbage():
    assert BookingState.parse(" Waiting ") is BookingState.WAITING
    with pytest.raises(UnknownStateError):
        BookingState.parse("UNSUPPORTED_STATUS")


# ===== Completed bookings and item summary =====

def test_end_to_end_lifecycle(create, decide, repo, clock):
    completed = CompletedBookingsHandler(repo, clock)

    booking = create(days(1), days(2))
    assert booking.status is BookingStatus.WAITING

    assert decide(booking.id, approved=True).status is BookingStatus.APPROVED

    with pytest.raises(DomainValidationError):
        decide(booking.id, approved=False)

    assert completed.handle(CompletedBookingsQuery(DRILL.id, BOOKER.id)) == []

    clock.advance(days=2, seconds=1)
    assert [b.id for b in completed.handle(CompletedBookingsQuery(DRILL.id, BOOKER.id))] == [booking.id]


def test_rejected_booking_never_completes(create, decide, repo, clock):
    booking = create(days(-3), days(-2))
    decide(booking.id, approved=False)

    result = CompletedBookingsHandler(repo, clock).handle(CompletedBookingsQuery(DRILL.id, BOOKER.id))

    assert result == []


def test_item_bookings_picks_nearest_approved(create, decide, repo, clock):
    older = create(days(-5), days(-4))
    latest = create(days(-2), days(-1))
    upcoming = create(days(3), days(4))
    later = create(days(6), days(7))
    create(days(1), days(2))  # waiting, ignored
    for booking in (older, latest, upcoming, later):
        decide(booking.id)

    summary = ItemBookingsHandler(repo, clock).handle(ItemBookingsQuery(DRILL.id))

    assert summary.last.id == latest.id
    assert summary.next.id == upcoming.id


def test_item_without_bookings_has_empty_summary(repo, clock):
    summary = ItemBookingsHandler(repo, clock).handle(ItemBookingsQuery(DRILL.id))

    assert summary.last is None
    assert summary.next is None
