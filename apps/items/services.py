"""Item catalog and comment services."""

from __future__ import annotations

import logging
from typing import Any

from apps.bookings.services import has_completed_booking, item_bookings
from apps.item_requests.models import ItemRequest
from apps.users.services import get_user
from shared.domain.clock import Clock, SystemClock
from shared.domain.exceptions import DomainValidationError, NotFoundError

from .filters import ItemSearchFilterSet
from .models import Comment, Item

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "available")


def _with_comments(qs):  # type: ignore
    return qs.select_related("owner", "request").prefetch_related("comments__author")


def get_item(item_id: int) -> Item:
    try:
        return _with_comments(Item.objects.all()).get(pk=item_id)
    except Item.DoesNotExist:
        logger.warning(f"Item not found: ID={item_id}")
        raise NotFoundError(f"Item not found with id: {item_id}")


def _attach_bookings(item: Item, viewer_id: int, clock: Clock | None = None) -> Item:
    """Last/next approved booking, shown to the owner of an available item only."""
    item.last_booking = None
    item.next_booking = None
    if item.owner_id == viewer_id and item.available:
        summary = item_bookings(item.id, clock)
        item.last_booking = summary.last
        item.next_booking = summary.next
    return item


def _resolve_request(request_id: int | None, owner_id: int) -> ItemRequest | None:
    if request_id is None:
        return None
    try:
        item_request = ItemRequest.objects.get(pk=request_id)
    except ItemRequest.DoesNotExist:
        logger.warning(f"Request not found: ID={request_id}")
        raise NotFoundError(f"Request not found with id: {request_id}")
    if item_request.requestor_id == owner_id:
        raise DomainValidationError("Cannot answer own request")
    return item_request


def add_item(owner_id: int, *, name: str, description: str, available: bool, request_id: int | None = None) -> Item:
    logger.info(f"Adding item '{name}' for owner ID: {owner_id}")

    owner = get_user(owner_id)
    item_request = _resolve_request(request_id, owner_id)
    item = Item.objects.create(
        name=name,
        description=description,
        available=available,
        owner=owner,
        request=item_request,
    )
    logger.debug(f"Created item: ID={item.id}, Owner={owner_id}, Request={request_id}")
    return _attach_bookings(item, owner_id)


def update_item(item_id: int, owner_id: int, changes: dict[str, Any]) -> Item:
    """Apply only the provided fields; a non-owner sees the item as missing."""
    logger.info(f"Updating item ID: {item_id} by user ID: {owner_id}")

    item = get_item(item_id)
    if item.owner_id != owner_id:
        logger.warning(f"User {owner_id} is not the owner of item {item_id}")
        raise NotFoundError(f"Item not found with id: {item_id}")

    update_fields = [field for field in UPDATABLE_FIELDS if changes.get(field) is not None]
    for field in update_fields:
        setattr(item, field, changes[field])
    if update_fields:
        item.save(update_fields=update_fields)

    logger.debug(f"Updated item ID={item_id}: {', '.join(update_fields) or 'no changes'}")
    return _attach_bookings(item, owner_id)


def get_item_for_viewer(item_id: int, viewer_id: int, clock: Clock | None = None) -> Item:
    logger.debug(f"Fetching item ID: {item_id} for user ID: {viewer_id}")
    return _attach_bookings(get_item(item_id), viewer_id, clock)


def list_owner_items(owner_id: int, clock: Clock | None = None) -> list[Item]:
    logger.debug(f"Fetching items of owner ID: {owner_id}")
    items = list(_with_comments(Item.objects.filter(owner_id=owner_id)).order_by("id"))
    return [_attach_bookings(item, owner_id, clock) for item in items]


def search_items(text: str | None) -> list[Item]:
    logger.debug(f"Searching items by text: '{text}'")
    if not text or not text.strip():
        return []
    filterset = ItemSearchFilterSet(
        data={"text": text},
        queryset=_with_comments(Item.objects.filter(available=True)).order_by("id"),
    )
    items = list(filterset.qs)
    for item in items:
        item.last_booking = None
        item.next_booking = None
    logger.debug(f"Found {len(items)} items for text '{text}'")
    return items


def add_comment(item_id: int, author_id: int, text: str | None, clock: Clock | None = None) -> Comment:
    logger.info(f"Adding comment to item ID: {item_id} by user ID: {author_id}")

    author = get_user(author_id)
    item = get_item(item_id)

    clock = clock or SystemClock()
    if not has_completed_booking(item.id, author.id, clock):
        logger.warning(f"User {author_id} has no completed booking of item {item_id}")
        raise DomainValidationError("User has not booked this item or booking is not completed yet")
    if text is None or not text.strip():
        raise DomainValidationError("Comment text cannot be empty")

    comment = Comment.objects.create(item=item, author=author, text=text, created=clock.now())
    logger.debug(f"Created comment: ID={comment.id}, Item={item_id}, Author={author_id}")
    return comment
