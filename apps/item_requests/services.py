"""Request board services."""

from __future__ import annotations

import logging

from django.db.models import QuerySet  # type: ignore

from apps.users.services import get_user
from shared.application.pagination import PageRequest
from shared.domain.clock import Clock, SystemClock
from shared.domain.exceptions import DomainValidationError, NotFoundError

from .models import ItemRequest

logger = logging.getLogger(__name__)


def _with_items(qs: QuerySet) -> QuerySet:
    return qs.select_related("requestor").prefetch_related("items")


def create_request(user_id: int, description: str | None, clock: Clock | None = None) -> ItemRequest:
    logger.info(f"Creating request for user ID: {user_id}")

    requestor = get_user(user_id)
    if description is None or not description.strip():
        logger.warning(f"Empty description in request from user {user_id}")
        raise DomainValidationError("Request description cannot be empty")

    request = ItemRequest.objects.create(
        description=description,
        requestor=requestor,
        created=(clock or SystemClock()).now(),
    )
    logger.debug(
        f"Created request: ID={request.id}, User={user_id}, "
        f"Description='{request.description[:30]}', Created={request.created}"
    )
    return request


def get_request(request_id: int) -> ItemRequest:
    logger.debug(f"Fetching request by ID: {request_id}")
    try:
        return _with_items(ItemRequest.objects.all()).get(pk=request_id)
    except ItemRequest.DoesNotExist:
        logger.warning(f"Request not found: ID={request_id}")
        raise NotFoundError(f"Request not found with id: {request_id}")


def list_own_requests(user_id: int) -> list[ItemRequest]:
    logger.debug(f"Fetching all requests for user ID: {user_id}")
    get_user(user_id)
    requests = list(_with_items(ItemRequest.objects.filter(requestor_id=user_id)).order_by("-created", "-id"))
    logger.debug(f"Found {len(requests)} requests for user ID: {user_id}")
    return requests


def list_other_requests(user_id: int, from_index: int, size: int) -> list[ItemRequest]:
    """Requests of everyone except the caller, newest first."""
    logger.debug(f"Fetching all requests (from={from_index}, size={size}) excluding user ID: {user_id}")
    page = PageRequest(from_index, size)
    qs = _with_items(ItemRequest.objects.exclude(requestor_id=user_id)).order_by("-created", "-id")
    requests = list(page.slice(qs))
    logger.debug(
        f"Fetched {len(requests)} requests for page {page.page_number} (size {size}) excluding user {user_id}"
    )
    return requests
