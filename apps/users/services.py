"""User directory services.

Plain CRUD over ``CustomUser`` with the single business rule of the
directory: an email belongs to at most one user.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction  # type: ignore

from shared.domain.exceptions import ConflictError, NotFoundError

from .models import User

logger = logging.getLogger(__name__)


def get_user(user_id: int) -> User:
    """Return the user or raise ``NotFoundError``."""
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.warning(f"User not found: ID={user_id}")
        raise NotFoundError(f"User not found with id: {user_id}")


def list_users():
    logger.debug("Fetching all users")
    return User.objects.all()


def _email_taken(email: str, exclude_id: int | None = None) -> bool:
    qs = User.objects.filter(email__iexact=email)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    return qs.exists()


def create_user(*, name: str, email: str) -> User:
    logger.info(f"Creating new user with email: {email}")

    if _email_taken(email):
        logger.warning(f"Duplicate email detected: {email}")
        raise ConflictError(f"Email already exists: {email}")

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, name=name)
    except IntegrityError:
        logger.warning(f"Duplicate email detected: {email}")
        raise ConflictError(f"Email already exists: {email}")

    logger.debug(f"Created user: ID={user.id}, Name={user.name}, Email={user.email}")
    return user


def update_user(user_id: int, changes: dict[str, Any]) -> User:
    """Apply only the provided fields (``name``/``email``)."""
    logger.info(f"Updating user ID: {user_id}")

    user = get_user(user_id)
    email = changes.get("email")
    if email is not None and email != user.email and _email_taken(email, exclude_id=user.id):
        logger.warning(f"Duplicate email during update: {email}")
        raise ConflictError(f"Email already exists: {email}")

    original_name, original_email = user.name, user.email
    update_fields = []
    for field in ("name", "email"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])
            update_fields.append(field)

    if update_fields:
        try:
            with transaction.atomic():
                user.save(update_fields=update_fields)
        except IntegrityError:
            raise ConflictError(f"Email already exists: {email}")

    logger.debug(
        f"Updated user: ID={user_id}, Name: {original_name} -> {user.name}, "
        f"Email: {original_email} -> {user.email}"
    )
    return user


def delete_user(user_id: int) -> None:
    logger.info(f"Deleting user ID: {user_id}")
    user = get_user(user_id)
    user.delete()
    logger.debug(f"Deleted user: ID={user_id}")
