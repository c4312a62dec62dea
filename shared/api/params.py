"""Helpers reading the caller identity and plain query parameters."""

from __future__ import annotations

from shared.domain.exceptions import DomainValidationError

USER_ID_HEADER = "X-Sharer-User-Id"

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


def get_sharer_user_id(request) -> int:  # type: ignore
    """Return the caller id sent in the ``X-Sharer-User-Id`` header."""
    raw = request.headers.get(USER_ID_HEADER)
    if raw is None or raw.strip() == "":
        raise DomainValidationError(f"Missing required header {USER_ID_HEADER}")
    try:
        return int(raw)
    except ValueError:
        raise DomainValidationError(f"Header {USER_ID_HEADER} must be an integer, got '{raw}'")


def get_int_param(request, name: str, default: int) -> int:  # type: ignore
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise DomainValidationError(f"Parameter '{name}' should be of type int")


def get_bool_param(request, name: str) -> bool:  # type: ignore
    """Required boolean query parameter (``true``/``false``)."""
    raw = request.query_params.get(name)
    if raw is None:
        raise DomainValidationError(f"Missing required parameter '{name}'")
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise DomainValidationError(f"Parameter '{name}' should be of type boolean")
