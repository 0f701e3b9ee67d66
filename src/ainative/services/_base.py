"""Argument checks and call helpers shared by the domain services."""

from __future__ import annotations

import threading
from collections.abc import Sized
from enum import StrEnum
from urllib.parse import quote

from ..exceptions import APIError, ValidationError
from ..infrastructure.validation import describe_schema
from ..protocols import Dispatcher


def require_text(value: str | None, field: str, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(field, message, value)
    return value


def require_items[SizedT: Sized](value: SizedT | None, field: str, message: str) -> SizedT:
    if value is None or len(value) == 0:
        raise ValidationError(field, message, value)
    return value


def require_range(
    value: float, field: str, *, low: float, high: float, message: str
) -> float:
    if value < low or value > high:
        raise ValidationError(field, message, value)
    return value


def require_choice[ChoiceT: StrEnum](value: str, choices: type[ChoiceT], field: str) -> ChoiceT:
    try:
        return choices(value)
    except ValueError as exc:
        allowed = ", ".join(choice.value for choice in choices)
        raise ValidationError(field, f"{field} must be one of: {allowed}", value) from exc


def page_query(limit: int, offset: int, *, default_limit: int) -> dict[str, object]:
    """Return the `limit`/`offset` query pair; a non-positive limit means the default."""
    if offset < 0:
        raise ValidationError("offset", "offset must not be negative", offset)
    return {"limit": limit if limit > 0 else default_limit, "offset": offset}


def path_segment(value: str) -> str:
    """Escape an identifier for use as a single URL path segment."""
    return quote(value, safe="")


def fetch[ResultT](
    dispatcher: Dispatcher,
    method: str,
    path: str,
    body: object,
    result_type: type[ResultT],
    *,
    cancel: threading.Event | None = None,
) -> ResultT:
    """Execute a call whose response body is required.

    The dispatcher only returns None for calls without a result type; a None
    here comes from a dispatcher that broke that contract, and no HTTP status
    is known for it.
    """
    result = dispatcher.execute(method, path, body, result_type, cancel=cancel)
    if result is None:
        raise APIError.for_missing_result(describe_schema(result_type))
    return result
