"""Pydantic-based validation helpers for inbound response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class ErrorBody(BaseModel):
    """Error payload returned by the platform on non-2xx responses."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    code: str = ""
    details: dict[str, object] | None = None
    request_id: str = ""
    timestamp: str = ""


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def describe_schema(schema: object) -> str:
    """Return a short human-readable name for a result type."""
    name = getattr(schema, "__name__", None)
    return name if isinstance(name, str) and not hasattr(schema, "__args__") else str(schema)
