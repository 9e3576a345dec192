"""Request body and query parsing shared by the JSON handlers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from clubhouse.sales.periods import parse_day
from shared.errors import ValidationError

if TYPE_CHECKING:
    from datetime import date

    from starlette.requests import Request

T = TypeVar("T")


def _describe(exc: SchemaError) -> str:
    """Flatten pydantic errors into one readable line without echoing input values."""
    parts = []
    for error in exc.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in error["loc"]) or "body"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


async def parse_json_body(request: Request) -> object:
    """Decode the JSON body. Raises ValidationError on empty or malformed input."""
    raw_body = await request.body()
    if not raw_body.strip():
        raise ValidationError("Request body is required")
    try:
        return json.loads(raw_body)
    except (ValueError, json.JSONDecodeError):
        raise ValidationError("Invalid JSON body") from None


async def parse_body_as(request: Request, schema: type[T]) -> T:
    """Validate the JSON body against a schema; unknown and missing fields are rejected."""
    body = await parse_json_body(request)
    try:
        return TypeAdapter(schema).validate_python(body)
    except SchemaError as exc:
        raise ValidationError(_describe(exc)) from None


def optional_day(request: Request, name: str) -> date | None:
    value = request.query_params.get(name)
    if not value:
        return None
    return parse_day(value, name)
