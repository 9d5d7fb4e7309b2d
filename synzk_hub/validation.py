"""
Parse-or-reject for swap creation payloads.

Client mistakes are expected input, so they come back as a failed
BodyParseResult instead of an exception.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .models import SwapBody


@dataclass(frozen=True)
class BodyParseResult:
    """Either a validated body or the reason it was rejected."""

    body: Optional[SwapBody] = None
    details: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.body is not None


def describe_error(exc: ValidationError) -> str:
    """Render the first validation error as 'field: message'."""
    errors = exc.errors()
    if not errors:
        return "invalid request body"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def parse_swap_body(raw: Any) -> BodyParseResult:
    """Validate and normalize a raw (decoded JSON) swap payload."""
    if not isinstance(raw, dict):
        return BodyParseResult(details="request body must be a JSON object")

    try:
        body = SwapBody.model_validate(raw)
    except ValidationError as e:
        return BodyParseResult(details=describe_error(e))

    return BodyParseResult(body=body)
