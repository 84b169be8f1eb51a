"""Boundary validation for legal page input.

Callers check slugs and payloads here before reaching the store.  Each
validator returns ``Ok(value)`` or ``Err(reason)`` instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from blogcms.legal.models import LegalPageInput, LegalSlug

T = TypeVar("T")

MIN_TITLE_LENGTH = 2
MAX_TITLE_LENGTH = 255
MIN_BODY_LENGTH = 10

_TRUTHY = {"true", "yes", "1", "on"}
_FALSY = {"false", "no", "0", "off"}


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    reason: str


Result = Ok[T] | Err


def validate_slug(raw: object) -> Result[LegalSlug]:
    """Check that ``raw`` names one of the allowed legal pages."""
    if not isinstance(raw, str):
        return Err("slug must be a string")
    candidate = raw.strip().lower()
    try:
        return Ok(LegalSlug(candidate))
    except ValueError:
        allowed = ", ".join(s.value for s in LegalSlug)
        return Err(f"unknown legal page '{raw}' (expected one of: {allowed})")


def validate_page_input(title: object, body: object) -> Result[LegalPageInput]:
    """Check an upsert payload.

    Title needs 2 to 255 characters and body at least 10.
    """
    if not isinstance(title, str):
        return Err("title must be a string")
    if not isinstance(body, str):
        return Err("body must be a string")
    if len(title) < MIN_TITLE_LENGTH:
        return Err(f"title must be at least {MIN_TITLE_LENGTH} characters")
    if len(title) > MAX_TITLE_LENGTH:
        return Err(f"title must be at most {MAX_TITLE_LENGTH} characters")
    if len(body) < MIN_BODY_LENGTH:
        return Err(f"body must be at least {MIN_BODY_LENGTH} characters")
    return Ok(LegalPageInput(title=title, body=body))


def validate_published(raw: object) -> Result[bool]:
    if isinstance(raw, bool):
        return Ok(raw)
    if isinstance(raw, str):
        value = raw.strip().lower()
        if value in _TRUTHY:
            return Ok(True)
        if value in _FALSY:
            return Ok(False)
    return Err(f"published must be a boolean, got {raw!r}")
