"""Legal page domain models — pure Pydantic v2 data types.

A legal page is a singleton content document (privacy policy, terms of
service) keyed by a slug from a closed enumeration.  Pages start as
drafts and only become publicly readable once explicitly published.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class LegalSlug(StrEnum):
    """Allowed natural keys for legal pages."""

    PRIVACY = "privacy"
    TERMS = "terms"


class LegalPageInput(BaseModel):
    """Title and body supplied to an upsert."""

    title: str
    body: str  # HTML


class LegalPage(BaseModel):
    """A single legal page.

    ``created_at`` and ``updated_at`` are managed by the storage layer:
    both are None until the page has been saved once.
    """

    slug: str
    title: str
    body: str
    published: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
