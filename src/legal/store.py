"""Legal page store — upsert-by-slug pages with a publish flag.

Admin callers see every page; public callers only see published ones.
Unpublished and missing pages look the same from the public side.
"""

from __future__ import annotations

import logging

from blogcms.legal.models import LegalPage, LegalPageInput
from blogcms.legal.storage import PageStorage
from blogcms.shared.errors import NotFoundError

logger = logging.getLogger(__name__)


class LegalPageStore:
    """Read/write access to the fixed catalog of legal pages.

    Every read goes to ``storage``; every write is saved before returning.
    """

    def __init__(self, storage: PageStorage) -> None:
        self._storage = storage

    def _find(self, slug: str, *, published_only: bool = False) -> LegalPage | None:
        if published_only:
            return self._storage.find_one(lambda p: p.slug == slug and p.published)
        return self._storage.find_one(lambda p: p.slug == slug)

    def _require(self, slug: str) -> LegalPage:
        page = self._find(slug)
        if page is None:
            raise NotFoundError(slug)
        return page

    # ── Admin reads ──────────────────────────────────────────────

    def get_all(self) -> list[LegalPage]:
        """Return every page ordered by slug."""
        return self._storage.find_all(order_by="slug")

    def get_by_slug(self, slug: str) -> LegalPage:
        """Return a page regardless of publish state.

        Raises NotFoundError if no page exists for ``slug``.
        """
        logger.debug("Admin lookup for legal page %s", slug)
        return self._require(slug)

    # ── Public reads ─────────────────────────────────────────────

    def get_public_all(self) -> list[LegalPage]:
        """Return published pages ordered by slug."""
        return self._storage.find_all(lambda p: p.published, order_by="slug")

    def get_public_by_slug(self, slug: str) -> LegalPage:
        """Return a published page.

        Raises NotFoundError if the page is missing or still a draft.
        """
        logger.debug("Public lookup for legal page %s", slug)
        page = self._find(slug, published_only=True)
        if page is None:
            raise NotFoundError(slug)
        return page

    # ── Writes ───────────────────────────────────────────────────

    def upsert(self, slug: str, data: LegalPageInput) -> LegalPage:
        """Create the page as a draft, or overwrite its title and body.

        The publish flag and creation time of an existing page are kept.
        """
        page = self._find(slug)
        if page is None:
            page = self._storage.create(slug=slug, title=data.title, body=data.body)
            logger.info("Creating legal page %s", slug)
        else:
            page.title = data.title
            page.body = data.body
            logger.info("Updating legal page %s", slug)
        return self._storage.save(page)

    def set_published(self, slug: str, published: bool) -> LegalPage:
        """Set the publish flag and save, even when it is unchanged.

        Raises NotFoundError if no page exists for ``slug``.
        """
        page = self._require(slug)
        page.published = published
        logger.info("Setting legal page %s published=%s", slug, published)
        return self._storage.save(page)
