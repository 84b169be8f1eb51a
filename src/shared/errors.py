"""Error types shared across blogcms."""

from __future__ import annotations


class BlogCmsError(Exception):
    """Base error for blogcms."""


class NotFoundError(BlogCmsError):
    """No page matches the requested slug (or it is not visible)."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Legal page '{slug}' not found")


class StorageError(BlogCmsError):
    """The storage backend could not read or write its data."""


class ConfigError(BlogCmsError):
    pass
