"""Storage collaborators for legal pages.

``PageStorage`` is the persistence interface the store consumes.  Two
backends implement it: an in-memory dict (tests, throwaway sessions) and
a JSON file holding every page, reloaded on each read and rewritten on
each save.  Both stamp ``created_at``/``updated_at`` on save and keep at
most one row per slug.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from blogcms.legal.models import LegalPage
from blogcms.shared.errors import ConfigError, StorageError
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from blogcms.config import StorageConfig

logger = logging.getLogger(__name__)

STORE_FILENAME = ".blogcms-legal-pages.json"

Predicate = Callable[[LegalPage], bool]


class PageStorage(Protocol):
    """Generic persistence interface for legal pages."""

    def find_one(self, predicate: Predicate) -> LegalPage | None:
        ...

    def find_all(
        self,
        predicate: Predicate | None = None,
        order_by: str = "slug",
    ) -> list[LegalPage]:
        ...

    def create(self, **fields: Any) -> LegalPage:
        ...

    def save(self, page: LegalPage) -> LegalPage:
        ...


def _stamp(page: LegalPage, previous: LegalPage | None) -> LegalPage:
    """Return a copy of ``page`` with storage-managed timestamps applied."""
    now = datetime.now(tz=UTC)
    created_at = page.created_at
    if previous is not None and previous.created_at is not None:
        created_at = previous.created_at
    return page.model_copy(
        update={"created_at": created_at or now, "updated_at": now},
        deep=True,
    )


def _select(
    pages: list[LegalPage],
    predicate: Predicate | None,
    order_by: str,
) -> list[LegalPage]:
    if order_by not in LegalPage.model_fields:
        raise ValueError(f"Cannot order legal pages by unknown field: {order_by}")
    matched = [p for p in pages if predicate is None or predicate(p)]
    return sorted(matched, key=lambda p: getattr(p, order_by))


class InMemoryPageStorage:
    """Dict-backed storage; hands out copies so callers never alias rows."""

    def __init__(self, pages: list[LegalPage] | None = None) -> None:
        self._rows: dict[str, LegalPage] = {}
        for page in pages or []:
            self.save(page)

    def find_one(self, predicate: Predicate) -> LegalPage | None:
        for row in self._rows.values():
            if predicate(row):
                return row.model_copy(deep=True)
        return None

    def find_all(
        self,
        predicate: Predicate | None = None,
        order_by: str = "slug",
    ) -> list[LegalPage]:
        rows = _select(list(self._rows.values()), predicate, order_by)
        return [r.model_copy(deep=True) for r in rows]

    def create(self, **fields: Any) -> LegalPage:
        return LegalPage(**fields)

    def save(self, page: LegalPage) -> LegalPage:
        row = _stamp(page, self._rows.get(page.slug))
        self._rows[row.slug] = row
        return row.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._rows)


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    pages: list[LegalPage] = Field(default_factory=list)


class JsonPageStorage:
    """JSON-file storage for legal pages.

    The file is the source of truth: every call reads it back, so several
    processes pointed at the same directory see each other's writes.
    """

    def __init__(self, directory: Path) -> None:
        self._path = Path(directory) / STORE_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except ValueError as exc:  # JSONDecodeError, UnicodeDecodeError, ValidationError
            logger.error("Corrupt legal page store at %s", self._path)
            raise StorageError(f"Corrupt legal page store at {self._path}") from exc

    def _write(self, data: _StoreData) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    # ── PageStorage ──────────────────────────────────────────────

    def find_one(self, predicate: Predicate) -> LegalPage | None:
        for page in self._load().pages:
            if predicate(page):
                return page
        return None

    def find_all(
        self,
        predicate: Predicate | None = None,
        order_by: str = "slug",
    ) -> list[LegalPage]:
        return _select(self._load().pages, predicate, order_by)

    def create(self, **fields: Any) -> LegalPage:
        return LegalPage(**fields)

    def save(self, page: LegalPage) -> LegalPage:
        data = self._load()
        previous = next((p for p in data.pages if p.slug == page.slug), None)
        row = _stamp(page, previous)
        data.pages = [p for p in data.pages if p.slug != row.slug]
        data.pages.append(row)
        self._write(data)
        logger.debug("Wrote %d legal page(s) to %s", len(data.pages), self._path)
        return row


def build_storage(config: StorageConfig) -> PageStorage:
    """Instantiate the storage backend named in ``config``."""
    if config.backend == "memory":
        return InMemoryPageStorage()
    if config.backend == "json":
        return JsonPageStorage(Path(config.directory).expanduser())
    raise ConfigError(f"Unknown storage backend: {config.backend}")
