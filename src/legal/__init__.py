"""Legal pages — singleton content documents with a publish flag.

Exposes the page models, the storage backends, the store itself, and the
boundary validators used before privileged writes.
"""

from blogcms.legal.models import LegalPage, LegalPageInput, LegalSlug
from blogcms.legal.storage import (
    InMemoryPageStorage,
    JsonPageStorage,
    PageStorage,
    build_storage,
)
from blogcms.legal.store import LegalPageStore
from blogcms.legal.validation import (
    Err,
    Ok,
    validate_page_input,
    validate_published,
    validate_slug,
)

__all__ = [
    "Err",
    "InMemoryPageStorage",
    "JsonPageStorage",
    "LegalPage",
    "LegalPageInput",
    "LegalPageStore",
    "LegalSlug",
    "Ok",
    "PageStorage",
    "build_storage",
    "validate_page_input",
    "validate_published",
    "validate_slug",
]
