"""Reconciler — creates the archive pages that eligible types are missing.

Runs on every administrative bootstrap. Check-then-create for a type is
serialized through a per-type lock so that concurrent passes in one
process cannot create two archive pages for the same type.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterable, Iterator

from archive_pages.archive.index import AssociationIndex
from archive_pages.archive.registrar import ARCHIVE_PAGE_KIND, ASSOCIATION_META_KEY
from archive_pages.content.models import ContentType, Record, RecordStatus
from archive_pages.host.catalog import ATTACHMENT_KIND, PAGE_KIND
from archive_pages.host.site import Site

logger = logging.getLogger(__name__)

EXCLUDED_TYPES = frozenset({ARCHIVE_PAGE_KIND, PAGE_KIND, ATTACHMENT_KIND})


class TypeLocks:
    """One mutex per content type id, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    @contextlib.contextmanager
    def hold(self, type_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(type_id, threading.Lock())
        with lock:
            yield


class NullLocks:
    """No locking: concurrent passes may both create a page for a type."""

    @contextlib.contextmanager
    def hold(self, type_id: str) -> Iterator[None]:
        yield


class Reconciler:
    """Ensures every eligible content type has an archive page."""

    def __init__(
        self,
        site: Site,
        index: AssociationIndex | None = None,
        *,
        excluded: Iterable[str] = (),
        locks: TypeLocks | NullLocks | None = None,
    ) -> None:
        self.site = site
        self.index = index if index is not None else AssociationIndex(site)
        self.excluded = EXCLUDED_TYPES | frozenset(excluded)
        self.locks = locks if locks is not None else TypeLocks()

    def eligible_types(self) -> list[ContentType]:
        """Public catalog types minus the excluded kinds, in catalog order."""
        return [
            t for t in self.site.catalog.list_public_types()
            if t.identifier not in self.excluded
        ]

    def reconcile(self) -> list[Record]:
        """Create missing archive pages and return the ones created.

        Existing pages are never updated or deleted.
        """
        created: list[Record] = []
        for content_type in self.eligible_types():
            page = self._ensure(content_type)
            if page is not None:
                created.append(page)
        if created:
            logger.info("Created %d archive page(s)", len(created))
        return created

    def _ensure(self, content_type: ContentType) -> Record | None:
        type_id = content_type.identifier
        with self.locks.hold(type_id):
            existing = self.index.find_archive_page(type_id)
            if existing is not None:
                logger.debug("Archive page %d already covers %s", existing.id, type_id)
                return None
            record_id = self.site.store.create(
                ARCHIVE_PAGE_KIND,
                {
                    "title": content_type.singular_label,
                    "status": RecordStatus.PUBLISHED,
                    "slug": type_id,
                },
                {ASSOCIATION_META_KEY: type_id},
            )
        logger.info("Created archive page %d for %s", record_id, type_id)
        return self.site.store.get(record_id)
