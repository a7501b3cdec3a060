"""Association index — content type id to archive page lookups."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from archive_pages.archive.registrar import ARCHIVE_PAGE_KIND, ASSOCIATION_META_KEY
from archive_pages.content.models import Record
from archive_pages.errors import ArchivePageNotFoundError
from archive_pages.host.site import Site
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AssociationReport(BaseModel):
    """Consistency findings over all archive pages."""

    duplicates: dict[str, list[int]] = Field(default_factory=dict)
    dangling: dict[int, str] = Field(default_factory=dict)
    unassociated: list[int] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.duplicates or self.dangling or self.unassociated or self.missing)


class AssociationIndex:
    """Derives the type -> archive page mapping from record metadata."""

    def __init__(self, site: Site) -> None:
        self.site = site

    def find_archive_page(self, type_id: str) -> Record | None:
        """Return the archive page associated with ``type_id``, if any.

        When several pages carry the same association, the first in the
        store's default ordering wins.
        """
        matches = self.site.store.find(ARCHIVE_PAGE_KIND, {ASSOCIATION_META_KEY: type_id})
        if not matches:
            return None
        if len(matches) > 1:
            logger.debug(
                "%d archive pages for %s, using record %d",
                len(matches), type_id, matches[0].id,
            )
        return matches[0]

    def edit_link(self, type_id: str) -> str:
        """Return the admin edit address of the type's archive page.

        Raises ArchivePageNotFoundError when no archive page exists.
        """
        page = self.find_archive_page(type_id)
        if page is None:
            raise ArchivePageNotFoundError(type_id)
        return self.site.edit_address(page.id)

    def audit(self, eligible_type_ids: Iterable[str]) -> AssociationReport:
        """Report duplicate, dangling and missing associations."""
        by_type: dict[str, list[int]] = defaultdict(list)
        report = AssociationReport()
        for page in self.site.store.list(ARCHIVE_PAGE_KIND):
            type_id = page.meta.get(ASSOCIATION_META_KEY)
            if not type_id:
                report.unassociated.append(page.id)
                continue
            by_type[type_id].append(page.id)
            if not self.site.catalog.exists(type_id):
                report.dangling[page.id] = type_id
        report.duplicates = {t: ids for t, ids in by_type.items() if len(ids) > 1}
        report.missing = [t for t in eligible_type_ids if t not in by_type]
        return report
