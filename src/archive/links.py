"""Link resolver — points archive pages at their type's real listing."""

from __future__ import annotations

import logging

from archive_pages.archive.registrar import ARCHIVE_PAGE_KIND, ASSOCIATION_META_KEY
from archive_pages.content.models import Record
from archive_pages.host.catalog import DEFAULT_POST_KIND, PAGE_KIND
from archive_pages.host.site import Site

logger = logging.getLogger(__name__)


class LinkResolver:
    """Filter for record public addresses.

    Archive page addresses are replaced by the listing address of the
    associated content type; every other record passes through untouched.
    """

    def __init__(self, site: Site) -> None:
        self.site = site

    def resolve(
        self,
        address: str | None,
        record: Record,
        leave_name: bool = False,
        sample: bool = False,
    ) -> str | None:
        """Return the public address for ``record``.

        Args:
            address: Address computed by the host so far.
            record: The record being linked.
            leave_name: Keep the name placeholder (unused for archive pages).
            sample: Whether this is a preview sample (unused for archive pages).

        Returns:
            ``address`` for ordinary records. For archive pages, the
            listing address of the associated type as the catalog reports
            it, which is None for a missing or unregistered type.
        """
        if record.kind != ARCHIVE_PAGE_KIND:
            return address

        type_id = record.meta.get(ASSOCIATION_META_KEY)
        if type_id == DEFAULT_POST_KIND:
            return self._posts_page_address()
        if type_id is None:
            logger.debug("Archive page %d has no association", record.id)
        return self.site.catalog.archive_link(type_id)

    def _posts_page_address(self) -> str | None:
        posts_page = self.site.page_for_posts
        record = self.site.store.get(posts_page) if posts_page else None
        if record is not None and record.kind == PAGE_KIND:
            return self.site.public_address(record.id)
        if record is not None:
            logger.warning(
                "Posts page %d is a %r record, not a page; using the post listing",
                record.id,
                record.kind,
            )
        return self.site.catalog.archive_link(DEFAULT_POST_KIND)
