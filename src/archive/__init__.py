"""Archive pages — one editable record per content type listing.

Wiring::

    site = Site(TypeCatalog(base_url), JsonRecordStore(path))
    ArchivePagesPlugin(site).register(site.hooks)
    site.init()
    site.admin_request(operator)   # reconciles, then builds the menu
"""

from archive_pages.archive.index import AssociationIndex, AssociationReport
from archive_pages.archive.links import LinkResolver
from archive_pages.archive.menu import MenuSurfacer
from archive_pages.archive.plugin import ArchivePagesPlugin
from archive_pages.archive.reconciler import NullLocks, Reconciler, TypeLocks
from archive_pages.archive.registrar import (
    ARCHIVE_PAGE_KIND,
    ASSOCIATION_META_KEY,
    DEFAULT_CAPABILITY,
    build_archive_page_type,
    register_archive_page_type,
)

__all__ = [
    "ARCHIVE_PAGE_KIND",
    "ASSOCIATION_META_KEY",
    "DEFAULT_CAPABILITY",
    "ArchivePagesPlugin",
    "AssociationIndex",
    "AssociationReport",
    "LinkResolver",
    "MenuSurfacer",
    "NullLocks",
    "Reconciler",
    "TypeLocks",
    "build_archive_page_type",
    "register_archive_page_type",
]
