"""Adds an "<Label> Archive Page" admin entry under each eligible type."""

from __future__ import annotations

import logging

from archive_pages.archive.index import AssociationIndex
from archive_pages.archive.reconciler import Reconciler
from archive_pages.errors import ArchivePageNotFoundError
from archive_pages.host.catalog import DEFAULT_POST_KIND
from archive_pages.host.menu import AdminMenu
from archive_pages.host.site import Operator

logger = logging.getLogger(__name__)


def parent_slug(type_id: str) -> str:
    """Navigation group holding a content type's admin screens."""
    if type_id == DEFAULT_POST_KIND:
        return "edit.php"
    return f"edit.php?post_type={type_id}"


class MenuSurfacer:
    """Adds one edit entry per eligible type for operators holding the capability."""

    def __init__(self, reconciler: Reconciler, index: AssociationIndex, capability: str) -> None:
        self.reconciler = reconciler
        self.index = index
        self.capability = capability

    def surface(self, operator: Operator, menu: AdminMenu) -> None:
        if not operator.can(self.capability):
            return
        for content_type in self.reconciler.eligible_types():
            try:
                target = self.index.edit_link(content_type.identifier)
            except ArchivePageNotFoundError:
                logger.warning("No archive page to link for %s", content_type.identifier)
                continue
            menu.add_entry(
                parent_slug(content_type.identifier),
                f"{content_type.singular_label} Archive Page",
                self.capability,
                target,
            )
