"""Wires archive page components into a site's hook registry."""

from __future__ import annotations

import logging

from archive_pages.archive.index import AssociationIndex
from archive_pages.archive.links import LinkResolver
from archive_pages.archive.menu import MenuSurfacer
from archive_pages.archive.reconciler import NullLocks, Reconciler, TypeLocks
from archive_pages.archive.registrar import DEFAULT_CAPABILITY, register_archive_page_type
from archive_pages.content.models import Record
from archive_pages.host.hooks import HookEvent, HookRegistry
from archive_pages.host.menu import AdminMenu
from archive_pages.host.site import Operator, Site
from archive_pages.integrations.github import GitHubUpdateChecker, UpdateInfo

logger = logging.getLogger(__name__)


class ArchivePagesPlugin:
    """Builds the archive page components for a site and registers them.

    Args:
        site: Host site whose catalog and store the components use.
        capability: Capability required to edit archive pages.
        excluded_types: Extra type ids never given an archive page.
        locks: Per-type lock provider for the reconciler.
        updater: Optional update checker run on admin bootstrap.
        current_version: Version compared against by the updater.
    """

    def __init__(
        self,
        site: Site,
        *,
        capability: str = DEFAULT_CAPABILITY,
        excluded_types: list[str] | None = None,
        locks: TypeLocks | NullLocks | None = None,
        updater: GitHubUpdateChecker | None = None,
        current_version: str = "",
    ) -> None:
        self.site = site
        self.capability = capability
        self.index = AssociationIndex(site)
        self.reconciler = Reconciler(
            site, self.index, excluded=excluded_types or (), locks=locks
        )
        self.resolver = LinkResolver(site)
        self.menu = MenuSurfacer(self.reconciler, self.index, capability)
        self.updater = updater
        self.current_version = current_version
        self.last_update: UpdateInfo | None = None

    def register(self, hooks: HookRegistry) -> None:
        hooks.add_action(HookEvent.INIT, self.on_init)
        hooks.add_action(HookEvent.ADMIN_BOOTSTRAP, self.on_admin_bootstrap)
        hooks.add_action(HookEvent.MENU_BUILD, self.on_menu_build)
        hooks.add_filter(HookEvent.LINK_RESOLVE, self.on_link_resolve)

    # ── Handlers ─────────────────────────────────────────────────

    def on_init(self, site: Site) -> None:
        register_archive_page_type(site.catalog, self.capability)

    def on_admin_bootstrap(self, operator: Operator) -> None:
        self.reconciler.reconcile()
        if self.updater is not None:
            self.last_update = self.updater.check_for_update(self.current_version)
            if self.last_update is not None:
                logger.info("Update available: %s", self.last_update.version)

    def on_menu_build(self, operator: Operator, menu: AdminMenu) -> None:
        self.menu.surface(operator, menu)

    def on_link_resolve(
        self, address: str | None, record: Record, leave_name: bool, sample: bool
    ) -> str | None:
        return self.resolver.resolve(address, record, leave_name, sample)
