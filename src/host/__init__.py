"""Host platform layer — the collaborators archive pages plug into.

The type catalog, admin menu, hook registry and ``Site`` facade model
the parts of a content-management platform that the archive page
components consume.
"""

from archive_pages.host.catalog import (
    ATTACHMENT_KIND,
    DEFAULT_POST_KIND,
    PAGE_KIND,
    TypeCatalog,
)
from archive_pages.host.hooks import HookEvent, HookRegistry
from archive_pages.host.menu import AdminMenu, MenuEntry
from archive_pages.host.site import ADMINISTRATOR_CAPABILITIES, Operator, Site

__all__ = [
    "ADMINISTRATOR_CAPABILITIES",
    "ATTACHMENT_KIND",
    "DEFAULT_POST_KIND",
    "PAGE_KIND",
    "AdminMenu",
    "HookEvent",
    "HookRegistry",
    "MenuEntry",
    "Operator",
    "Site",
    "TypeCatalog",
]
