"""Declares the archive page content type and its capability table."""

from __future__ import annotations

from archive_pages.content.models import ContentType
from archive_pages.host.catalog import TypeCatalog

ARCHIVE_PAGE_KIND = "archive_page"

# Meta key connecting an archive page to its content type.
ASSOCIATION_META_KEY = "_post_type_archive"

DEFAULT_CAPABILITY = "manage_options"

_EDIT_PERMISSIONS = (
    "edit_post",
    "read_post",
    "edit_posts",
    "edit_others_posts",
    "publish_posts",
    "read_private_posts",
    "edit_private_posts",
    "edit_published_posts",
)

# Disabled for everyone, administrators included: the reconciler is the
# only creation path and archive pages are never deleted.
_DISABLED_PERMISSIONS = (
    "delete_post",
    "delete_posts",
    "delete_private_posts",
    "delete_published_posts",
    "delete_others_posts",
    "create_posts",
)


def capability_table(capability: str = DEFAULT_CAPABILITY) -> dict[str, str | None]:
    table: dict[str, str | None] = {p: capability for p in _EDIT_PERMISSIONS}
    table.update({p: None for p in _DISABLED_PERMISSIONS})
    return table


def build_archive_page_type(capability: str = DEFAULT_CAPABILITY) -> ContentType:
    return ContentType(
        identifier=ARCHIVE_PAGE_KIND,
        singular_label="Archive Page",
        plural_label="Archive Pages",
        public=True,
        has_archive=False,
        show_ui=False,
        hierarchical=False,
        supports=["title", "editor", "author", "thumbnail", "excerpt", "comments"],
        capabilities=capability_table(capability),
    )


def register_archive_page_type(
    catalog: TypeCatalog, capability: str = DEFAULT_CAPABILITY
) -> ContentType:
    content_type = build_archive_page_type(capability)
    catalog.register(content_type)
    return content_type
