"""Type catalog — registered content types and their listing addresses."""

from __future__ import annotations

import logging

from archive_pages.content.models import ContentType

logger = logging.getLogger(__name__)

DEFAULT_POST_KIND = "post"
PAGE_KIND = "page"
ATTACHMENT_KIND = "attachment"


def builtin_types() -> list[ContentType]:
    """Content types every site starts with."""
    return [
        ContentType(identifier=DEFAULT_POST_KIND, singular_label="Post", plural_label="Posts"),
        ContentType(
            identifier=PAGE_KIND,
            singular_label="Page",
            plural_label="Pages",
            has_archive=False,
            hierarchical=True,
        ),
        ContentType(
            identifier=ATTACHMENT_KIND,
            singular_label="Media",
            plural_label="Media",
            has_archive=False,
        ),
    ]


class TypeCatalog:
    """Registry of content types, read-only to archive page components.

    Types are kept in registration order; re-registering an identifier
    replaces the earlier definition in place.
    """

    def __init__(self, base_url: str, *, include_builtins: bool = True) -> None:
        self.base_url = base_url.rstrip("/")
        self._types: dict[str, ContentType] = {}
        if include_builtins:
            for content_type in builtin_types():
                self.register(content_type)

    def register(self, content_type: ContentType) -> None:
        if content_type.identifier in self._types:
            logger.debug("Replacing content type %s", content_type.identifier)
        self._types[content_type.identifier] = content_type

    def unregister(self, type_id: str) -> None:
        self._types.pop(type_id, None)

    def get(self, type_id: str) -> ContentType | None:
        return self._types.get(type_id)

    def exists(self, type_id: str) -> bool:
        return type_id in self._types

    def list_public_types(self) -> list[ContentType]:
        return [t for t in self._types.values() if t.public]

    def get_label(self, type_id: str) -> str:
        """Return the singular label of a type.

        Raises KeyError if the type is not registered.
        """
        return self._types[type_id].singular_label

    def archive_link(self, type_id: str | None) -> str | None:
        """Return the native listing address for a content type.

        The default post type lists on the site home. Unregistered types
        and types without an archive have no listing address (None).
        """
        if not type_id:
            return None
        content_type = self._types.get(type_id)
        if content_type is None:
            return None
        if type_id == DEFAULT_POST_KIND:
            return f"{self.base_url}/"
        if not content_type.has_archive:
            return None
        slug = content_type.archive_slug or type_id
        return f"{self.base_url}/{slug}/"
