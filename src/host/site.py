"""Site facade — ties the catalog, store and hook registry together.

``Site`` plays the role of the host platform: it computes record
addresses, gates operator actions through each content type's
capability table, and fires lifecycle events on the hook registry.
"""

from __future__ import annotations

import logging
from typing import Any

from archive_pages.content.models import ContentType, Record
from archive_pages.content.store import RecordStore
from archive_pages.errors import PermissionDeniedError, RecordNotFoundError
from archive_pages.host.catalog import DEFAULT_POST_KIND, PAGE_KIND, TypeCatalog
from archive_pages.host.hooks import HookEvent, HookRegistry
from archive_pages.host.menu import AdminMenu
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ADMINISTRATOR_CAPABILITIES = frozenset(
    {
        "manage_options",
        "create_posts",
        "edit_posts",
        "edit_others_posts",
        "edit_published_posts",
        "edit_private_posts",
        "publish_posts",
        "read_private_posts",
        "delete_posts",
        "delete_others_posts",
        "delete_published_posts",
        "delete_private_posts",
    }
)

# Object-level permissions resolve to their plural counterpart when a
# type declares no explicit capability table.
_PRIMITIVE = {
    "edit_post": "edit_posts",
    "read_post": "read",
    "delete_post": "delete_posts",
}


class Operator(BaseModel):
    """The acting user of an administrative request."""

    name: str
    capabilities: set[str] = Field(default_factory=set)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities

    def can_on(self, content_type: ContentType, permission: str) -> bool:
        """Evaluate ``permission`` against a type's capability table.

        A permission mapped to None is disabled for every operator.
        """
        if permission in content_type.capabilities:
            required = content_type.capabilities[permission]
        else:
            required = _PRIMITIVE.get(permission, permission)
        if required is None:
            return False
        if required == "read":
            return True
        return self.can(required)


class Site:
    """The host platform as seen by archive page components."""

    def __init__(
        self,
        catalog: TypeCatalog,
        store: RecordStore,
        *,
        hooks: HookRegistry | None = None,
        admin_path: str = "/wp-admin",
        page_for_posts: int = 0,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.admin_path = "/" + admin_path.strip("/")
        self.page_for_posts = page_for_posts

    @property
    def base_url(self) -> str:
        return self.catalog.base_url

    # ── Lifecycle ────────────────────────────────────────────────

    def init(self) -> None:
        """Fire the process-start event."""
        self.hooks.do_action(HookEvent.INIT, self)

    def admin_request(self, operator: Operator) -> AdminMenu:
        """Run one administrative request: bootstrap, then build the menu."""
        self.hooks.do_action(HookEvent.ADMIN_BOOTSTRAP, operator)
        menu = AdminMenu()
        self.hooks.do_action(HookEvent.MENU_BUILD, operator, menu)
        return menu

    # ── Addresses ────────────────────────────────────────────────

    def admin_url(self, path: str = "") -> str:
        return f"{self.base_url}{self.admin_path}/{path.lstrip('/')}"

    def edit_address(self, record_id: int) -> str:
        return self.admin_url(f"post.php?post={record_id}&action=edit")

    def _default_permalink(self, record: Record, leave_name: bool) -> str:
        name = "%postname%" if leave_name else (record.slug or str(record.id))
        if record.kind in (DEFAULT_POST_KIND, PAGE_KIND):
            return f"{self.base_url}/{name}/"
        return f"{self.base_url}/{record.kind}/{name}/"

    def public_address(
        self, record_id: int, *, leave_name: bool = False, sample: bool = False
    ) -> str | None:
        """Return the public address of a record after link filters ran.

        Raises RecordNotFoundError if the id does not exist.
        """
        record = self.store.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        address = self._default_permalink(record, leave_name)
        return self.hooks.apply_filters(HookEvent.LINK_RESOLVE, address, record, leave_name, sample)

    # ── Operator actions ─────────────────────────────────────────

    def _require_permission(self, operator: Operator, kind: str, permission: str) -> None:
        content_type = self.catalog.get(kind)
        if content_type is None or not operator.can_on(content_type, permission):
            logger.info("Denied %s on %s for %s", permission, kind, operator.name)
            raise PermissionDeniedError(permission, kind)

    def create_record(self, operator: Operator, kind: str, **fields: Any) -> int:
        """Create a record through the normal content-creation path."""
        self._require_permission(operator, kind, "create_posts")
        return self.store.create(kind, fields, {})

    def edit_record(self, operator: Operator, record_id: int, **fields: Any) -> Record:
        record = self.store.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        self._require_permission(operator, record.kind, "edit_post")
        return self.store.update(record_id, **fields)

    def delete_record(self, operator: Operator, record_id: int) -> None:
        record = self.store.get(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        self._require_permission(operator, record.kind, "delete_post")
        self.store.delete(record_id)
