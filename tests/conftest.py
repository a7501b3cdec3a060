"""Shared fixtures: a file-backed site with two custom content types."""

from pathlib import Path

import pytest
from archive_pages.archive.plugin import ArchivePagesPlugin
from archive_pages.content.models import ContentType
from archive_pages.content.store import JsonRecordStore
from archive_pages.host.catalog import TypeCatalog
from archive_pages.host.site import ADMINISTRATOR_CAPABILITIES, Operator, Site

BASE_URL = "https://example.test"


@pytest.fixture
def catalog() -> TypeCatalog:
    catalog = TypeCatalog(BASE_URL)
    catalog.register(ContentType(identifier="event", singular_label="Event"))
    catalog.register(ContentType(identifier="product", singular_label="Product"))
    return catalog


@pytest.fixture
def store(tmp_path: Path) -> JsonRecordStore:
    return JsonRecordStore(tmp_path)


@pytest.fixture
def site(catalog: TypeCatalog, store: JsonRecordStore) -> Site:
    return Site(catalog, store)


@pytest.fixture
def plugin(site: Site) -> ArchivePagesPlugin:
    """Plugin registered on the site, with the init event already fired."""
    plugin = ArchivePagesPlugin(site)
    plugin.register(site.hooks)
    site.init()
    return plugin


@pytest.fixture
def admin() -> Operator:
    return Operator(name="admin", capabilities=set(ADMINISTRATOR_CAPABILITIES))


@pytest.fixture
def editor() -> Operator:
    return Operator(name="editor", capabilities={"edit_posts", "publish_posts"})
