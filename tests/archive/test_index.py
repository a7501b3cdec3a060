"""Tests for the association index."""

import pytest
from archive_pages.archive.index import AssociationIndex
from archive_pages.archive.registrar import ARCHIVE_PAGE_KIND, ASSOCIATION_META_KEY
from archive_pages.errors import ArchivePageNotFoundError
from archive_pages.host.site import Site


def _add_page(site: Site, type_id: str | None, title: str = "") -> int:
    meta = {ASSOCIATION_META_KEY: type_id} if type_id is not None else {}
    return site.store.create(ARCHIVE_PAGE_KIND, {"title": title}, meta)


class TestFindArchivePage:
    def test_none_when_absent(self, site: Site):
        assert AssociationIndex(site).find_archive_page("event") is None

    def test_finds_associated_page(self, site: Site):
        _add_page(site, "product")
        page_id = _add_page(site, "event")
        page = AssociationIndex(site).find_archive_page("event")
        assert page is not None
        assert page.id == page_id

    def test_ignores_other_kinds(self, site: Site):
        site.store.create("page", {}, {ASSOCIATION_META_KEY: "event"})
        assert AssociationIndex(site).find_archive_page("event") is None

    def test_duplicates_resolve_to_first_in_store_order(self, site: Site):
        first = _add_page(site, "event", "First")
        _add_page(site, "event", "Second")
        page = AssociationIndex(site).find_archive_page("event")
        assert page is not None
        assert page.id == first
        assert page.title == "First"


class TestEditLink:
    def test_returns_edit_address(self, site: Site):
        page_id = _add_page(site, "event")
        assert AssociationIndex(site).edit_link("event") == site.edit_address(page_id)

    def test_missing_raises_not_found(self, site: Site):
        with pytest.raises(ArchivePageNotFoundError) as exc_info:
            AssociationIndex(site).edit_link("event")
        assert exc_info.value.type_id == "event"


class TestAudit:
    def test_clean(self, site: Site):
        _add_page(site, "event")
        report = AssociationIndex(site).audit(["event"])
        assert report.ok

    def test_reports_duplicates(self, site: Site):
        a = _add_page(site, "event")
        b = _add_page(site, "event")
        report = AssociationIndex(site).audit(["event"])
        assert report.duplicates == {"event": [a, b]}
        assert not report.ok

    def test_reports_dangling(self, site: Site):
        page_id = _add_page(site, "event")
        site.catalog.unregister("event")
        report = AssociationIndex(site).audit([])
        assert report.dangling == {page_id: "event"}

    def test_reports_unassociated(self, site: Site):
        page_id = _add_page(site, None)
        assert AssociationIndex(site).audit([]).unassociated == [page_id]

    def test_reports_missing(self, site: Site):
        _add_page(site, "event")
        report = AssociationIndex(site).audit(["event", "product"])
        assert report.missing == ["product"]
