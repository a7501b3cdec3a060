"""Tests for JsonRecordStore — JSON-backed record persistence."""

import json
from pathlib import Path

import pytest
from archive_pages.content.models import RecordStatus
from archive_pages.content.store import STORE_FILENAME, JsonRecordStore
from archive_pages.errors import AssociationImmutableError, RecordNotFoundError


class TestCreate:
    def test_assigns_increasing_ids(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        first = store.create("page", {"title": "About"}, {})
        second = store.create("page", {"title": "Blog"}, {})
        assert (first, second) == (1, 2)

    def test_stores_fields_and_metadata(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create(
            "archive_page",
            {"title": "Event", "status": RecordStatus.PUBLISHED, "slug": "event"},
            {"_post_type_archive": "event"},
        )
        record = store.get(record_id)
        assert record is not None
        assert record.kind == "archive_page"
        assert record.title == "Event"
        assert record.status == RecordStatus.PUBLISHED
        assert record.meta == {"_post_type_archive": "event"}

    def test_rejects_unknown_fields(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        with pytest.raises(ValueError):
            store.create("page", {"id": 99}, {})

    def test_persists_to_disk(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        store.create("page", {"slug": "about"}, {})

        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert data["next_id"] == 2
        assert data["records"][0]["slug"] == "about"

    def test_ids_continue_after_reload(self, tmp_path: Path):
        JsonRecordStore(tmp_path).create("page", {}, {})
        reloaded = JsonRecordStore(tmp_path)
        assert reloaded.create("page", {}, {}) == 2


class TestFind:
    def test_filters_by_kind_and_meta(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        store.create("archive_page", {}, {"_post_type_archive": "event"})
        store.create("archive_page", {}, {"_post_type_archive": "product"})
        store.create("page", {}, {"_post_type_archive": "event"})

        results = store.find("archive_page", {"_post_type_archive": "event"})
        assert [r.id for r in results] == [1]

    def test_returns_matches_in_id_order(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        for _ in range(3):
            store.create("archive_page", {}, {"_post_type_archive": "event"})
        results = store.find("archive_page", {"_post_type_archive": "event"})
        assert [r.id for r in results] == [1, 2, 3]

    def test_empty_filter_matches_all_of_kind(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        store.create("page", {}, {})
        store.create("page", {}, {"x": "y"})
        assert len(store.find("page", {})) == 2

    def test_no_match(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        assert store.find("archive_page", {"_post_type_archive": "event"}) == []


class TestGet:
    def test_missing_returns_none(self, tmp_path: Path):
        assert JsonRecordStore(tmp_path).get(42) is None

    def test_returns_a_copy(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("page", {"title": "Original"}, {})
        record = store.get(record_id)
        assert record is not None
        record.title = "Changed locally"
        record.meta["k"] = "v"

        fresh = store.get(record_id)
        assert fresh is not None
        assert fresh.title == "Original"
        assert fresh.meta == {}


class TestUpdate:
    def test_updates_editable_fields(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("page", {"title": "Old"}, {})
        before = store.get(record_id)
        assert before is not None

        updated = store.update(record_id, title="New", excerpt="Short", status="private")
        assert updated.title == "New"
        assert updated.excerpt == "Short"
        assert updated.status is RecordStatus.PRIVATE
        assert updated.modified_at >= before.modified_at

    def test_rejects_meta(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("archive_page", {}, {"_post_type_archive": "event"})
        with pytest.raises(ValueError):
            store.update(record_id, meta={"_post_type_archive": "product"})

    def test_missing_raises(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        with pytest.raises(RecordNotFoundError):
            store.update(7, title="x")

    def test_not_found_is_a_key_error(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        with pytest.raises(KeyError):
            store.update(7, title="x")


class TestAddMeta:
    def test_adds_new_key(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("archive_page", {}, {})
        store.add_meta(record_id, "_post_type_archive", "event")
        record = store.get(record_id)
        assert record is not None
        assert record.meta["_post_type_archive"] == "event"

    def test_same_value_is_noop(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("archive_page", {}, {"_post_type_archive": "event"})
        store.add_meta(record_id, "_post_type_archive", "event")

    def test_cannot_rewrite_existing_key(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("archive_page", {}, {"_post_type_archive": "event"})
        with pytest.raises(AssociationImmutableError):
            store.add_meta(record_id, "_post_type_archive", "product")
        record = store.get(record_id)
        assert record is not None
        assert record.meta["_post_type_archive"] == "event"


class TestDelete:
    def test_removes_record(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        record_id = store.create("page", {}, {})
        store.delete(record_id)
        assert store.get(record_id) is None
        assert store.list() == []

    def test_missing_raises(self, tmp_path: Path):
        with pytest.raises(RecordNotFoundError):
            JsonRecordStore(tmp_path).delete(1)


class TestList:
    def test_filters_by_kind(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        store.create("page", {}, {})
        store.create("archive_page", {}, {})
        assert [r.kind for r in store.list("archive_page")] == ["archive_page"]
        assert len(store.list()) == 2


class TestCorruptStore:
    def test_starts_fresh(self, tmp_path: Path):
        (tmp_path / STORE_FILENAME).write_text("{not json", encoding="utf-8")
        store = JsonRecordStore(tmp_path)
        assert store.list() == []
        assert store.create("page", {}, {}) == 1


class TestSharedStoreFile:
    def test_writes_from_both_instances_survive(self, tmp_path: Path):
        first = JsonRecordStore(tmp_path)
        second = JsonRecordStore(tmp_path)

        for kind in ("post", "event", "product"):
            first.create("archive_page", {"slug": kind}, {"_post_type_archive": kind})
        second.create("page", {"slug": "about"}, {})

        reopened = JsonRecordStore(tmp_path)
        assert len(reopened.list("archive_page")) == 3
        assert len(reopened.list("page")) == 1

    def test_ids_are_not_reused_across_instances(self, tmp_path: Path):
        first = JsonRecordStore(tmp_path)
        second = JsonRecordStore(tmp_path)
        assert first.create("page", {}, {}) == 1
        assert second.create("page", {}, {}) == 2

    def test_reads_see_other_instance_writes(self, tmp_path: Path):
        reader = JsonRecordStore(tmp_path)
        writer = JsonRecordStore(tmp_path)
        record_id = writer.create("archive_page", {"slug": "event"}, {"_post_type_archive": "event"})

        assert reader.get(record_id) is not None
        assert [r.id for r in reader.find("archive_page", {"_post_type_archive": "event"})] == [record_id]

    def test_no_temp_files_left_behind(self, tmp_path: Path):
        store = JsonRecordStore(tmp_path)
        store.create("page", {}, {})
        store.update(1, title="About")
        assert [p.name for p in tmp_path.iterdir()] == [STORE_FILENAME]
