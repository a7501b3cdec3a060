"""Record persistence: the abstract store contract and a JSON-backed store.

``JsonRecordStore`` persists all records in a single JSON file, re-read
before every operation and atomically replaced after every write.
Records are returned in ascending id order, which is the store's default
ordering for ``find``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from archive_pages.content.models import Record, RecordStatus
from archive_pages.errors import AssociationImmutableError, RecordNotFoundError
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

STORE_FILENAME = ".archive-pages-store.json"

# Fields an operator may change after creation.
EDITABLE_FIELDS = frozenset(
    {"title", "body", "excerpt", "featured_image", "author", "status", "slug"}
)

# Alias to avoid shadowing by RecordStore.list method
_list = list


class RecordStore(ABC):
    """Generic content-record persistence used as a keyed store."""

    @abstractmethod
    def create(self, kind: str, fields: dict[str, Any], metadata: dict[str, str]) -> int:
        """Insert a record and return its store-assigned id."""

    @abstractmethod
    def find(self, kind: str, meta_filter: dict[str, str]) -> _list[Record]:
        """Return records of ``kind`` whose metadata matches every filter pair."""

    @abstractmethod
    def get(self, record_id: int) -> Record | None:
        """Return a record by id, or None if not found."""

    @abstractmethod
    def update(self, record_id: int, **fields: Any) -> Record:
        """Change editable fields of an existing record."""

    @abstractmethod
    def delete(self, record_id: int) -> None:
        """Remove a record."""

    @abstractmethod
    def add_meta(self, record_id: int, key: str, value: str) -> None:
        """Attach a metadata pair; existing keys cannot be rewritten."""

    @abstractmethod
    def list(self, kind: str | None = None) -> _list[Record]:
        """Return all records, optionally filtered by kind."""


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    next_id: int = 1
    records: _list[Record] = Field(default_factory=_list)


class JsonRecordStore(RecordStore):
    """JSON-backed record store.

    Every operation starts from the current file contents, so several
    instances (or processes) sharing one directory see each other's
    records. Writes go through a temp file and ``os.replace``; readers
    never observe a half-written store. Mutations are serialized with an
    in-process lock so concurrent writers in one process never hand out
    the same id.
    """

    def __init__(self, output_dir: Path) -> None:
        self._path = output_dir / STORE_FILENAME
        self._lock = threading.RLock()
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt record store at %s, starting fresh", self._path)
            return _StoreData()

    def _refresh(self) -> None:
        """Pick up writes made through other instances. Caller holds the lock."""
        self._data = self._load()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f"{STORE_FILENAME}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(self._data.model_dump_json(indent=2))
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _find_by_id(self, record_id: int) -> Record | None:
        for record in self._data.records:
            if record.id == record_id:
                return record
        return None

    def _require(self, record_id: int) -> Record:
        record = self._find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    # ── Write operations ─────────────────────────────────────────

    def create(self, kind: str, fields: dict[str, Any], metadata: dict[str, str]) -> int:
        """Insert a new record of ``kind`` with the given fields and metadata.

        Raises ValueError if ``fields`` names something other than an
        editable field.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")
        with self._lock:
            self._refresh()
            record_id = self._data.next_id
            record = Record(id=record_id, kind=kind, meta=dict(metadata), **fields)
            self._data.records.append(record)
            self._data.next_id = record_id + 1
            self._save()
        logger.debug("Created %s record %d", kind, record_id)
        return record_id

    def update(self, record_id: int, **fields: Any) -> Record:
        """Update editable fields of a record and bump its modified time.

        Raises RecordNotFoundError if the id does not exist and
        ValueError for fields outside the editable set.
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited: {sorted(unknown)}")
        with self._lock:
            self._refresh()
            record = self._require(record_id)
            for name, value in fields.items():
                if name == "status":
                    value = RecordStatus(value)
                setattr(record, name, value)
            record.modified_at = datetime.now(tz=UTC)
            self._save()
        return record.model_copy(deep=True)

    def add_meta(self, record_id: int, key: str, value: str) -> None:
        """Attach ``key=value`` to a record.

        Re-attaching the same value is a no-op; a different value for an
        existing key raises AssociationImmutableError.
        """
        with self._lock:
            self._refresh()
            record = self._require(record_id)
            current = record.meta.get(key)
            if current == value:
                return
            if current is not None:
                raise AssociationImmutableError(
                    f"Record {record_id} already has {key}={current!r}"
                )
            record.meta[key] = value
            self._save()

    def delete(self, record_id: int) -> None:
        """Remove a record.

        Raises RecordNotFoundError if the id does not exist.
        """
        with self._lock:
            self._refresh()
            record = self._require(record_id)
            self._data.records.remove(record)
            self._save()

    # ── Read operations ──────────────────────────────────────────

    def get(self, record_id: int) -> Record | None:
        with self._lock:
            self._refresh()
            record = self._find_by_id(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def find(self, kind: str, meta_filter: dict[str, str]) -> _list[Record]:
        with self._lock:
            self._refresh()
            return [
                r.model_copy(deep=True)
                for r in self._data.records
                if r.kind == kind
                and all(r.meta.get(k) == v for k, v in meta_filter.items())
            ]

    def list(self, kind: str | None = None) -> _list[Record]:
        with self._lock:
            self._refresh()
            results = self._data.records
            if kind is not None:
                results = [r for r in results if r.kind == kind]
            return [r.model_copy(deep=True) for r in results]
