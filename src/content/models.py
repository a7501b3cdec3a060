"""Content domain models — pure Pydantic v2 data types.

A ``ContentType`` describes a kind of record registered with the host
platform; a ``Record`` is a single stored piece of content of some kind.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class RecordStatus(StrEnum):
    """Publication status of a record."""

    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISHED = "publish"


class ContentType(BaseModel):
    """A content type registered with the type catalog."""

    identifier: str
    singular_label: str
    plural_label: str = ""
    public: bool = True
    has_archive: bool = True
    archive_slug: str = ""
    show_ui: bool = True
    hierarchical: bool = False
    supports: list[str] = Field(default_factory=lambda: ["title", "editor"])
    # permission name -> required capability; None disables the permission
    capabilities: dict[str, str | None] = Field(default_factory=dict)


def _now() -> datetime:
    return datetime.now(tz=UTC)


class Record(BaseModel):
    """A stored content record.

    ``id`` is assigned by the store on creation. ``meta`` holds string
    metadata; archive pages carry their content type association there.
    """

    id: int
    kind: str
    title: str = ""
    body: str = ""
    excerpt: str = ""
    featured_image: str = ""
    author: str = ""
    status: RecordStatus = RecordStatus.DRAFT
    slug: str = ""
    meta: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_now)
    modified_at: datetime = Field(default_factory=_now)
