"""Exception hierarchy for archive page operations."""

from __future__ import annotations


class ArchivePagesError(Exception):
    """Base class for all archive page errors."""


class ArchivePageNotFoundError(ArchivePagesError):
    """No archive page is associated with the requested content type."""

    def __init__(self, type_id: str) -> None:
        super().__init__(f"No archive page for content type {type_id!r}")
        self.type_id = type_id


class RecordNotFoundError(ArchivePagesError, KeyError):
    """A record id is not present in the store."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"No record with id {record_id}")
        self.record_id = record_id

    def __str__(self) -> str:
        return str(self.args[0])


class PermissionDeniedError(ArchivePagesError):
    """The operator lacks the capability required for an action."""

    def __init__(self, permission: str, kind: str) -> None:
        super().__init__(f"Permission {permission!r} denied for kind {kind!r}")
        self.permission = permission
        self.kind = kind


class AssociationImmutableError(ArchivePagesError):
    """An archive page's content type association cannot be rewritten."""
