"""Content domain — generic records and their persistence.

Archive pages are ordinary records of a distinguished kind; this package
knows nothing about archive semantics beyond storing metadata.
"""

from archive_pages.content.models import ContentType, Record, RecordStatus
from archive_pages.content.store import STORE_FILENAME, JsonRecordStore, RecordStore

__all__ = [
    "STORE_FILENAME",
    "ContentType",
    "JsonRecordStore",
    "Record",
    "RecordStatus",
    "RecordStore",
]
