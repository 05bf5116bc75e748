"""Bookmark records, the store manager, and the generated menu."""

from .menu import MenuConflictError, MenuItem, MenuRegistry, MenuStats, build_menu
from .records import (
    BookmarkRecord,
    RecordFormatError,
    compress_preview,
    escape_label,
    format_record,
    parse_record,
    unescape_label,
)
from .store import BookmarkStore, BookmarkStoreError, StoredBookmark

__all__ = [
    "BookmarkRecord",
    "BookmarkStore",
    "BookmarkStoreError",
    "MenuConflictError",
    "MenuItem",
    "MenuRegistry",
    "MenuStats",
    "RecordFormatError",
    "StoredBookmark",
    "build_menu",
    "compress_preview",
    "escape_label",
    "format_record",
    "parse_record",
    "unescape_label",
]
