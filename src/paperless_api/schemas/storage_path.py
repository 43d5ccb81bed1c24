"""
Storage paths: templates deciding where the server files a document on disk.
"""

from dataclasses import dataclass
from typing import Optional

from .coercion import as_bool, as_int, as_str, optional, require_object, required
from .correspondent import NameFilter
from .identifiers import StoragePathId


@dataclass(frozen=True)
class StoragePath:
    """Storage path as returned by the API."""

    id: StoragePathId
    name: str
    slug: str = ""
    path: str = ""
    match: str = ""
    matching_algorithm: Optional[int] = None
    is_insensitive: bool = False
    document_count: Optional[int] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "StoragePath":
        """Create from Paperless API response."""
        data = require_object(data, "storage path")
        return cls(
            id=required(data, "id", StoragePathId, "storage path"),
            name=required(data, "name", as_str, "storage path"),
            slug=optional(data, "slug", as_str, "storage path", default=""),
            path=optional(data, "path", as_str, "storage path", default=""),
            match=optional(data, "match", as_str, "storage path", default=""),
            matching_algorithm=optional(data, "matching_algorithm", as_int, "storage path"),
            is_insensitive=optional(data, "is_insensitive", as_bool, "storage path", default=False),
            document_count=optional(data, "document_count", as_int, "storage path"),
        )


class StoragePathFilter(NameFilter):
    """Filter used when listing storage paths."""
