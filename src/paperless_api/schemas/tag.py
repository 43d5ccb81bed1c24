"""
Tags.
"""

from dataclasses import dataclass
from typing import Optional

from .coercion import as_bool, as_int, as_str, optional, require_object, required
from .correspondent import NameFilter
from .identifiers import TagId


@dataclass(frozen=True)
class Tag:
    """Tag as returned by the API."""

    id: TagId
    name: str
    slug: str = ""
    color: Optional[str] = None  # hex, e.g. "#a6cee3"
    text_color: Optional[str] = None
    match: str = ""
    matching_algorithm: Optional[int] = None
    is_insensitive: bool = False
    is_inbox_tag: bool = False
    document_count: Optional[int] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Tag":
        """Create from Paperless API response."""
        data = require_object(data, "tag")
        return cls(
            id=required(data, "id", TagId, "tag"),
            name=required(data, "name", as_str, "tag"),
            slug=optional(data, "slug", as_str, "tag", default=""),
            color=optional(data, "color", as_str, "tag"),
            text_color=optional(data, "text_color", as_str, "tag"),
            match=optional(data, "match", as_str, "tag", default=""),
            matching_algorithm=optional(data, "matching_algorithm", as_int, "tag"),
            is_insensitive=optional(data, "is_insensitive", as_bool, "tag", default=False),
            is_inbox_tag=optional(data, "is_inbox_tag", as_bool, "tag", default=False),
            document_count=optional(data, "document_count", as_int, "tag"),
        )


class TagFilter(NameFilter):
    """Filter used when listing tags."""
