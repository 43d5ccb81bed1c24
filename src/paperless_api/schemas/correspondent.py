"""
Correspondents: the person or organisation a document comes from or goes to
(a bank, a school, a friend, ...).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .coercion import as_bool, as_int, as_str, as_timestamp, optional, require_object, required
from .identifiers import CorrespondentId


@dataclass(frozen=True)
class Correspondent:
    """Correspondent as returned by the API."""

    id: CorrespondentId
    name: str
    slug: str = ""
    match: str = ""
    matching_algorithm: Optional[int] = None
    is_insensitive: bool = False
    document_count: Optional[int] = None
    last_correspondence: Optional[datetime] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "Correspondent":
        """Create from Paperless API response."""
        data = require_object(data, "correspondent")
        return cls(
            id=required(data, "id", CorrespondentId, "correspondent"),
            name=required(data, "name", as_str, "correspondent"),
            slug=optional(data, "slug", as_str, "correspondent", default=""),
            match=optional(data, "match", as_str, "correspondent", default=""),
            matching_algorithm=optional(data, "matching_algorithm", as_int, "correspondent"),
            is_insensitive=optional(data, "is_insensitive", as_bool, "correspondent", default=False),
            document_count=optional(data, "document_count", as_int, "correspondent"),
            last_correspondence=optional(
                data, "last_correspondence", as_timestamp, "correspondent"
            ),
        )


@dataclass
class NameFilter:
    """
    Case-insensitive name filter.

    Shared by every entity whose listing endpoint only filters by name.
    Unset fields are sent as empty parameters, which the server treats as
    "no constraint".
    """

    name_starts_with: Optional[str] = None
    name_ends_with: Optional[str] = None
    name_contains: Optional[str] = None
    name_is: Optional[str] = None

    def to_query_params(self) -> list[tuple[str, str]]:
        """Build query parameters for the listing endpoint."""
        return [
            ("name__istartswith", self.name_starts_with or ""),
            ("name__iendswith", self.name_ends_with or ""),
            ("name__icontains", self.name_contains or ""),
            ("name__iexact", self.name_is or ""),
        ]


class CorrespondentFilter(NameFilter):
    """Filter used when listing correspondents."""
